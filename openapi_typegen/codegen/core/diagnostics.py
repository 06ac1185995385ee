"""
Diagnostics emitted during generation.

Recoverable problems (such as unsupported schemas) are collected as
diagnostics instead of aborting the run.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from ...logging_config import get_logger

logger = get_logger(__name__)


class Severity(Enum):
    NOTE = "note"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    Severity.NOTE: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    context: Dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        text = f"{self.severity.value}: {self.message}"
        if self.context:
            pairs = ", ".join(f"{key}={value}" for key, value in sorted(self.context.items()))
            text += f" [{pairs}]"
        return text


class DiagnosticCollector:
    """Keeps diagnostics in emission order and logs each one."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic):
        self.diagnostics.append(diagnostic)
        logger.log(_LOG_LEVELS[diagnostic.severity], "%s", diagnostic)

    def note(self, message: str, **context: str):
        self.emit(Diagnostic(Severity.NOTE, message, context))

    def warning(self, message: str, **context: str):
        self.emit(Diagnostic(Severity.WARNING, message, context))

    def emit_unsupported(self, feature: str, found_in: str):
        """Report a skipped, unsupported document feature."""
        self.warning(f"Feature \"{feature}\" is not supported, skipping", foundIn=found_in)

    def emit_unsupported_schema(self, reason, schema_kind: str, found_in: str):
        """Report a schema skipped because the support classifier rejected it."""
        self.warning(
            f"Schema \"{schema_kind}\" is not supported, reason: \"{reason}\", skipping",
            foundIn=found_in,
        )

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    def __len__(self) -> int:
        return len(self.diagnostics)
