"""Logging setup for openapi-typegen.

Modules obtain a named logger through :func:`get_logger`; only entry points
(the CLI) call :func:`configure_logging`, which is safe to call repeatedly.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "openapi_typegen"

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_HANDLER_TAG_ATTR = "_openapi_typegen_handler"


def _parse_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package's logger hierarchy."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: str | int | None = "WARNING",
    use_rich: bool = True,
    console: Console | None = None,
) -> logging.Logger:
    """Attach a single handler to the package logger.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level.
        use_rich: Render records through rich; plain stderr output otherwise.
        console: Console to render rich records on (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level_int = _parse_level(level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_TAG_ATTR, False):
            logger.removeHandler(handler)
            handler.close()

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s | %(name)s | %(message)s")
        )

    setattr(handler, _HANDLER_TAG_ATTR, True)
    handler.setLevel(level_int)
    logger.addHandler(handler)
    logger.setLevel(level_int)
    logger.propagate = False
    return logger
