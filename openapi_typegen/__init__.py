"""
openapi-typegen: type naming and recursion detection for OpenAPI documents.
"""

from .codegen import GenerationResult, generate_from_document, get_generator
from .logging_config import configure_logging, get_logger
from .utils import DocumentLoaderError, load_document

__version__ = "0.1.0"

__all__ = [
    "DocumentLoaderError",
    "GenerationResult",
    "configure_logging",
    "generate_from_document",
    "get_generator",
    "get_logger",
    "load_document",
]
