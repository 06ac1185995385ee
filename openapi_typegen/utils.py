"""Utility functions for loading OpenAPI documents.

This module provides functions for loading JSON or YAML documents from files
and URLs with proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import urlparse

import requests
import yaml

from .logging_config import get_logger

logger = get_logger(__name__)

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


class DocumentLoaderError(Exception):
    """Custom exception for document loading errors."""

    pass


def parse_document(text: str, source: str, is_json: bool = False) -> Dict[str, Any]:
    """Parse document text.

    YAML is a superset of JSON, so anything not known to be JSON goes
    through the YAML parser.

    Args:
        text: Raw document text.
        source: Description of where the text came from, for messages.
        is_json: Parse strictly as JSON.

    Returns:
        The parsed document object.

    Raises:
        DocumentLoaderError: If the text is not valid or not an object.
    """
    try:
        data = json.loads(text) if is_json else yaml.safe_load(text)
    except json.JSONDecodeError as e:
        raise DocumentLoaderError(f"Invalid JSON in {source}: {e}") from e
    except yaml.YAMLError as e:
        raise DocumentLoaderError(f"Invalid YAML in {source}: {e}") from e

    if not isinstance(data, dict):
        raise DocumentLoaderError(f"Document in {source} must be an object, got {type(data).__name__}")
    if "openapi" not in data:
        logger.warning("Document in %s has no 'openapi' version field", source)
    return data


def load_document_from_file(file_path: Union[str, Path]) -> Tuple[str, Dict[str, Any]]:
    """Load a document from a local file.

    Args:
        file_path: Path to the JSON or YAML file.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        FileNotFoundError: If file doesn't exist.
        DocumentLoaderError: If file cannot be read or parsed.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load document from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in JSON_SUFFIXES + YAML_SUFFIXES:
        logger.warning("File does not have a JSON or YAML extension: %s", file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e, exc_info=True)
        raise DocumentLoaderError(f"Error reading file {file_path}: {e}") from e

    data = parse_document(text, str(file_path), is_json=suffix in JSON_SUFFIXES)
    logger.info("Successfully loaded document from %s", file_path)
    return str(file_path), data


def load_document_from_url(url: str, timeout: int = 30) -> Tuple[str, Dict[str, Any]]:
    """Load a document from a URL.

    Args:
        url: URL to fetch the document from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        DocumentLoaderError: If URL is invalid, request fails, or the
            response cannot be parsed.
    """
    logger.debug("Attempting to load document from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise DocumentLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise DocumentLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise DocumentLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise DocumentLoaderError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e, exc_info=True)
        raise DocumentLoaderError(f"Request error for URL {url}: {e}") from e

    content_type = response.headers.get("content-type", "").lower()
    is_json = "json" in content_type or parsed_url.path.lower().endswith(JSON_SUFFIXES)

    data = parse_document(response.text, url, is_json=is_json)
    logger.info("Successfully loaded document from %s", url)
    return url, data


def load_document(
    file_path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    timeout: int = 30,
) -> Tuple[str, Dict[str, Any]]:
    """Load a document from either a file or URL.

    Args:
        file_path: Path to local file (mutually exclusive with url).
        url: URL to fetch from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        DocumentLoaderError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise DocumentLoaderError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise DocumentLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_document_from_file(file_path)
    return load_document_from_url(url, timeout)
