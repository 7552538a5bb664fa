"""Utility functions for loading schemas and writing generated artifacts.

This module provides functions for loading XSD documents from files and URLs
with proper error handling, and for writing output files atomically.
"""

import os
import tempfile
from pathlib import Path
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaLoaderError(Exception):
    """Custom exception for schema loading errors."""

    pass


def is_valid_url(source: str) -> bool:
    """Check whether a source string is a well-formed http(s) URL."""
    parsed_url = urlparse(str(source))
    return parsed_url.scheme in ("http", "https") and bool(parsed_url.netloc)


def load_schema_from_file(file_path: str | Path) -> bytes:
    """Load raw schema bytes from a local file.

    Args:
        file_path: Path to the XSD file.

    Returns:
        File content.

    Raises:
        SchemaLoaderError: If the file is missing or cannot be read.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load schema from file: %s", file_path)

    if not file_path.is_file():
        logger.error("File not found: %s", file_path)
        raise SchemaLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".xsd":
        logger.warning("File does not have .xsd extension: %s", file_path)

    try:
        data = file_path.read_bytes()
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise SchemaLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded schema from %s", file_path)
    return data


def load_schema_from_url(url: str, timeout: int = 30) -> bytes:
    """Load raw schema bytes from a URL.

    Args:
        url: URL to fetch the schema from.
        timeout: Request timeout in seconds.

    Raises:
        SchemaLoaderError: If the URL is invalid or the request fails.
    """
    logger.debug("Attempting to load schema from URL: %s", url)

    if not is_valid_url(url):
        logger.error("Invalid URL format: %s", url)
        raise SchemaLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise SchemaLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise SchemaLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error("HTTP error %s for URL: %s", status, url)
        raise SchemaLoaderError(f"HTTP error {status} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise SchemaLoaderError(f"Request error for URL {url}: {e}") from e

    content_type = response.headers.get("content-type", "").lower()
    if "xml" not in content_type and not url.endswith(".xsd"):
        logger.warning("URL %s does not have an XML content type: %s", url, content_type)

    logger.info("Loaded schema from %s", url)
    return response.content


def load_schema(source: str | Path, timeout: int = 30) -> bytes:
    """Load schema bytes from a URL or a file path.

    The well-formed-URL check decides which strategy is used.
    """
    if is_valid_url(str(source)):
        return load_schema_from_url(str(source), timeout)
    return load_schema_from_file(source)


def prepare_output_dir(output: str | Path) -> Path:
    """Create the parent directory of an output base name if needed."""
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def artifact_path(base: str | Path, extension: str) -> Path:
    """``<base><extension>`` unless ``base`` already carries the extension."""
    path = Path(base)
    if path.suffix == extension:
        return path
    return path.with_name(path.name + extension)


def write_artifact(base: str | Path, extension: str, content: str) -> Path:
    """Write one generated artifact, all or nothing.

    Content goes to a temporary file beside the target which then replaces
    it. On failure the temporary file is removed and the error propagates.

    Returns:
        Path of the written artifact.
    """
    path = artifact_path(base, extension)
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(temp_name, 0o644)
        os.replace(temp_name, path)
    except BaseException:
        logger.error("Failed to write %s", path)
        Path(temp_name).unlink(missing_ok=True)
        raise

    logger.debug("Wrote %d characters to %s", len(content), path)
    return path
