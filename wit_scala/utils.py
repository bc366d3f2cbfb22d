"""Utility functions for loading resolver output.

This module loads the JSON document printed by ``wasm-tools component wit
--json`` from a file, standard input or a URL, and converts it into a
schema graph.
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .codegen.core.loader import SchemaLoadError, convert_resolve
from .codegen.core.schema import SchemaGraph
from .logging_config import get_logger

logger = get_logger(__name__)

# Path that selects standard input
STDIN_PATH = "-"


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SchemaLoadError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load resolver output from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded resolver output from {file_path}")
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise SchemaLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except UnicodeDecodeError as e:
        logger.error(f"Invalid UTF-8 in file {file_path}: {e}")
        raise SchemaLoadError(f"Invalid UTF-8 in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise SchemaLoadError(f"Error reading file {file_path}: {e}") from e


def load_json_from_stream(stream: TextIO | None = None) -> tuple[str, Any]:
    """Load JSON data from a text stream, standard input by default.

    Raises:
        SchemaLoadError: If the stream does not hold valid JSON.
    """
    stream = stream or sys.stdin
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON on standard input: {e}")
        raise SchemaLoadError(f"Invalid JSON on standard input: {e}") from e
    except UnicodeDecodeError as e:
        logger.error(f"Invalid UTF-8 on standard input: {e}")
        raise SchemaLoadError(f"Invalid UTF-8 on standard input: {e}") from e
    logger.info("Loaded resolver output from standard input")
    return "<stdin>", data


def load_json_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        SchemaLoadError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Attempting to load resolver output from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise SchemaLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
        logger.info(f"Loaded resolver output from {url}")
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise SchemaLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise SchemaLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise SchemaLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}")
        raise SchemaLoadError(f"Request error for URL {url}: {e}") from e
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise SchemaLoadError(f"Invalid JSON response from URL {url}: {e}") from e


def load_schema(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, SchemaGraph]:
    """Load resolver output from a file, standard input or URL.

    Args:
        file_path: Path to the JSON document, ``-`` for standard input
            (mutually exclusive with url).
        url: URL to fetch the document from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, schema graph).

    Raises:
        SchemaLoadError: If neither or both sources are given, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise SchemaLoadError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise SchemaLoadError("Cannot specify both file_path and url")

    if url:
        source, data = load_json_from_url(url, timeout)
    elif str(file_path) == STDIN_PATH:
        source, data = load_json_from_stream()
    else:
        source, data = load_json_from_file(file_path)

    graph = convert_resolve(data)
    logger.debug(
        f"Schema has {len(graph.packages)} packages, {len(graph.interfaces)} "
        f"interfaces, {len(graph.types)} types and {len(graph.worlds)} worlds"
    )
    return source, graph
