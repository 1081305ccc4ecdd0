"""Loading of VPP API definition files.

This module reads ``*.api.json`` files, either one at a time or by walking a
directory tree, and turns them into :class:`ApiFile` models.
"""

import json
from pathlib import Path
from typing import Dict

from .codegen.core.schema import (
    ApiFile,
    ApiType,
    Message,
    SchemaError,
    parse_api_file,
    parse_message,
    parse_type,
)
from .logging_config import get_logger

logger = get_logger(__name__)


class ApiLoaderError(Exception):
    """Exception raised when an API definition cannot be read or parsed."""

    pass


def _read_text(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ApiLoaderError(f"Error reading {file_path}: {e}") from e


def load_api_file(file_path: str | Path) -> ApiFile:
    """Load one API definition file.

    Args:
        file_path: Path to the ``*.api.json`` file.

    Returns:
        Parsed API file, with ``path`` set to ``file_path``.

    Raises:
        ApiLoaderError: If the file cannot be read or is not a valid definition.
    """
    file_path = Path(file_path)
    logger.debug("Loading API file: %s", file_path)

    if not file_path.is_file():
        raise ApiLoaderError(f"File not found: {file_path}")

    text = _read_text(file_path)
    try:
        return parse_api_file(text, str(file_path))
    except SchemaError as e:
        raise ApiLoaderError(f"Error loading {file_path}: {e}") from e


def load_tree(root: str | Path) -> Dict[str, ApiFile]:
    """Load every API definition below ``root``.

    Directories are walked recursively with entries in name order. Files that
    fail to load are reported and skipped; they never stop the walk.

    Args:
        root: Directory to walk.

    Returns:
        Loaded files keyed by full path, in walk order.

    Raises:
        ApiLoaderError: If ``root`` is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise ApiLoaderError(f"Not a directory: {root}")

    api_files: Dict[str, ApiFile] = {}
    _walk(root, api_files)
    logger.info("Loaded %d API definition files from %s", len(api_files), root)
    return api_files


def _walk(directory: Path, api_files: Dict[str, ApiFile]) -> None:
    logger.debug("Parse tree: %s", directory)
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        logger.error("Error listing %s: %s", directory, e)
        return

    for entry in entries:
        logger.debug("Entry: %s", entry)
        if entry.is_file():
            try:
                api_files[str(entry)] = load_api_file(entry)
            except ApiLoaderError as e:
                logger.error("%s", e)
        elif entry.is_dir():
            _walk(entry, api_files)


def load_single_type(file_path: str | Path) -> ApiType:
    """Load a file holding one ``types`` entry, e.g. ``["name", [...], ...]``."""
    return _load_definition(file_path, parse_type)


def load_single_message(file_path: str | Path) -> Message:
    """Load a file holding one ``messages`` entry."""
    return _load_definition(file_path, parse_message)


def _load_definition(file_path, parse):
    file_path = Path(file_path)
    if not file_path.is_file():
        raise ApiLoaderError(f"File not found: {file_path}")

    try:
        return parse(json.loads(_read_text(file_path)))
    except json.JSONDecodeError as e:
        raise ApiLoaderError(f"Invalid JSON in {file_path}: {e}") from e
    except SchemaError as e:
        raise ApiLoaderError(f"Error loading {file_path}: {e}") from e
