"""Writes generated mock files to disk."""

import logging
from pathlib import Path

from ts_mock_creator.core.errors import InvalidDestinationError, WriteError

logger = logging.getLogger(__name__)


def assure_dir(path: Path) -> None:
    """Create ``path`` recursively unless it already is a directory.

    Raises:
        InvalidDestinationError: If ``path`` exists and is not a directory
    """
    if path.exists():
        if not path.is_dir():
            raise InvalidDestinationError(f"Path is not a folder: {path}")
        return
    logger.debug("Creating mock directory %s", path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except (FileExistsError, NotADirectoryError) as e:
        # An ancestor of path is a regular file
        raise InvalidDestinationError(f"Path is not a folder: {e.filename or path}") from e


def write_mock(path: Path, content: str) -> Path:
    """Write ``content`` to ``path`` as UTF-8, replacing any existing file.

    Returns the written path so the caller can show it.

    Raises:
        InvalidDestinationError: If the parent path is not a directory
        WriteError: If the file itself cannot be written
    """
    path = Path(path)
    assure_dir(path.parent)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise WriteError(f"Could not write {path}: {e}") from e
    logger.info("Wrote mock file %s", path)
    return path
