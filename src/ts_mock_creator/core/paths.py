"""Path arithmetic between a generated mock file and the files it imports from.

Everything here is lexical: no file is required to exist.
"""

import os
import re
from pathlib import Path

DECLARATION_SUFFIX = ".d.ts"


def strip_extension(path: str) -> str:
    """Drop the file extension, treating ``.d.ts`` as a single extension"""
    if path.endswith(DECLARATION_SUFFIX):
        return path[:-len(DECLARATION_SUFFIX)]
    root, _ext = os.path.splitext(path)
    return root


def relative_import_path(generated_file: str | Path, source_file: str | Path) -> str:
    """Module path from ``generated_file``'s directory to ``source_file``.

    Args:
        generated_file: Path of the file being generated
        source_file: Path of the file declaring the imported type

    Returns:
        Forward-slash path without extension, always starting with ``./`` or ``../``
        e.g. "../types/foo"
    """
    target = strip_extension(os.fspath(source_file))
    start = os.path.dirname(os.fspath(generated_file)) or os.curdir

    relative = os.path.relpath(target, start).replace("\\", "/")
    if not relative.startswith(("./", "../")):
        relative = f"./{relative}"
    return relative


def capitalize(name: str) -> str:
    """Upper-case the first word character of ``name``"""
    return re.sub(r"^\w", lambda m: m.group(0).upper(), name)


def mock_file_path(source_file: str | Path, mock_location: str) -> Path:
    """Location of the mock generated for ``source_file``.

    ``mock_location`` is taken relative to the source file path itself, so
    ``src/types.ts`` with ``../__mocks__`` -> ``src/__mocks__/mockTypes.ts``
    """
    source = Path(source_file)
    target = source / mock_location / f"mock{capitalize(source.name)}"
    return Path(os.path.normpath(target))
