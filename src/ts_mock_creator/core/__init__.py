"""Core generation components."""

from ts_mock_creator.core.assembler import MockFile, assemble
from ts_mock_creator.core.errors import (
    ConfigError,
    FormatError,
    GenerationResult,
    InvalidDestinationError,
    LookupFailure,
    MockCreatorError,
    NotFoundError,
    PluginError,
    ResolveError,
    UserCancelled,
    WriteError,
)
from ts_mock_creator.core.formatter import MockFormatter, prettify
from ts_mock_creator.core.imports import aggregate_imports, render_import
from ts_mock_creator.core.models import Declaration, ImportRequirement
from ts_mock_creator.core.paths import mock_file_path, relative_import_path
from ts_mock_creator.core.writer import assure_dir, write_mock

__all__ = [
    "MockFile",
    "assemble",
    "MockFormatter",
    "prettify",
    "aggregate_imports",
    "render_import",
    "Declaration",
    "ImportRequirement",
    "mock_file_path",
    "relative_import_path",
    "assure_dir",
    "write_mock",
    "GenerationResult",
    "LookupFailure",
    "MockCreatorError",
    "NotFoundError",
    "UserCancelled",
    "InvalidDestinationError",
    "FormatError",
    "ResolveError",
    "ConfigError",
    "PluginError",
    "WriteError",
]
