"""Transformer plugin loading.

A plugin is a Python module (``.tsmc/parser.py`` by default) exposing:

    transformers   list of (match, produce) callables
    header()       optional, returns text placed above the imports
    do_not_resolve optional list of type names the resolver must leave alone
"""

import hashlib
import importlib.util
import logging
from dataclasses import dataclass, field as dataclass_field
from pathlib import Path
from types import ModuleType
from typing import Callable

from ts_mock_creator.core.errors import NotFoundError, PluginError
from ts_mock_creator.core.interfaces import TransformerRule

logger = logging.getLogger(__name__)

PLUGIN_TEMPLATE = '''"""Transformer rules for generated mocks."""


def is_id(type_, field_name):
    return type_.get("kind") == "primitive" and type_.get("name") == "string" and field_name == "id"


transformers = [
    (is_id, lambda type_, field_name: '"ID-001"'),
]

do_not_resolve = []


def header():
    return "// Generated mock. Edit the transformer rules in .tsmc/parser.py instead."
'''


@dataclass
class Plugin:
    """Validated contents of a transformer plugin module"""

    transformers: list[TransformerRule] = dataclass_field(default_factory=list)
    header: Callable[[], str] | None = None
    do_not_resolve: list[str] = dataclass_field(default_factory=list)
    path: Path | None = None

    def render_header(self) -> str | None:
        if self.header is None:
            return None
        try:
            text = self.header()
        except Exception as e:
            raise PluginError(f"header() failed: {e}") from e
        if not isinstance(text, str):
            raise PluginError(f"header() must return a string, got {type(text).__name__}")
        return text


def load_plugin(path: Path) -> Plugin:
    """Import the plugin module at ``path`` and validate its shape.

    Raises:
        NotFoundError: If no module exists at ``path``
        PluginError: If the module fails to import or is malformed
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"Could not find any transformer module at {path}")

    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:12]
    spec = importlib.util.spec_from_file_location(f"tsmc_plugin_{digest}", path)
    if spec is None or spec.loader is None:
        raise PluginError(f"Cannot load {path} as a Python module")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise PluginError(f"Failed to import {path}: {e}") from e

    logger.debug("Loaded transformer plugin %s", path)
    return plugin_from_module(module, path)


def plugin_from_module(module: ModuleType, path: Path | None = None) -> Plugin:
    """Validate a loaded module against the plugin contract"""
    where = path or getattr(module, "__name__", "plugin")

    transformers = getattr(module, "transformers", None)
    if not isinstance(transformers, (list, tuple)):
        raise PluginError(f"{where}: 'transformers' must be a list of (match, produce) pairs")

    rules = []
    for i, rule in enumerate(transformers):
        if not (isinstance(rule, (list, tuple)) and len(rule) == 2
                and callable(rule[0]) and callable(rule[1])):
            raise PluginError(f"{where}: transformers[{i}] must be a (match, produce) pair of callables")
        rules.append((rule[0], rule[1]))

    header = getattr(module, "header", None)
    if header is not None and not callable(header):
        raise PluginError(f"{where}: 'header' must be a function returning a string")

    do_not_resolve = getattr(module, "do_not_resolve", None) or []
    if not isinstance(do_not_resolve, (list, tuple)) or not all(isinstance(n, str) for n in do_not_resolve):
        raise PluginError(f"{where}: 'do_not_resolve' must be a list of type names")

    return Plugin(
        transformers=rules,
        header=header,
        do_not_resolve=list(do_not_resolve),
        path=Path(path) if path else None,
    )


def write_plugin_template(path: Path) -> bool:
    """Create a starter plugin at ``path`` unless one exists. Returns True if written."""
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(PLUGIN_TEMPLATE, encoding="utf-8")
    return True
