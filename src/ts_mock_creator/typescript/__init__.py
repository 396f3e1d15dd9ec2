"""Bundled TypeScript collaborators

A lightweight declaration resolver and rewrite engine used by the CLI and the
tool server. Any object honoring the interfaces in core.interfaces can replace them.
"""

from ts_mock_creator.typescript.parser import parse_module, parse_type
from ts_mock_creator.typescript.resolver import TypeScriptResolver
from ts_mock_creator.typescript.rewriter import rewrite

__all__ = [
    "TypeScriptResolver",
    "rewrite",
    "parse_module",
    "parse_type",
]
