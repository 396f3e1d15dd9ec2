"""Structural type -> single-line TypeScript literal.

Transformer rules are tried first for every node; the first rule whose
``match(type, field_name)`` is true produces the literal text. Nodes without a
matching rule fall back to the defaults below. Objects are rendered as
``{ a: 1, b: "b" }`` so the pretty-printer can reflow them.
"""

import json
from typing import Any, Sequence

from ts_mock_creator.core.errors import PluginError
from ts_mock_creator.core.interfaces import TransformerRule

PRIMITIVE_DEFAULTS = {
    "number": "0",
    "bigint": "0n",
    "boolean": "true",
    "null": "null",
    "undefined": "undefined",
    "void": "undefined",
    "any": "null",
    "unknown": "null",
    "never": "null",
    "object": "{}",
    "symbol": "Symbol()",
    "Date": "new Date(0)",
}


def rewrite(type_: Any, transformers: Sequence[TransformerRule] = ()) -> str:
    """Render ``type_`` as a TypeScript literal expression"""
    return _Rewriter(transformers).value(type_, None)


class _Rewriter:
    def __init__(self, transformers: Sequence[TransformerRule]):
        self.transformers = list(transformers)

    def value(self, node: dict, field_name: str | None) -> str:
        for index, (match, produce) in enumerate(self.transformers):
            try:
                if not match(node, field_name):
                    continue
                text = produce(node, field_name)
            except Exception as e:
                raise PluginError(f"transformers[{index}] failed on field {field_name!r}: {e}") from e
            if not isinstance(text, str):
                raise PluginError(
                    f"transformers[{index}] must produce a string, got {type(text).__name__}"
                )
            return text

        kind = node.get("kind")
        if kind == "primitive":
            return self._primitive(node["name"], field_name)
        if kind == "literal":
            return _to_js_value(node["value"])
        if kind == "object":
            return self._object(node)
        if kind == "array":
            return f"[{self.value(node['element'], field_name)}]"
        if kind == "tuple":
            return "[" + ", ".join(self.value(e, field_name) for e in node["elements"]) + "]"
        if kind == "union":
            return self.value(_pick_union_member(node["types"]), field_name)
        if kind == "enum":
            members = node.get("members") or []
            if not members:
                return "null"
            return f"{node['name']}.{members[0]}" if members[0].isidentifier() \
                else f'{node["name"]}[{json.dumps(members[0])}]'
        if kind == "function":
            return "() => undefined"
        # unresolved reference
        return "{}"

    def _primitive(self, name: str, field_name: str | None) -> str:
        if name == "string":
            return json.dumps(field_name or "string")
        return PRIMITIVE_DEFAULTS.get(name, "null")

    def _object(self, node: dict) -> str:
        fields = node.get("fields", [])
        if not fields:
            return "{}"
        items = []
        for f in fields:
            key = f["name"] if f["name"].isidentifier() else json.dumps(f["name"])
            items.append(f"{key}: {self.value(f['type'], f['name'])}")
        return "{ " + ", ".join(items) + " }"


def _pick_union_member(types: list[dict]) -> dict:
    """First member that is not null/undefined"""
    for t in types:
        if not (t.get("kind") == "primitive" and t.get("name") in ("null", "undefined")):
            return t
    return types[0]


def _to_js_value(val: Any) -> str:
    """Convert Python value to JavaScript value"""
    if val is None:
        return "null"
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, str):
        return json.dumps(val)
    return str(val)
