"""TypeScript declaration resolver (lightweight)

Resolves a declaration's structural type by following relative imports
between source files. Package imports are left as references.
"""

import logging
import os
from pathlib import Path
from typing import Any, Sequence

from ts_mock_creator.core.errors import ResolveError
from ts_mock_creator.core.models import Declaration
from ts_mock_creator.typescript.parser import ModuleInfo, ParseError, TypeDeclaration, parse_module

logger = logging.getLogger(__name__)

EXTENSIONS = (".ts", ".tsx", ".d.ts")


def resolve_specifier(importing_file: str, specifier: str) -> str | None:
    """File a relative module specifier points to, or None for packages and missing files"""
    if not specifier.startswith("."):
        return None

    base = os.path.normpath(os.path.join(os.path.dirname(importing_file), specifier))
    if base.endswith(".js"):
        base = base[:-3]

    candidates = [base] if base.endswith(EXTENSIONS) else []
    candidates += [base + ext for ext in EXTENSIONS]
    candidates += [os.path.join(base, "index" + ext) for ext in EXTENSIONS]

    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    return None


class TypeScriptResolver:
    """Resolver bound to a single TypeScript source file.

    Args:
        source_file: File whose declarations are listed and resolved
        break_on_unresolved_imports: Raise ResolveError when an imported type's
            module cannot be found instead of leaving a reference
        do_not_resolve: Type names always left as references
    """

    def __init__(self, source_file: str, break_on_unresolved_imports: bool = True,
                 do_not_resolve: Sequence[str] = ()):
        self.source_file = os.path.abspath(source_file)
        self.break_on_unresolved_imports = break_on_unresolved_imports
        self.do_not_resolve = set(do_not_resolve)
        self._modules: dict[str, ModuleInfo] = {}
        # Declarations met while resolving, by name: (origin file, declaration)
        self._seen: dict[str, tuple[str, TypeDeclaration]] = {}

    # --- DeclarationResolver ---

    def list_declarations(self) -> list[Declaration]:
        module = self._module(self.source_file)
        return [
            Declaration(
                identifier=name,
                default=module.default_export == name,
                source_path=self.source_file,
                type=decl.type,
            )
            for name, decl in module.declarations.items()
        ]

    def resolve(self, identifier: str) -> Declaration:
        found = self._lookup(identifier, self.source_file)
        if found is None and identifier in self._seen:
            found = self._seen[identifier]
        if found is None:
            raise ResolveError(f"Declaration '{identifier}' not found from {self.source_file}")

        origin, decl = found
        resolved = self._resolve_declaration(decl, origin, stack=())
        return Declaration(
            identifier=decl.name,
            default=self._module(origin).default_export == decl.name,
            source_path=origin,
            type=resolved,
        )

    def get_source_path_of(self, declaration: Declaration) -> str | None:
        if declaration.source_path:
            return declaration.source_path
        found = self._seen.get(declaration.identifier)
        return found[0] if found else None

    def scan_enum_references(self, type_: Any) -> list[dict]:
        refs: list[dict] = []
        names: set[str] = set()

        def walk(node: Any) -> None:
            if isinstance(node, dict):
                if node.get("kind") == "enum" and node.get("name") not in names:
                    names.add(node["name"])
                    refs.append({"name": node["name"]})
                for value in node.values():
                    walk(value)
            elif isinstance(node, list):
                for item in node:
                    walk(item)

        walk(type_)
        return refs

    # --- internals ---

    def _module(self, path: str) -> ModuleInfo:
        if path not in self._modules:
            try:
                text = Path(path).read_text(encoding="utf-8")
            except OSError as e:
                raise ResolveError(f"Cannot read {path}: {e}") from e
            try:
                self._modules[path] = parse_module(text, path)
            except ParseError as e:
                raise ResolveError(f"Cannot parse {path}: {e}") from e
            logger.debug("Parsed %s (%d declarations)", path, len(self._modules[path].declarations))
        return self._modules[path]

    def _lookup(self, name: str, path: str, depth: int = 0) -> tuple[str, TypeDeclaration] | None:
        """Find the declaration ``name`` refers to inside ``path``, following imports"""
        if depth > 32:
            return None
        module = self._module(path)

        if name in module.declarations:
            return path, module.declarations[name]

        binding = module.imports.get(name)
        if binding is None:
            return None

        target = resolve_specifier(path, binding.specifier)
        if target is None:
            if binding.specifier.startswith(".") and self.break_on_unresolved_imports:
                raise ResolveError(f"Could not resolve import of '{name}' from '{binding.specifier}' in {path}")
            logger.debug("Leaving '%s' unresolved (import from '%s')", name, binding.specifier)
            return None

        imported = binding.imported
        if imported == "default":
            imported = self._module(target).default_export
            if imported is None:
                return None
        return self._lookup(imported, target, depth + 1)

    def _resolve_declaration(self, decl: TypeDeclaration, origin: str, stack: tuple) -> dict:
        self._seen.setdefault(decl.name, (origin, decl))
        key = (origin, decl.name)
        if key in stack:
            return {"kind": "reference", "name": decl.name}
        stack = stack + (key,)

        if decl.kind == "enum":
            return dict(decl.type)

        node = self._resolve_type(decl.type, origin, stack)
        if decl.kind == "interface" and decl.extends:
            bases = [self._resolve_type({"kind": "reference", "name": base}, origin, stack)
                     for base in decl.extends]
            node = _merge_objects(bases + [node])
        return node

    def _resolve_type(self, node: dict, path: str, stack: tuple) -> dict:
        kind = node.get("kind")

        if kind == "reference":
            return self._resolve_reference(node["name"], path, stack)
        if kind == "object":
            return {
                "kind": "object",
                "fields": [
                    {**f, "type": self._resolve_type(f["type"], path, stack)}
                    for f in node["fields"]
                ],
            }
        if kind == "array":
            return {"kind": "array", "element": self._resolve_type(node["element"], path, stack)}
        if kind == "tuple":
            return {"kind": "tuple", "elements": [self._resolve_type(e, path, stack) for e in node["elements"]]}
        if kind == "union":
            return {"kind": "union", "types": [self._resolve_type(t, path, stack) for t in node["types"]]}
        if kind == "intersection":
            return _merge_objects([self._resolve_type(t, path, stack) for t in node["types"]])
        return node

    def _resolve_reference(self, name: str, path: str, stack: tuple) -> dict:
        head, _, member = name.partition(".")
        if head in self.do_not_resolve or name in self.do_not_resolve:
            return {"kind": "reference", "name": name}

        found = self._lookup(head, path)
        if found is None:
            return {"kind": "reference", "name": name}

        origin, decl = found
        resolved = self._resolve_declaration(decl, origin, stack)
        if member and resolved.get("kind") == "enum":
            # Enum member type, e.g. Status.OPEN
            return {**resolved, "members": [member]}
        return resolved


def _merge_objects(nodes: list[dict]) -> dict:
    """Merge object types, later fields overriding earlier ones"""
    objects = [n for n in nodes if n.get("kind") == "object"]
    if not objects:
        return nodes[0]

    merged: dict[str, dict] = {}
    for obj in objects:
        for f in obj["fields"]:
            merged[f["name"]] = f
    return {"kind": "object", "fields": list(merged.values())}
