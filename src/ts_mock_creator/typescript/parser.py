"""TypeScript declaration parser (lightweight)

Regex tokenizer plus a recursive-descent parser covering the part of the
TypeScript type language mocks need: interfaces, type aliases, enums, object
literals, arrays, tuples, unions, literals and references. It is not a type
checker; anything it does not understand becomes a reference.

Structural types are plain dicts keyed by "kind":

    {"kind": "primitive", "name": "string"}
    {"kind": "literal", "value": "OPEN"}
    {"kind": "object", "fields": [{"name": "id", "type": {...}, "optional": False}]}
    {"kind": "array", "element": {...}}
    {"kind": "tuple", "elements": [...]}
    {"kind": "union", "types": [...]}
    {"kind": "intersection", "types": [...]}
    {"kind": "enum", "name": "Status", "members": ["OPEN", "CLOSED"]}
    {"kind": "reference", "name": "Customer"}
    {"kind": "function"}
"""

import re
from dataclasses import dataclass, field
from typing import Any

TOKEN_PATTERN = re.compile(r"""
    (?P<skip>\s+|//[^\n]*|/\*.*?\*/)
  | (?P<string>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)
  | (?P<number>\d+(?:\.\d+)?)
  | (?P<name>[A-Za-z_$][\w$]*)
  | (?P<punct>=>|\.\.\.|[{}\[\]()<>;:,|&?=.*\-+!@#%^~/\\])
""", re.VERBOSE | re.DOTALL)

PRIMITIVES = {
    "string", "number", "boolean", "bigint", "symbol", "null", "undefined",
    "any", "unknown", "never", "void", "object", "Date",
}
ARRAY_GENERICS = {"Array", "ReadonlyArray", "Set"}
TRANSPARENT_GENERICS = {"Partial", "Required", "Readonly", "NonNullable"}


@dataclass
class Token:
    kind: str
    value: str


@dataclass
class ImportBinding:
    """Local name bound by an import statement"""
    specifier: str  # Module specifier as written, e.g. "./types"
    imported: str   # Exported name in that module, "default" for default imports


@dataclass
class TypeDeclaration:
    name: str
    kind: str  # "interface" | "type" | "enum"
    type: dict[str, Any]
    extends: list[str] = field(default_factory=list)
    exported: bool = False


@dataclass
class ModuleInfo:
    """Top-level declarations and imports of one source file"""
    path: str
    declarations: dict[str, TypeDeclaration] = field(default_factory=dict)
    imports: dict[str, ImportBinding] = field(default_factory=dict)
    default_export: str | None = None


class ParseError(Exception):
    pass


def tokenize(text: str) -> list[Token]:
    tokens = []
    for match in TOKEN_PATTERN.finditer(text):
        kind = match.lastgroup
        if kind == "skip":
            continue
        tokens.append(Token(kind, match.group(kind)))
    return tokens


def _unquote(literal: str) -> str:
    body = literal[1:-1]
    return re.sub(r"\\(.)", r"\1", body)


class TypeParser:
    """Recursive-descent parser over a token list"""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    # --- token helpers ---

    def peek(self, offset: int = 0) -> Token | None:
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def at(self, value: str, offset: int = 0) -> bool:
        token = self.peek(offset)
        return token is not None and token.value == value and token.kind in ("punct", "name")

    def next(self) -> Token:
        token = self.peek()
        if token is None:
            raise ParseError("Unexpected end of input")
        self.pos += 1
        return token

    def expect(self, value: str) -> Token:
        token = self.next()
        if token.value != value:
            raise ParseError(f"Expected '{value}' but found '{token.value}'")
        return token

    def accept(self, value: str) -> bool:
        if self.at(value):
            self.pos += 1
            return True
        return False

    def skip_balanced(self, open_: str, close: str) -> None:
        """Skip from an opening token past its matching closing token"""
        depth = 0
        while self.peek() is not None:
            token = self.next()
            if token.value == open_:
                depth += 1
            elif token.value == close:
                depth -= 1
                if depth == 0:
                    return
        raise ParseError(f"Unbalanced '{open_}'")

    def _matching_index(self, open_: str, close: str) -> int:
        depth = 0
        for index in range(self.pos, len(self.tokens)):
            value = self.tokens[index].value
            if value == open_:
                depth += 1
            elif value == close:
                depth -= 1
                if depth == 0:
                    return index
        raise ParseError(f"Unbalanced '{open_}'")

    # --- type expressions ---

    def parse_type(self) -> dict:
        self.accept("|")
        types = [self.parse_intersection()]
        while self.accept("|"):
            types.append(self.parse_intersection())
        if len(types) == 1:
            return types[0]
        return {"kind": "union", "types": types}

    def parse_intersection(self) -> dict:
        self.accept("&")
        types = [self.parse_postfix()]
        while self.accept("&"):
            types.append(self.parse_postfix())
        if len(types) == 1:
            return types[0]
        return {"kind": "intersection", "types": types}

    def parse_postfix(self) -> dict:
        node = self.parse_primary()
        while self.at("[") and self.at("]", 1):
            self.pos += 2
            node = {"kind": "array", "element": node}
        return node

    def parse_primary(self) -> dict:
        token = self.next()

        if token.kind == "string":
            return {"kind": "literal", "value": _unquote(token.value)}
        if token.kind == "number":
            return {"kind": "literal", "value": _number(token.value)}
        if token.value == "-" and self.peek() is not None and self.peek().kind == "number":
            return {"kind": "literal", "value": -_number(self.next().value)}

        if token.value == "{":
            return self.parse_object_body()
        if token.value == "[":
            return self.parse_tuple_body()
        if token.value == "(":
            return self.parse_parenthesized()

        if token.kind == "name":
            return self.parse_named(token.value)

        raise ParseError(f"Unexpected token '{token.value}' in type")

    def parse_named(self, name: str) -> dict:
        if name in ("true", "false"):
            return {"kind": "literal", "value": name == "true"}
        if name == "readonly":
            return self.parse_postfix()
        if name in ("keyof", "typeof", "unique"):
            self.parse_postfix()
            return {"kind": "primitive", "name": "string"}

        while self.at(".") and self.peek(1) is not None and self.peek(1).kind == "name":
            self.pos += 1
            name = f"{name}.{self.next().value}"

        args = []
        if self.at("<"):
            self.expect("<")
            args.append(self.parse_type())
            while self.accept(","):
                args.append(self.parse_type())
            self.expect(">")

        if name in PRIMITIVES and not args:
            return {"kind": "primitive", "name": name}
        if name in ARRAY_GENERICS and args:
            return {"kind": "array", "element": args[0]}
        if name in TRANSPARENT_GENERICS and args:
            return args[0]
        if name == "Record":
            return {"kind": "object", "fields": []}
        if name == "Promise" and args:
            return args[0]
        return {"kind": "reference", "name": name}

    def parse_parenthesized(self) -> dict:
        # self.pos is just past "("
        self.pos -= 1
        close = self._matching_index("(", ")")
        after = self.tokens[close + 1] if close + 1 < len(self.tokens) else None
        if after is not None and after.value == "=>":
            self.pos = close + 2
            self.parse_type()
            return {"kind": "function"}
        self.pos += 1
        node = self.parse_type()
        self.expect(")")
        return node

    def parse_tuple_body(self) -> dict:
        elements = []
        while not self.at("]"):
            self.accept("...")
            if self.peek(1) is not None and self.peek(1).value in (":", "?") and self.peek().kind == "name":
                self.pos += 1
                self.accept("?")
                self.expect(":")
            elements.append(self.parse_type())
            if not self.accept(","):
                break
        self.expect("]")
        return {"kind": "tuple", "elements": elements}

    def parse_object_body(self) -> dict:
        """Parse members up to the closing brace (opening brace already consumed)"""
        fields = []
        while not self.at("}"):
            if self.peek() is None:
                raise ParseError("Unterminated object type")
            if self.accept(";") or self.accept(","):
                continue

            if self.at("readonly") and self.peek(1) is not None and self.peek(1).value not in (":", "?", "("):
                self.pos += 1

            if self.at("["):
                # index signature: [key: string]: T
                self.skip_balanced("[", "]")
                self.accept("?")
                self.expect(":")
                self.parse_type()
                continue

            token = self.next()
            name = _unquote(token.value) if token.kind == "string" else token.value
            optional = self.accept("?")

            if self.at("(") or self.at("<"):
                # method signature
                if self.at("<"):
                    self.skip_balanced("<", ">")
                self.skip_balanced("(", ")")
                if self.accept(":"):
                    self.parse_type()
                fields.append({"name": name, "type": {"kind": "function"}, "optional": optional})
                continue

            self.expect(":")
            fields.append({"name": name, "type": self.parse_type(), "optional": optional})

        self.expect("}")
        return {"kind": "object", "fields": fields}


def _number(text: str) -> int | float:
    return float(text) if "." in text else int(text)


class ModuleParser(TypeParser):
    """Collects the top-level declarations and imports of a source file"""

    def parse(self, path: str) -> ModuleInfo:
        module = ModuleInfo(path=path)
        depth = 0

        while self.peek() is not None:
            token = self.peek()
            if token.value == "{":
                depth += 1
            elif token.value == "}":
                depth -= 1
            elif depth == 0 and token.kind == "name":
                if self._statement(module):
                    continue
            self.pos += 1

        return module

    def _statement(self, module: ModuleInfo) -> bool:
        """Parse a top-level statement at the cursor. Returns False if not recognized."""
        start = self.pos
        try:
            if self.accept("import"):
                recognized = self._import(module)
            elif self.accept("export"):
                recognized = self._export(module)
            else:
                recognized = self._declaration(module, exported=False)
        except ParseError:
            recognized = False
        if not recognized:
            self.pos = start
        return recognized

    def _import(self, module: ModuleInfo) -> bool:
        if self.peek() is not None and self.peek().kind == "string":
            self.pos += 1  # side-effect import
            return True
        if self.at("type") and not self.at("from", 1) and not self.at(",", 1):
            self.pos += 1

        bindings: list[tuple[str, str]] = []
        if self.peek() is not None and self.peek().kind == "name" and not self.at("from"):
            bindings.append((self.next().value, "default"))
            self.accept(",")
        if self.accept("*"):
            self.expect("as")
            self.next()
        elif self.at("{"):
            bindings.extend(self._named_bindings())

        self.expect("from")
        specifier = _unquote(self.next().value)
        self.accept(";")

        for local, imported in bindings:
            module.imports[local] = ImportBinding(specifier, imported)
        return True

    def _named_bindings(self) -> list[tuple[str, str]]:
        """``{ A, type B, C as D }`` -> [(local, imported), ...]"""
        self.expect("{")
        bindings = []
        while not self.accept("}"):
            if self.accept(","):
                continue
            if self.at("type") and self.peek(1) is not None and self.peek(1).kind == "name" \
                    and not self.at("as", 1):
                self.pos += 1
            imported = self.next().value
            local = imported
            if self.accept("as"):
                local = self.next().value
            bindings.append((local, imported))
        return bindings

    def _export(self, module: ModuleInfo) -> bool:
        if self.accept("default"):
            if self.peek() is not None and self.peek().kind == "name" and self.peek().value not in (
                    "interface", "enum", "class", "function", "abstract", "async", "const", "declare"):
                module.default_export = self.next().value
                self.accept(";")
                return True
            known = set(module.declarations)
            if self._declaration(module, exported=True):
                added = [n for n in module.declarations if n not in known]
                if added:
                    module.default_export = added[0]
                return True
            return False

        if self.at("{"):
            bindings = self._named_bindings()
            if self.accept("from"):
                specifier = _unquote(self.next().value)
                for local, imported in bindings:
                    module.imports[local] = ImportBinding(specifier, imported)
                    if local == "default":
                        module.default_export = local
            else:
                for exported_as, local in bindings:
                    if exported_as == "default":
                        module.default_export = local
            self.accept(";")
            return True

        return self._declaration(module, exported=True)

    def _declaration(self, module: ModuleInfo, exported: bool) -> bool:
        self.accept("declare")
        self.accept("const")

        if self.accept("interface"):
            name = self.next().value
            if self.at("<"):
                self.skip_balanced("<", ">")
            extends = []
            if self.accept("extends"):
                extends.append(self.parse_named(self.next().value))
                while self.accept(","):
                    extends.append(self.parse_named(self.next().value))
            self.expect("{")
            body = self.parse_object_body()
            module.declarations[name] = TypeDeclaration(
                name, "interface", body,
                extends=[e["name"] for e in extends if e["kind"] == "reference"],
                exported=exported,
            )
            return True

        if self.at("type") and self.peek(1) is not None and self.peek(1).kind == "name":
            self.pos += 1
            name = self.next().value
            if self.at("<"):
                self.skip_balanced("<", ">")
            self.expect("=")
            node = self.parse_type()
            self.accept(";")
            module.declarations[name] = TypeDeclaration(name, "type", node, exported=exported)
            return True

        if self.accept("enum"):
            name = self.next().value
            self.expect("{")
            members = []
            while not self.accept("}"):
                if self.accept(","):
                    continue
                token = self.next()
                members.append(_unquote(token.value) if token.kind == "string" else token.value)
                if self.accept("="):
                    while not (self.at(",") or self.at("}")):
                        self.next()
            node = {"kind": "enum", "name": name, "members": members}
            module.declarations[name] = TypeDeclaration(name, "enum", node, exported=exported)
            return True

        return False


def parse_module(text: str, path: str) -> ModuleInfo:
    """Parse the source text of ``path``"""
    return ModuleParser(tokenize(text)).parse(path)


def parse_type(text: str) -> dict:
    """Parse a standalone type expression, e.g. ``{ id: string; tags: string[] }``"""
    parser = TypeParser(tokenize(text))
    node = parser.parse_type()
    if parser.peek() is not None:
        raise ParseError(f"Unexpected trailing token '{parser.peek().value}'")
    return node
