"""Pretty-printer for single-line literal expressions.

Reflows ``{ a: 1, b: { c: 2 } }`` into

    {
      a: 1,
      b: {
        c: 2
      }
    }

The scan reacts to three triggers only: ``{`` followed by whitespace, ``,``
followed by whitespace and whitespace followed by ``}``. Everything else,
including quoted strings, is copied verbatim.
"""

from ts_mock_creator.core.errors import FormatError

INDENT_UNITS = ("  ", "    ", "\t")
DEFAULT_INDENT = "  "
QUOTES = "\"'`"


class MockFormatter:
    """Depth-tracking formatter for mock literal expressions"""

    def __init__(self, indent: str = DEFAULT_INDENT):
        if indent not in INDENT_UNITS:
            raise FormatError(f"Unsupported indent unit {indent!r}, expected one of {list(INDENT_UNITS)!r}")
        self.indent = indent

    def format(self, text: str) -> str:
        """Reflow ``text``. Raises FormatError when the braces do not balance."""
        out: list[str] = []
        depth = 0
        pos = 0
        end = len(text)

        while pos < end:
            char = text[pos]

            if char in QUOTES:
                close = _string_end(text, pos)
                out.append(text[pos:close])
                pos = close
                continue

            if char in "{,":
                after = _whitespace_end(text, pos + 1)
                if after > pos + 1:
                    if after < end and text[after] == "}":
                        if char == "{":
                            # "{ }" is an empty literal
                            out.append("{}")
                        else:
                            depth = self._close(depth, after)
                            out.append(",\n" + self.indent * depth + "}")
                        pos = after + 1
                        continue
                    if char == "{":
                        depth += 1
                    out.append(char + "\n" + self.indent * depth)
                    pos = after
                    continue

            elif char.isspace():
                after = _whitespace_end(text, pos)
                if after < end and text[after] == "}":
                    depth = self._close(depth, after)
                    out.append("\n" + self.indent * depth + "}")
                    pos = after + 1
                else:
                    out.append(text[pos:after])
                    pos = after
                continue

            out.append(char)
            pos += 1

        if depth != 0:
            raise FormatError(f"Unbalanced braces: {depth} left open at end of expression")
        return "".join(out)

    @staticmethod
    def _close(depth: int, offset: int) -> int:
        depth -= 1
        if depth < 0:
            raise FormatError(f"Unbalanced '}}' at offset {offset}")
        return depth


def _whitespace_end(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _string_end(text: str, start: int) -> int:
    """Index just past the string literal opened at ``start`` (or end of text)"""
    quote = text[start]
    pos = start + 1
    while pos < len(text):
        if text[pos] == "\\":
            pos += 2
            continue
        if text[pos] == quote:
            return pos + 1
        pos += 1
    return len(text)


def prettify(text: str, indent: str = DEFAULT_INDENT) -> str:
    """Format ``text`` with a fresh MockFormatter"""
    return MockFormatter(indent).format(text)
