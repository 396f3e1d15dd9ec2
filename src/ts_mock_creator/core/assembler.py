"""Assembles the text of a generated mock file."""

from dataclasses import dataclass, field as dataclass_field

from ts_mock_creator.core.formatter import DEFAULT_INDENT, MockFormatter


@dataclass
class MockFile:
    """Contents of one generated mock file.

    Rendered layout:

        <header>
        <import clause 1>
        <import clause 2>

        export const mock<Identifier>: <Identifier> = <expression>
    """

    identifier: str
    expression: str
    imports: list[str] = dataclass_field(default_factory=list)
    header: str | None = None

    def statement(self, expression: str | None = None) -> str:
        """The exported mock constant"""
        if expression is None:
            expression = self.expression
        return f"export const mock{self.identifier}: {self.identifier} = {expression}"

    def render(self, indent: str = DEFAULT_INDENT) -> str:
        """Render the file, pretty-printing only the literal expression"""
        expression = MockFormatter(indent).format(self.expression)

        text = f"{self.header}\n" if self.header else ""
        text += "\n".join(self.imports)
        text += "\n\n"
        text += self.statement(expression)
        return text + "\n"


def assemble(identifier: str, expression: str, imports: list[str],
             header: str | None = None, indent: str = DEFAULT_INDENT) -> str:
    """Shorthand for ``MockFile(...).render(indent)``"""
    return MockFile(identifier, expression, list(imports), header).render(indent)
