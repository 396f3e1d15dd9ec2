"""Tests for mock file assembly"""

import pytest

from ts_mock_creator.core.assembler import MockFile, assemble
from ts_mock_creator.core.errors import FormatError


IMPORTS = [
    'import Invoice from "../types"',
    'import { Status } from "../enums"',
]


class TestMockFile:
    """MockFile.render() layout"""

    def test_render_without_header(self):
        mock = MockFile("Invoice", "{ id: 1, status: Status.OPEN }", IMPORTS)
        assert mock.render() == (
            'import Invoice from "../types"\n'
            'import { Status } from "../enums"\n'
            "\n"
            "export const mockInvoice: Invoice = {\n"
            "  id: 1,\n"
            "  status: Status.OPEN\n"
            "}\n"
        )

    def test_render_with_header(self):
        mock = MockFile("Invoice", "{}", IMPORTS[:1], header="/* eslint-disable */")
        assert mock.render() == (
            "/* eslint-disable */\n"
            'import Invoice from "../types"\n'
            "\n"
            "export const mockInvoice: Invoice = {}\n"
        )

    def test_named_import_stays_on_one_line(self):
        text = MockFile("Status", "Status.OPEN", ['import { Status } from "./enums"']).render()
        assert text.splitlines()[0] == 'import { Status } from "./enums"'

    def test_indent_unit_applies_to_expression(self):
        text = MockFile("A", "{ a: 1 }", ['import { A } from "./a"']).render("\t")
        assert text.endswith("export const mockA: A = {\n\ta: 1\n}\n")

    def test_statement(self):
        mock = MockFile("Foo", "1")
        assert mock.statement() == "export const mockFoo: Foo = 1"

    def test_unbalanced_expression_raises(self):
        with pytest.raises(FormatError):
            MockFile("A", "{ a: 1", []).render()


def test_assemble_shorthand():
    assert assemble("A", "1", ['import A from "./a"'], header="// h") == (
        '// h\nimport A from "./a"\n\nexport const mockA: A = 1\n'
    )
