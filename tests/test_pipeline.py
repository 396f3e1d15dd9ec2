"""Tests for the generation pipeline using a fake resolver"""

import pytest

from conftest import FakeResolver, make_pipeline
from ts_mock_creator.config.plugin import Plugin
from ts_mock_creator.core.errors import (
    FormatError,
    InvalidDestinationError,
    NotFoundError,
    PluginError,
    ResolveError,
    UserCancelled,
)
from ts_mock_creator.core.models import Declaration


EXPECTED_INVOICE_MOCK = (
    'import Invoice from "../types"\n'
    'import { Status } from "../enums"\n'
    "\n"
    "export const mockInvoice: Invoice = {\n"
    "  id: 1,\n"
    "  status: Status.OPEN\n"
    "}\n"
)


def all_files(root):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


class TestGenerate:
    """MockPipeline.generate()"""

    def test_writes_mock_file(self, tmp_path, invoice_resolver):
        pipeline = make_pipeline(tmp_path, invoice_resolver)
        result = pipeline.generate(tmp_path / "src" / "types.ts", "Invoice")

        output = tmp_path / "src" / "__mocks__" / "mockTypes.ts"
        assert result.output_path == str(output)
        assert output.read_text(encoding="utf-8") == EXPECTED_INVOICE_MOCK
        assert result.imports == EXPECTED_INVOICE_MOCK.splitlines()[:2]
        assert result.diagnostics == []

    def test_header_from_plugin(self, tmp_path, invoice_resolver):
        plugin = Plugin(header=lambda: "// generated")
        pipeline = make_pipeline(tmp_path, invoice_resolver, plugin)
        pipeline.generate(tmp_path / "src" / "types.ts", "Invoice")

        text = (tmp_path / "src" / "__mocks__" / "mockTypes.ts").read_text(encoding="utf-8")
        assert text == "// generated\n" + EXPECTED_INVOICE_MOCK

    def test_regenerating_overwrites(self, tmp_path, invoice_resolver):
        pipeline = make_pipeline(tmp_path, invoice_resolver)
        pipeline.generate(tmp_path / "src" / "types.ts", "Invoice")
        pipeline.generate(tmp_path / "src" / "types.ts", "Invoice")
        assert all_files(tmp_path) == ["src/__mocks__/mockTypes.ts"]

    def test_missing_enum_is_reported_not_fatal(self, tmp_path):
        invoice = Declaration("Invoice", True, str(tmp_path / "src" / "types.ts"), "{ id: 1 }")
        resolver = FakeResolver([invoice], enum_refs=[{"name": "Ghost"}])
        result = make_pipeline(tmp_path, resolver).generate(tmp_path / "src" / "types.ts", "Invoice")

        assert [d.reference for d in result.diagnostics] == ["Ghost"]
        assert result.to_dict()["diagnostics"][0]["reference"] == "Ghost"
        assert len(result.imports) == 1

    def test_unknown_identifier_writes_nothing(self, tmp_path, invoice_resolver):
        pipeline = make_pipeline(tmp_path, invoice_resolver)
        with pytest.raises(ResolveError):
            pipeline.generate(tmp_path / "src" / "types.ts", "Nope")
        assert all_files(tmp_path) == []

    def test_invalid_destination_writes_nothing(self, tmp_path, invoice_resolver):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "__mocks__").write_text("in the way")
        pipeline = make_pipeline(tmp_path, invoice_resolver)

        with pytest.raises(InvalidDestinationError):
            pipeline.generate(tmp_path / "src" / "types.ts", "Invoice")
        assert all_files(tmp_path) == ["src/__mocks__"]

    def test_format_error_raised_before_write(self, tmp_path):
        broken = Declaration("Broken", False, str(tmp_path / "types.ts"), "{ a: 1")
        pipeline = make_pipeline(tmp_path, FakeResolver([broken]))
        with pytest.raises(FormatError):
            pipeline.generate(tmp_path / "types.ts", "Broken")
        assert all_files(tmp_path) == []

    def test_failing_header_writes_nothing(self, tmp_path, invoice_resolver):
        def header():
            raise RuntimeError("boom")

        pipeline = make_pipeline(tmp_path, invoice_resolver, Plugin(header=header))
        with pytest.raises(PluginError, match="boom"):
            pipeline.generate(tmp_path / "src" / "types.ts", "Invoice")
        assert all_files(tmp_path) == []

    def test_custom_mock_location(self, tmp_path, invoice_resolver):
        pipeline = make_pipeline(tmp_path, invoice_resolver)
        pipeline.config.init(mock_location="../../mocks")
        result = pipeline.generate(tmp_path / "src" / "types.ts", "Invoice")

        assert result.output_path == str(tmp_path / "mocks" / "mockTypes.ts")
        assert result.imports[0] == 'import Invoice from "../src/types"'


class TestDeclarations:
    """Listing and interactive selection"""

    def test_list_declarations(self, tmp_path, invoice_resolver):
        pipeline = make_pipeline(tmp_path, invoice_resolver)
        assert pipeline.list_declarations(tmp_path / "src" / "types.ts") == ["Invoice"]

    def test_no_declarations_is_not_found(self, tmp_path):
        pipeline = make_pipeline(tmp_path, FakeResolver())
        with pytest.raises(NotFoundError, match="No type declarations"):
            pipeline.generate_interactive(tmp_path / "types.ts", lambda names: names[0])
        assert all_files(tmp_path) == []

    def test_interactive_choice(self, tmp_path, invoice_resolver):
        offered = []

        def choose(names):
            offered.extend(names)
            return "Invoice"

        pipeline = make_pipeline(tmp_path, invoice_resolver)
        result = pipeline.generate_interactive(tmp_path / "src" / "types.ts", choose)
        assert offered == ["Invoice"]
        assert result.identifier == "Invoice"

    def test_cancelled_selection(self, tmp_path, invoice_resolver):
        pipeline = make_pipeline(tmp_path, invoice_resolver)
        with pytest.raises(UserCancelled):
            pipeline.generate_interactive(tmp_path / "src" / "types.ts", lambda names: None)
        assert all_files(tmp_path) == []
