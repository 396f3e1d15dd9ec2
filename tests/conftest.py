"""Shared fixtures: a fake declaration resolver and a sample TypeScript project."""

import pytest

from ts_mock_creator.config.plugin import Plugin
from ts_mock_creator.config.project import MockConfig
from ts_mock_creator.core.errors import ResolveError
from ts_mock_creator.core.models import Declaration
from ts_mock_creator.core.pipeline import MockPipeline


class FakeResolver:
    """In-memory resolver. A declaration's ``type`` doubles as its rewritten literal."""

    def __init__(self, declarations=(), extra=(), enum_refs=(), no_source=()):
        self.declarations = list(declarations)
        self.by_name = {d.identifier: d for d in [*declarations, *extra]}
        self.enum_refs = list(enum_refs)
        self.no_source = set(no_source)
        self.calls = []

    def list_declarations(self):
        return list(self.declarations)

    def resolve(self, identifier):
        self.calls.append(identifier)
        if identifier not in self.by_name:
            raise ResolveError(f"Declaration '{identifier}' not found")
        return self.by_name[identifier]

    def get_source_path_of(self, declaration):
        if declaration.identifier in self.no_source:
            return None
        return declaration.source_path

    def scan_enum_references(self, type_):
        return list(self.enum_refs)


def echo_rewriter(type_, transformers):
    return type_


def make_pipeline(base_dir, resolver, plugin=None):
    def factory(source_file, break_on_unresolved_imports=True, do_not_resolve=()):
        return resolver
    return MockPipeline(MockConfig(base_dir), plugin or Plugin(), factory, echo_rewriter)


@pytest.fixture
def invoice_resolver(tmp_path):
    """Default-exported Invoice in src/types.ts referencing the Status enum of src/enums.ts"""
    src = tmp_path / "src"
    invoice = Declaration(
        identifier="Invoice",
        default=True,
        source_path=str(src / "types.ts"),
        type="{ id: 1, status: Status.OPEN }",
    )
    status = Declaration(identifier="Status", default=False, source_path=str(src / "enums.ts"))
    return FakeResolver([invoice], extra=[status], enum_refs=[{"name": "Status"}])


ENUMS_TS = '''export enum Status {
  OPEN = "OPEN",
  CLOSED = "CLOSED",
}
'''

TYPES_TS = '''import { Status } from "./enums"

export interface Customer {
  name: string
}

export default interface Invoice {
  id: string
  amount: number
  status: Status
  customer: Customer
  tags?: string[]
}
'''


@pytest.fixture
def ts_project(tmp_path):
    """Project with src/types.ts and src/enums.ts"""
    src = tmp_path / "src"
    src.mkdir()
    (src / "enums.ts").write_text(ENUMS_TS, encoding="utf-8")
    (src / "types.ts").write_text(TYPES_TS, encoding="utf-8")
    return tmp_path
