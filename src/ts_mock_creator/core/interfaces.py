"""Contracts of the external collaborators consumed by the pipeline."""

from typing import Any, Callable, Protocol, Sequence

from ts_mock_creator.core.models import Declaration


# (match, produce) pairs: match(type, field_name) -> bool, produce(type, field_name) -> str
TransformerRule = tuple[Callable[[Any, str | None], bool], Callable[[Any, str | None], str]]


class DeclarationResolver(Protocol):
    """Resolver bound to one source file."""

    def list_declarations(self) -> list[Declaration]:
        """Top-level type declarations of the source file, in file order."""
        ...

    def resolve(self, identifier: str) -> Declaration:
        """Declaration with its structural type fully resolved. Raises ResolveError."""
        ...

    def get_source_path_of(self, declaration: Declaration) -> str | None:
        ...

    def scan_enum_references(self, type_: Any) -> list[dict]:
        """Enum types reachable from ``type_`` as ``{"name": ...}`` dicts."""
        ...


class ResolverFactory(Protocol):
    def __call__(self, source_file: str, break_on_unresolved_imports: bool = True,
                 do_not_resolve: Sequence[str] = ()) -> DeclarationResolver:
        ...


class RewriteEngine(Protocol):
    def __call__(self, type_: Any, transformers: Sequence[TransformerRule]) -> str:
        ...
