"""Data model shared by the generation pipeline."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Declaration:
    """A named type declaration produced by the resolver.

    ``type`` is the resolved structural type. The pipeline never looks inside it,
    it only hands it to the rewrite engine and the enum scan.
    """

    identifier: str
    default: bool = False
    source_path: str | None = None
    type: Any = None


@dataclass(frozen=True)
class ImportRequirement:
    """One declaration the generated file must import"""

    identifier: str
    default: bool
    source_path: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.source_path, self.identifier)

    @classmethod
    def from_declaration(cls, declaration: Declaration, source_path: str) -> "ImportRequirement":
        return cls(
            identifier=declaration.identifier,
            default=declaration.default,
            source_path=source_path,
        )
