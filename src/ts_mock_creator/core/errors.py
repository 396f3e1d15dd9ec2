"""Error types and generation result for the mock creator."""

from dataclasses import dataclass, field as dataclass_field


class MockCreatorError(Exception):
    """Base class for every fatal generation error."""


class NotFoundError(MockCreatorError):
    """Plugin module, declaration or identifier could not be found."""


class UserCancelled(MockCreatorError):
    """Interactive selection was abandoned. Callers treat this as a no-op."""


class InvalidDestinationError(MockCreatorError):
    """Destination path exists but is not a directory."""


class FormatError(MockCreatorError):
    """Literal expression cannot be pretty-printed (unbalanced braces, bad indent)."""


class ResolveError(MockCreatorError):
    """A declaration resolver lookup failed."""


class ConfigError(MockCreatorError):
    """Project configuration is invalid."""


class WriteError(MockCreatorError):
    """The mock file could not be written."""


class PluginError(MockCreatorError):
    """Transformer plugin module is malformed or its code failed."""


@dataclass
class LookupFailure:
    """Enum reference that could not be mapped to a source file"""

    reference: str  # Enum name as returned by the enum scan
    reason: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {"reference": self.reference, "reason": self.reason}


@dataclass
class GenerationResult:
    """Result of a single mock generation."""
    identifier: str
    output_path: str
    imports: list[str] = dataclass_field(default_factory=list)
    diagnostics: list[LookupFailure] = dataclass_field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "success": True,
            "identifier": self.identifier,
            "output_path": self.output_path,
            "imports": list(self.imports),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
