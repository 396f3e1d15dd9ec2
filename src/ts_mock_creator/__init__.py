"""TypeScript Mock Creator - generates mock values for TypeScript type declarations."""

__version__ = "0.2.0"

from ts_mock_creator.config.project import MockConfig
from ts_mock_creator.core.errors import GenerationResult, MockCreatorError
from ts_mock_creator.core.pipeline import MockPipeline

__all__ = [
    "MockConfig",
    "MockPipeline",
    "GenerationResult",
    "MockCreatorError",
]
