"""Project Configuration for the mock creator

Manages .tsmc/config.yml settings for mock location, indentation and the
transformer plugin. Values are read once and kept until reload() is called,
which hosts wire to their configuration-change notifications.
"""

import logging
from pathlib import Path

import yaml
from jsonschema import Draft202012Validator

from ts_mock_creator.core.errors import ConfigError
from ts_mock_creator.core.formatter import INDENT_UNITS

logger = logging.getLogger(__name__)

CONFIG_DIR = ".tsmc"
CONFIG_FILE = "config.yml"

CONFIG_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "mock_location": {"type": "string", "minLength": 1},
        "indent": {"enum": list(INDENT_UNITS)},
        "plugin_path": {"type": "string", "minLength": 1},
    },
    "required": ["mock_location", "indent", "plugin_path"],
    "additionalProperties": False,
}


class MockConfig:
    """Manages project configuration for the mock creator"""

    DEFAULT_CONFIG = {
        "mock_location": "../__mocks__",
        "indent": "  ",
        "plugin_path": f"{CONFIG_DIR}/parser.py",
    }

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.config_dir = self.base_dir / CONFIG_DIR
        self.config_file = self.config_dir / CONFIG_FILE
        self._values: dict | None = None

    def exists(self) -> bool:
        """Check if config file exists"""
        return self.config_file.exists()

    def load(self) -> dict:
        """Read config from disk, returning defaults if not exists"""
        merged = self.DEFAULT_CONFIG.copy()
        if self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse {self.config_file}: {e}") from e

            if config is None:
                config = {}
            if not isinstance(config, dict):
                raise ConfigError(f"{self.config_file} must contain a mapping")
            merged.update(config)

        self.validate(merged)
        return merged

    @staticmethod
    def validate(config: dict) -> None:
        """Raise ConfigError listing every schema violation"""
        validator = Draft202012Validator(CONFIG_SCHEMA)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
        if errors:
            messages = []
            for error in errors:
                location = ".".join(str(p) for p in error.path) or "config"
                messages.append(f"{location}: {error.message}")
            raise ConfigError("Invalid configuration: " + "; ".join(messages))

    @property
    def values(self) -> dict:
        if self._values is None:
            self._values = self.load()
        return self._values

    def reload(self) -> dict:
        """Re-read the config file, replacing the cached values"""
        self._values = self.load()
        logger.debug("Reloaded configuration from %s", self.config_file)
        return self._values

    def save(self, config: dict) -> None:
        """Save config to file"""
        self.validate(config)
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            yaml.dump(config, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        self._values = dict(config)

    def init(self, mock_location: str | None = None, indent: str | None = None,
             plugin_path: str | None = None) -> dict:
        """Initialize project config"""
        config = self.DEFAULT_CONFIG.copy()
        if mock_location:
            config["mock_location"] = mock_location
        if indent:
            config["indent"] = indent
        if plugin_path:
            config["plugin_path"] = plugin_path

        self.save(config)
        return config

    @property
    def mock_location(self) -> str:
        return self.values["mock_location"]

    @property
    def indent(self) -> str:
        return self.values["indent"]

    @property
    def plugin_file(self) -> Path:
        """Plugin module path, resolved against the project directory"""
        return self.base_dir / self.values["plugin_path"]
