"""Project configuration and transformer plugins."""

from ts_mock_creator.config.plugin import Plugin, load_plugin
from ts_mock_creator.config.project import MockConfig

__all__ = ["MockConfig", "Plugin", "load_plugin"]
