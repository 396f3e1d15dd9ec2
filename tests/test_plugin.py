"""Tests for transformer plugin loading"""

import types

import pytest

from ts_mock_creator.config.plugin import Plugin, load_plugin, plugin_from_module, write_plugin_template
from ts_mock_creator.core.errors import NotFoundError, PluginError


VALID_PLUGIN = '''
def is_amount(type_, field_name):
    return field_name == "amount"


transformers = [
    (is_amount, lambda type_, field_name: "42"),
]

do_not_resolve = ["Money"]


def header():
    return "// mocks"
'''


def module(**attrs):
    mod = types.ModuleType("fake_plugin")
    for key, value in attrs.items():
        setattr(mod, key, value)
    return mod


class TestLoadPlugin:
    """load_plugin() from a file"""

    def test_valid_plugin(self, tmp_path):
        path = tmp_path / "parser.py"
        path.write_text(VALID_PLUGIN)
        plugin = load_plugin(path)

        assert len(plugin.transformers) == 1
        match, produce = plugin.transformers[0]
        assert match({}, "amount") is True
        assert produce({}, "amount") == "42"
        assert plugin.do_not_resolve == ["Money"]
        assert plugin.render_header() == "// mocks"
        assert plugin.path == path

    def test_missing_file(self, tmp_path):
        with pytest.raises(NotFoundError, match="transformer module"):
            load_plugin(tmp_path / "parser.py")

    def test_import_failure(self, tmp_path):
        path = tmp_path / "parser.py"
        path.write_text("raise RuntimeError('boom')\n")
        with pytest.raises(PluginError, match="boom"):
            load_plugin(path)

    def test_template_is_a_valid_plugin(self, tmp_path):
        path = tmp_path / ".tsmc" / "parser.py"
        assert write_plugin_template(path) is True
        assert write_plugin_template(path) is False

        plugin = load_plugin(path)
        match, produce = plugin.transformers[0]
        assert match({"kind": "primitive", "name": "string"}, "id")
        assert produce({"kind": "primitive", "name": "string"}, "id") == '"ID-001"'
        assert plugin.render_header().startswith("//")


class TestPluginShape:
    """plugin_from_module() validation"""

    def test_minimal_module(self):
        plugin = plugin_from_module(module(transformers=[]))
        assert plugin.transformers == []
        assert plugin.do_not_resolve == []
        assert plugin.render_header() is None

    def test_missing_transformers(self):
        with pytest.raises(PluginError, match="transformers"):
            plugin_from_module(module())

    def test_rule_must_be_pair_of_callables(self):
        with pytest.raises(PluginError, match=r"transformers\[1\]"):
            plugin_from_module(module(transformers=[
                (lambda t, f: True, lambda t, f: "1"),
                ("string", "value"),
            ]))

    def test_header_must_be_callable(self):
        with pytest.raises(PluginError, match="header"):
            plugin_from_module(module(transformers=[], header="// text"))

    def test_do_not_resolve_must_be_names(self):
        with pytest.raises(PluginError, match="do_not_resolve"):
            plugin_from_module(module(transformers=[], do_not_resolve=[1, 2]))

    def test_header_must_return_string(self):
        plugin = Plugin(header=lambda: 3)
        with pytest.raises(PluginError, match="string"):
            plugin.render_header()

    def test_failing_header_wrapped(self):
        def header():
            raise RuntimeError("boom")

        with pytest.raises(PluginError, match=r"header\(\) failed: boom"):
            Plugin(header=header).render_header()
