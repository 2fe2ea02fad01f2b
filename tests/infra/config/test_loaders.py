"""
Tests for config/loaders.py.

Tests key functionality including:
- JSON, YAML, TOML and Python loaders
- Empty and non-mapping files
- Loader registry lookup order
"""

from pathlib import Path

import pytest

from cmdinfra.app.errors import ConfigLoadError
from cmdinfra.config.loaders import (
    ConfigLoader,
    ConfigLoaderRegistry,
    JsonLoader,
    PythonLoader,
    TomlLoader,
    YamlLoader,
)

# =============================================================================
# Test Loaders
# =============================================================================


@pytest.mark.unit
class TestLoaders:
    """Test individual file format loaders."""

    def test_json(self, temp_dir):
        path = temp_dir / "app.json"
        path.write_text('{"server": {"port": 8080}}')

        assert JsonLoader().load(path) == {"server": {"port": 8080}}

    @pytest.mark.parametrize("suffix", [".yml", ".yaml", ".YAML"])
    def test_yaml(self, temp_dir, suffix):
        path = temp_dir / f"app{suffix}"
        path.write_text("server:\n  port: 8080\ntags: [a, b]\n")

        assert YamlLoader().can_load(path)
        assert YamlLoader().load(path) == {"server": {"port": 8080}, "tags": ["a", "b"]}

    def test_empty_yaml(self, temp_dir):
        path = temp_dir / "empty.yaml"
        path.write_text("")

        assert YamlLoader().load(path) == {}

    def test_toml(self, temp_dir):
        path = temp_dir / "app.toml"
        path.write_text('[server]\nhost = "h"\nport = 1\n')

        assert TomlLoader().load(path) == {"server": {"host": "h", "port": 1}}

    def test_python(self, temp_dir):
        path = temp_dir / "app.py"
        path.write_text("PORT = 2\nconfig = {'server': {'port': PORT * 4}}\n")

        assert PythonLoader().load(path) == {"server": {"port": 8}}

    def test_python_without_config_variable(self, temp_dir):
        path = temp_dir / "app.py"
        path.write_text("settings = {}\n")

        with pytest.raises(ConfigLoadError, match="no 'config' variable"):
            PythonLoader().load(path)

    def test_python_raising(self, temp_dir):
        path = temp_dir / "app.py"
        path.write_text("raise ValueError('oops')\n")

        with pytest.raises(ConfigLoadError, match="ValueError: oops"):
            PythonLoader().load(path)

    def test_non_mapping_top_level(self, temp_dir):
        path = temp_dir / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigLoadError, match="expected a mapping, got list"):
            JsonLoader().load(path)

    def test_parse_error(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("a: [unclosed\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            YamlLoader().load(path)
        assert exc_info.value.path == str(path)

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigLoadError):
            JsonLoader().load(temp_dir / "missing.json")

    def test_can_load(self):
        assert JsonLoader().can_load("a.json")
        assert not JsonLoader().can_load("a.yaml")
        assert TomlLoader().can_load(Path("x/y.toml"))


# =============================================================================
# Test Registry
# =============================================================================


class IniLoader(ConfigLoader):
    extensions = (".ini",)

    def _read(self, path):
        return {"ini": path.read_text().strip()}


@pytest.mark.unit
class TestConfigLoaderRegistry:
    """Test loader lookup."""

    def test_builtins(self):
        registry = ConfigLoaderRegistry()

        assert [type(loader) for loader in registry] == [
            JsonLoader,
            YamlLoader,
            TomlLoader,
            PythonLoader,
        ]

    def test_find(self):
        registry = ConfigLoaderRegistry()

        assert isinstance(registry.find("a.yml"), YamlLoader)
        assert registry.find("a.ini") is None

    def test_custom_loader(self, temp_dir):
        registry = ConfigLoaderRegistry()
        registry.register(IniLoader())
        path = temp_dir / "a.ini"
        path.write_text("value\n")

        assert registry.find(path).load(path) == {"ini": "value"}

    def test_builtins_consulted_first(self):
        class OtherJson(JsonLoader):
            pass

        registry = ConfigLoaderRegistry()
        registry.register(OtherJson())

        assert type(registry.find("a.json")) is JsonLoader

    def test_without_builtins(self):
        assert len(ConfigLoaderRegistry(include_builtins=False)) == 0
