import json

import pytest

from wit_scala.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


@pytest.fixture
def manager() -> ConfigManager:
    return ConfigManager()


# ###############
# Defaults and overrides
# ###############


def test_defaults(manager):
    config = manager.get_config()
    assert config.base_package == "componentmodel"
    assert config.binding_root is None
    assert config.indent_size == 2
    assert config.add_comments is True
    assert config.custom["runtime_package"] == "scala.scalajs.wit"


def test_custom_overrides(manager):
    config = manager.get_config(custom_config={"base_package": "com.example.wasm"})
    assert config.base_package == "com.example.wasm"
    assert config.base_package_segments() == ["com", "example", "wasm"]


def test_unknown_keys_go_to_custom(manager):
    config = manager.get_config(custom_config={"unknown_type": "Any"})
    assert config.custom["unknown_type"] == "Any"
    assert config.custom["runtime_package"] == "scala.scalajs.wit"


def test_custom_dict_is_merged_key_by_key(manager):
    config = manager.get_config(custom_config={"custom": {"list_type": "Seq"}})
    assert config.custom["list_type"] == "Seq"
    assert config.custom["runtime_package"] == "scala.scalajs.wit"


def test_defaults_are_not_mutated(manager):
    manager.get_config(custom_config={"custom": {"list_type": "Seq"}})
    assert "list_type" not in manager.get_config().custom


def test_load_config_shortcut():
    config = load_config({"indent_size": 4})
    assert isinstance(config, GeneratorConfig)
    assert config.indent_size == 4


# ###############
# Configuration files
# ###############


class TestConfigFile:
    def test_file_then_overrides(self, manager, tmp_path):
        path = tmp_path / "bindings.json"
        path.write_text(
            json.dumps({"base_package": "org.sample", "binding_root": "src/main/scala"})
        )

        config = manager.get_config(
            custom_config={"base_package": "org.override"}, config_file=path
        )
        assert config.base_package == "org.override"
        assert config.binding_root == "src/main/scala"

    def test_missing_file(self, manager, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            manager.get_config(config_file=tmp_path / "missing.json")

    def test_wrong_suffix(self, manager, tmp_path):
        path = tmp_path / "bindings.yaml"
        path.write_text("base_package: x")
        with pytest.raises(ConfigError, match="must be JSON"):
            manager.get_config(config_file=path)

    def test_invalid_json(self, manager, tmp_path):
        path = tmp_path / "bindings.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            manager.get_config(config_file=path)

    def test_not_an_object(self, manager, tmp_path):
        path = tmp_path / "bindings.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            manager.get_config(config_file=path)


# ###############
# Validation
# ###############


@pytest.mark.parametrize("base_package", ["com.example", "componentmodel", "a.b_c.d1"])
def test_valid_base_package(manager, base_package):
    assert manager.validate_config(GeneratorConfig(base_package=base_package)) == []


@pytest.mark.parametrize("base_package", ["", "com..example", "1abc", "com.my-app"])
def test_invalid_base_package(manager, base_package):
    warnings = manager.validate_config(GeneratorConfig(base_package=base_package))
    assert warnings == [f"Invalid base package: {base_package!r}"]


def test_negative_indent(manager):
    warnings = manager.validate_config(GeneratorConfig(indent_size=-1))
    assert warnings == ["Invalid indent_size: -1"]
