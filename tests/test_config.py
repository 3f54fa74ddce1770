"""Tests for generator settings."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from polyconst import Settings
from polyconst.registry import host_pointer_width


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("POINTER_WIDTH", "CLASS_PREFIX", "NUMPY_ALIAS", "LOG_LEVEL"):
        monkeypatch.delenv(f"POLYCONST_{var}", raising=False)


class TestDefaults:
    def test_defaults(self):
        settings = Settings()
        assert settings.pointer_width == host_pointer_width()
        assert settings.class_prefix == "PolymorphicConstant"
        assert settings.numpy_alias == "np"
        assert settings.log_level == "WARNING"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("POLYCONST_POINTER_WIDTH", "32")
        monkeypatch.setenv("POLYCONST_CLASS_PREFIX", "Const")
        monkeypatch.setenv("POLYCONST_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.pointer_width == 32
        assert settings.class_prefix == "Const"
        assert settings.log_level == "DEBUG"


class TestValidation:
    @pytest.mark.parametrize("width", [0, 16, 128])
    def test_pointer_width(self, width):
        with pytest.raises(ValidationError, match="pointer_width must be 32 or 64"):
            Settings(pointer_width=width)

    @pytest.mark.parametrize("field", ["class_prefix", "numpy_alias"])
    def test_identifiers(self, field):
        with pytest.raises(ValidationError, match="not a valid Python identifier"):
            Settings(**{field: "not-an-identifier"})

    def test_log_level(self):
        with pytest.raises(ValidationError, match="unknown log level"):
            Settings(log_level="chatty")


class TestFromYaml:
    def test_load(self, tmp_path):
        path = tmp_path / "polyconst.yaml"
        path.write_text("pointer_width: 32\nclass_prefix: Poly\n")
        settings = Settings.from_yaml(path)
        assert settings.pointer_width == 32
        assert settings.class_prefix == "Poly"
        assert settings.numpy_alias == "np"

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "polyconst.yaml"
        path.write_text("pointer_width: 32\n")
        assert Settings.from_yaml(path, pointer_width=64).pointer_width == 64

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Settings.from_yaml(path).class_prefix == "PolymorphicConstant"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Settings.from_yaml(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 32\n- 64\n")
        with pytest.raises(ValueError, match="Expected YAML mapping"):
            Settings.from_yaml(path)

    def test_unknown_keys_are_dropped(self, tmp_path, caplog):
        path = tmp_path / "polyconst.yaml"
        path.write_text("pointer_width: 64\ncolour: blue\n")
        with caplog.at_level(logging.WARNING, logger="polyconst.config"):
            settings = Settings.from_yaml(path)
        assert settings.pointer_width == 64
        assert "Ignoring unknown settings" in caplog.text
        assert "colour" in caplog.text

    def test_bundled_example(self):
        path = Path(__file__).parent.parent / "examples" / "polyconst.yaml"
        settings = Settings.from_yaml(path)
        assert settings.pointer_width == 64
        assert settings.log_level == "INFO"
