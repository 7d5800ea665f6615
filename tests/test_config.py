"""Tests for typespeed.core.config – YAML defaults and duration parsing."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from typespeed.core.config import DEFAULT_CONFIG_PATH, AppConfig, load_config, parse_duration


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.dump(data, allow_unicode=True, default_flow_style=False), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# parse_duration
# ---------------------------------------------------------------------------

class TestParseDuration:
    def test_none_uses_default(self):
        assert parse_duration(None) == 15

    def test_int(self):
        assert parse_duration(30) == 30

    def test_numeric_string(self):
        assert parse_duration("45") == 45

    def test_whitespace_is_trimmed(self):
        assert parse_duration(" 20 ") == 20

    @pytest.mark.parametrize("value", ["abc", "", "1.5", "ten", [], True])
    def test_garbage_falls_back(self, value):
        assert parse_duration(value, default=15) == 15

    @pytest.mark.parametrize("value", [0, -3, "0", "-10"])
    def test_non_positive_falls_back(self, value):
        assert parse_duration(value, default=12) == 12

    def test_custom_default(self):
        assert parse_duration("nope", default=60) == 60

    def test_warning_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="typespeed.core.config"):
            parse_duration("abc")
        assert "invalid duration" in caplog.text


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------

class TestLoadConfig:
    def test_bundled_config(self):
        assert DEFAULT_CONFIG_PATH.exists()
        cfg = load_config()
        assert cfg.text.startswith("Lorem ipsum")
        assert cfg.text.endswith("ut labore")
        assert cfg.duration == 15
        assert cfg.log_level == "INFO"

    def test_bundled_text_is_single_line(self):
        cfg = load_config()
        assert "\n" not in cfg.text
        assert "  " not in cfg.text

    def test_full_file(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "c.yaml", {"text": "one two", "duration": 30, "log_level": "debug"})
        assert load_config(path) == AppConfig(text="one two", duration=30, log_level="DEBUG")

    def test_optional_keys_default(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "c.yaml", {"text": "one two"})
        cfg = load_config(path)
        assert cfg.duration == 15
        assert cfg.log_level == "INFO"

    def test_whitespace_collapsed(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "c.yaml", {"text": "  one\n two   three  "})
        assert load_config(path).text == "one two three"

    def test_bad_duration_falls_back(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "c.yaml", {"text": "x", "duration": "soon"})
        assert load_config(path).duration == 15

    def test_bad_log_level_falls_back(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "c.yaml", {"text": "x", "log_level": 5})
        assert load_config(path).log_level == "INFO"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "c.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="expected YAML mapping"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "c.yaml", ["a", "b"])
        with pytest.raises(ValueError):
            load_config(path)

    def test_missing_text(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "c.yaml", {"duration": 10})
        with pytest.raises(ValueError, match="'text'"):
            load_config(path)

    def test_blank_text(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "c.yaml", {"text": "   "})
        with pytest.raises(ValueError, match="empty"):
            load_config(path)


class TestAppConfig:
    def test_frozen(self):
        cfg = AppConfig(text="x")
        with pytest.raises(AttributeError):
            cfg.text = "y"
