"""
Tests for Settings
==================
Tests for the YAML settings loader.
"""

import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

import settings
from wordgen.settings import get_setting, resolve_path


@pytest.fixture
def fresh_config():
    settings.load_app_config.cache_clear()
    yield
    settings.load_app_config.cache_clear()


def test_default_settings():
    assert get_setting("model.depth") == 2
    assert get_setting("model.dict_file") == "default.dict"
    assert get_setting("corpus.encoding") == "utf-8"


def test_missing_setting_returns_default():
    assert get_setting("model.nope", 7) == 7
    assert get_setting("model.depth.deeper") is None


def test_resolve_path_relative(tmp_path):
    assert resolve_path("x.model", base=tmp_path) == (tmp_path / "x.model").resolve()


def test_resolve_path_requires_value():
    with pytest.raises(ValueError):
        resolve_path(None)


def test_env_override(tmp_path, monkeypatch, fresh_config):
    path = tmp_path / "custom.yaml"
    path.write_text("model:\n  depth: 5\n", encoding="utf-8")
    monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(path))

    assert get_setting("model.depth") == 5
    assert get_setting("generate.count", 1) == 1


def test_env_override_missing_file(tmp_path, monkeypatch, fresh_config):
    monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(tmp_path / "none.yaml"))
    with pytest.raises(FileNotFoundError):
        get_setting("model.depth")
