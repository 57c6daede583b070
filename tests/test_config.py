"""Tests for YAML config loading."""

import pytest

from resume_copilot.config import AppConfig, config_from_dict, load_config, load_raw_config


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_local_config_overlays_template(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "config/config.yaml", "provider: openai\nmodel: gpt-4o\nfree_ai_uses: 3\n")
    _write(tmp_path / "config/config.local.yaml", "model: gpt-4o-mini\napi_key: sk-local\n")

    config = load_config()

    assert config.provider == "openai"
    assert config.model == "gpt-4o-mini"
    assert config.api_key == "sk-local"
    assert config.free_ai_uses == 3


def test_explicit_path(tmp_path):
    path = _write(tmp_path / "custom.yaml", "provider: gemini\nmodel: gemini-2.5-flash\ntemperature: 0.2\n")
    config = load_config(str(path))
    assert (config.provider, config.model, config.temperature) == ("gemini", "gemini-2.5-flash", 0.2)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_raw_config(str(tmp_path / "nope.yaml"))


def test_non_mapping_is_rejected(tmp_path):
    path = _write(tmp_path / "list.yaml", "- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_raw_config(str(path))


def test_defaults_and_env_overrides(monkeypatch):
    assert config_from_dict({}) == AppConfig()

    monkeypatch.setenv("RESUME_COPILOT_MODEL", "gpt-4.1")
    monkeypatch.setenv("RESUME_COPILOT_PROXY_URL", "http://localhost:8000/api/chat")
    config = config_from_dict({"model": "gpt-4o"})
    assert config.model == "gpt-4.1"
    assert config.proxy_url == "http://localhost:8000/api/chat"
