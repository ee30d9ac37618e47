"""Tests for configuration loading."""

import pytest

from snippetlens_core.config import api_key_for, load_config, load_guidelines


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["model"] == "gemini"
    assert config["detect_chars"] == 1000
    assert config["guidelines"] is None
    assert config["collapsed"] == []
    assert config["port"] == 8000


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".lens.yml"
    cfg.write_text("model: openai\ndetect_chars: 500\n")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "openai"
    assert config["detect_chars"] == 500


def test_collapsed_titles_loaded(tmp_path):
    cfg = tmp_path / ".lens.yml"
    cfg.write_text("collapsed:\n  - Style\n  - Overview\n")
    config = load_config(config_path=str(cfg))
    assert config["collapsed"] == ["Style", "Overview"]


def test_empty_config_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".lens.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["model"] == "gemini"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".lens.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": "anthropic"})
    assert config["model"] == "anthropic"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".lens.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": None})
    assert config["model"] == "openai"


def test_custom_guidelines_path(tmp_path):
    guidelines_file = tmp_path / "my-checklist.md"
    guidelines_file.write_text("1. Thread safety")
    cfg = tmp_path / ".lens.yml"
    cfg.write_text(f"guidelines: {guidelines_file}\n")
    config = load_config(config_path=str(cfg))
    assert "Thread safety" in load_guidelines(config)


def test_builtin_guidelines_loaded_as_fallback():
    config = load_config(config_path="nonexistent.yml")
    content = load_guidelines(config)
    for focus in ("Bugs", "Performance", "Security", "style", "Suggestions"):
        assert focus in content


def test_missing_custom_guidelines_raises(tmp_path):
    config = {"guidelines": str(tmp_path / "does-not-exist.md")}
    with pytest.raises(FileNotFoundError):
        load_guidelines(config)


def test_env_vars_loaded(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    config = load_config(config_path="nonexistent.yml")
    assert config["gemini_api_key"] == "gem-key"
    assert config["anthropic_api_key"] == "ant-key"
    assert config["openai_api_key"] == "oai-key"


def test_google_api_key_used_as_gemini_fallback(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", "goog-key")
    assert load_config(config_path="nonexistent.yml")["gemini_api_key"] == "goog-key"


def test_api_key_for_selected_model():
    config = {"model": "anthropic", "anthropic_api_key": "ant", "gemini_api_key": "gem"}
    assert api_key_for(config) == "ant"
    assert api_key_for({"model": "openai"}) is None


def test_collapsed_list_is_not_shared_reference(tmp_path):
    """Mutating one config's collapsed list must not affect another."""
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["collapsed"].append("Style")
    assert config_b["collapsed"] == []
