"""Tests for the YAML settings store."""

import tempfile
from pathlib import Path

import pytest
import yaml

from glossa.adapters.yaml_settings import YamlSettingsStore
from glossa.config import Settings


def test_load_missing_file_gives_defaults():
    """Test defaults when nothing is stored."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = YamlSettingsStore(Path(tmpdir) / "settings.yaml")
        assert store.load() == Settings()


def test_save_and_load():
    """Test persisting settings."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / ".glossa" / "settings.yaml"
        store = YamlSettingsStore(path)
        store.save(Settings(model="gpt-5-mini", response_language="zh", web_search_enabled=True))

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data["model"] == "gpt-5-mini"
        assert data["web_search_enabled"] is True

        loaded = store.load()
        assert loaded.model == "gpt-5-mini"
        assert loaded.response_language == "zh"


def test_save_rejects_invalid():
    """Test that invalid settings are not written."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "settings.yaml"
        with pytest.raises(ValueError):
            YamlSettingsStore(path).save(Settings(model="nope"))
        assert not path.exists()


def test_load_migrates_legacy_prompt_name():
    """Test the developer.md rename is persisted."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "settings.yaml"
        path.write_text("system_prompt_file: developer.en.md\n", encoding="utf-8")

        settings = YamlSettingsStore(path).load()
        assert settings.system_prompt_file == "knowledgeassistant.md"
        assert "knowledgeassistant.md" in path.read_text(encoding="utf-8")


def test_load_rejects_non_mapping():
    """Test a settings file holding a list."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            YamlSettingsStore(path).load()
