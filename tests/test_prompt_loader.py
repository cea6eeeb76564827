"""Tests for prompt files."""

import tempfile
from pathlib import Path

from glossa.prompts.loader import (
    DEFAULT_PROMPT_FILE,
    ensure_default_prompts,
    list_prompt_files,
    load_developer_prompt,
    load_prompt_file,
    migrate_prompt_filename,
    migrate_prompt_folders,
)
from glossa.prompts.templates import developer_prompt


def test_ensure_default_prompts():
    """Test that defaults are written once and never overwritten."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir) / "prompts"
        written = ensure_default_prompts(folder)
        assert sorted(written) == ["atomic.md", "knowledgeassistant.md"]

        (folder / "atomic.md").write_text("mine", encoding="utf-8")
        assert ensure_default_prompts(folder) == []
        assert (folder / "atomic.md").read_text(encoding="utf-8") == "mine"


def test_list_prompt_files():
    """Test that only .md files are listed, sorted."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir)
        assert list_prompt_files(folder / "missing") == []
        (folder / "b.md").write_text("b")
        (folder / "a.md").write_text("a")
        (folder / "notes.txt").write_text("x")
        (folder / "sub.md").mkdir()
        assert list_prompt_files(folder) == ["a.md", "b.md"]


def test_load_prompt_file():
    """Test trimming, missing files and blank files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir)
        (folder / "p.md").write_text("  hello  \n")
        (folder / "blank.md").write_text("  \n")
        assert load_prompt_file(folder, "p.md") == "hello"
        assert load_prompt_file(folder, "blank.md") is None
        assert load_prompt_file(folder, "missing.md") is None


def test_load_developer_prompt_from_file():
    """Test that a file without placeholder gets the directive prepended."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir)
        (folder / "mine.md").write_text("Be terse.")
        loaded = load_developer_prompt(folder, "fr", "mine.md")
        assert not loaded.used_fallback
        assert loaded.content == "Always respond in French.\n\nBe terse."

        english = load_developer_prompt(folder, "en", "mine.md")
        assert english.content == "Be terse."


def test_load_developer_prompt_fallback():
    """Test the built-in prompt when the file is missing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        loaded = load_developer_prompt(Path(tmpdir), "zh", "gone.md")
        assert loaded.used_fallback
        assert loaded.content == developer_prompt("zh")


def test_migrate_prompt_folders():
    """Test flattening of en/ and zh/ and the developer.md rename."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir)
        (folder / "en").mkdir()
        (folder / "zh").mkdir()
        (folder / "en" / "developer.md").write_text("english")
        (folder / "zh" / "developer.md").write_text("chinese")
        (folder / "zh" / "extra.md").write_text("extra")

        migrate_prompt_folders(folder)

        assert not (folder / "en").exists()
        assert not (folder / "zh").exists()
        assert not (folder / "developer.md").exists()
        assert (folder / DEFAULT_PROMPT_FILE).read_text() == "english"
        assert (folder / "extra.md").read_text() == "extra"


def test_migrate_keeps_existing_default():
    """Test that developer.md is left alone when the new name exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir)
        (folder / "developer.md").write_text("old")
        (folder / DEFAULT_PROMPT_FILE).write_text("new")
        migrate_prompt_folders(folder)
        assert (folder / "developer.md").read_text() == "old"
        assert (folder / DEFAULT_PROMPT_FILE).read_text() == "new"


def test_migrate_prompt_filename():
    """Test legacy names map to the default."""
    assert migrate_prompt_filename("developer.md") == DEFAULT_PROMPT_FILE
    assert migrate_prompt_filename("developer.zh.md") == DEFAULT_PROMPT_FILE
    assert migrate_prompt_filename("atomic.md") == "atomic.md"
