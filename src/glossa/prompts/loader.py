"""System prompt files kept in a flat prompts/ folder."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from .templates import ATOMIC_PROMPT, DEVELOPER_PROMPT, localize_prompt

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_FILE = "knowledgeassistant.md"

DEFAULT_PROMPT_FILES: tuple[tuple[str, str], ...] = (
    (DEFAULT_PROMPT_FILE, DEVELOPER_PROMPT),
    ("atomic.md", ATOMIC_PROMPT),
)

_LEGACY_LANGUAGE_FOLDERS = ("en", "zh")
_LEGACY_FILENAMES = ("developer.md", "developer.en.md", "developer.zh.md")


@dataclass
class LoadedPrompt:
    content: str
    used_fallback: bool


def ensure_default_prompts(folder: Path) -> list[str]:
    """
    Create the prompts folder and write the default prompt files.
    Existing files are never overwritten.

    Returns:
        Names of the files that were written
    """
    folder.mkdir(parents=True, exist_ok=True)
    written = []
    for filename, content in DEFAULT_PROMPT_FILES:
        path = folder / filename
        if not path.exists():
            path.write_text(content, encoding="utf-8")
            written.append(filename)
    if written:
        logger.info("Wrote default prompts to %s: %s", folder, ", ".join(written))
    return written


def list_prompt_files(folder: Path) -> list[str]:
    """Sorted .md filenames in the prompts folder."""
    if not folder.exists():
        return []
    return sorted(p.name for p in folder.iterdir() if p.is_file() and p.name.endswith(".md"))


def load_prompt_file(folder: Path, filename: str) -> str | None:
    """Trimmed content of a prompt file, or None if missing or blank."""
    path = folder / filename
    if not path.is_file():
        return None
    content = path.read_text(encoding="utf-8").strip()
    return content or None


def load_developer_prompt(folder: Path, lang: str, filename: str) -> LoadedPrompt:
    """
    Load the system prompt used for free questions.

    The file's <language></language> placeholder is filled for lang; a
    file without a placeholder gets the directive prepended. A missing or
    empty file falls back to the built-in prompt.
    """
    loaded = load_prompt_file(folder, filename)
    if loaded:
        return LoadedPrompt(content=localize_prompt(loaded, lang), used_fallback=False)

    logger.warning("System prompt file %r not found or empty, using default prompt", filename)
    return LoadedPrompt(content=localize_prompt(DEVELOPER_PROMPT, lang), used_fallback=True)


def migrate_prompt_folders(folder: Path) -> None:
    """
    Flatten the old per-language layout.

    a) Move files from prompts/en/ and prompts/zh/ into prompts/ (an
       existing target wins and the old copy is dropped).
    b) Remove emptied language subfolders.
    c) Rename developer.md to knowledgeassistant.md if the target is absent.
    """
    for lang in _LEGACY_LANGUAGE_FOLDERS:
        lang_folder = folder / lang
        if not lang_folder.is_dir():
            continue

        for path in sorted(lang_folder.iterdir()):
            if not path.is_file():
                continue
            target = folder / path.name
            if not target.exists():
                shutil.copyfile(path, target)
                logger.info("Migrated prompt %s -> %s", path, target)
            path.unlink()

        if not any(lang_folder.iterdir()):
            lang_folder.rmdir()

    old_path = folder / "developer.md"
    new_path = folder / DEFAULT_PROMPT_FILE
    if old_path.exists() and not new_path.exists():
        old_path.rename(new_path)
        logger.info("Renamed %s -> %s", old_path, new_path)


def migrate_prompt_filename(filename: str) -> str:
    """Map old developer prompt names to the current default name."""
    if filename in _LEGACY_FILENAMES:
        return DEFAULT_PROMPT_FILE
    return filename
