"""Prompt templates and prompt files."""

from .loader import ensure_default_prompts, list_prompt_files, load_developer_prompt, load_prompt_file
from .templates import build_action_prompt, prepend_language_directive, apply_language_directive

__all__ = [
    "apply_language_directive",
    "build_action_prompt",
    "ensure_default_prompts",
    "list_prompt_files",
    "load_developer_prompt",
    "load_prompt_file",
    "prepend_language_directive",
]
