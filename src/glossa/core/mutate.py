"""Single-edit document mutations.

Each function issues exactly one replace_range call so that one undo
reverts the whole action. Line text is read at call time, after any
completion has returned.
"""

from collections.abc import Sequence

from .model import Position
from .ports import Document


def replace_paragraph_and_remove_annotations(
    doc: Document,
    start_line: int,
    end_line: int,
    annotation_line: int | None,
    new_text: str,
) -> None:
    """Replace a paragraph together with its annotation line, if it has one."""
    last = max(end_line, annotation_line if annotation_line is not None else end_line)
    last_text = doc.get_line(last)
    doc.replace_range(new_text, Position(start_line, 0), Position(last, len(last_text)))


def replace_paragraph_with_inspiration(
    doc: Document,
    start_line: int,
    end_line: int,
    new_paragraph_text: str,
    bullet_lines: Sequence[str],
) -> None:
    """Replace a paragraph and put bullet lines right under it."""
    last_text = doc.get_line(end_line)
    replacement = new_paragraph_text + "\n" + "\n".join(bullet_lines)
    doc.replace_range(replacement, Position(start_line, 0), Position(end_line, len(last_text)))
