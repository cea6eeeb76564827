"""Encode and decode %%a, b, c%% annotation lines."""

from collections.abc import Iterable

from .lines import ANNOTATION_MARKER, is_annotation_line
from .model import Position
from .ports import Document

_SEPARATOR = ", "


def parse_annotations(line: str) -> list[str]:
    """
    Decode an annotation line.

    "%%a, b, c%%" -> ["a", "b", "c"]; empty pieces from stray commas are
    dropped and order is kept.
    """
    trimmed = line.strip()
    inner = trimmed[len(ANNOTATION_MARKER):-len(ANNOTATION_MARKER)].strip()
    if not inner:
        return []
    return [piece.strip() for piece in inner.split(",") if piece.strip()]


def format_annotations(items: Iterable[str]) -> str:
    """["a", "b"] -> "%%a, b%%". An empty list gives "%%%%"."""
    return f"{ANNOTATION_MARKER}{_SEPARATOR.join(items)}{ANNOTATION_MARKER}"


def find_annotation_line(doc: Document, paragraph_end_line: int) -> int | None:
    """Index of the annotation line right below a paragraph, if any."""
    next_line = paragraph_end_line + 1
    if next_line >= doc.line_count():
        return None
    if is_annotation_line(doc.get_line(next_line)):
        return next_line
    return None


def append_annotations(doc: Document, paragraph_end_line: int, new_items: Iterable[str]) -> None:
    """
    Add annotations to a paragraph, merging into its existing annotation
    line or inserting a new one below it. Items already present are
    skipped. Exactly one edit is made.
    """
    existing_index = find_annotation_line(doc, paragraph_end_line)

    if existing_index is not None:
        existing_line = doc.get_line(existing_index)
        merged = parse_annotations(existing_line)
        for item in new_items:
            if item not in merged:
                merged.append(item)
        doc.replace_range(
            format_annotations(merged),
            Position(existing_index, 0),
            Position(existing_index, len(existing_line)),
        )
        return

    end_text = doc.get_line(paragraph_end_line)
    doc.replace_range(
        "\n" + format_annotations(new_items),
        Position(paragraph_end_line, len(end_text)),
    )
