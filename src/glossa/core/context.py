"""Collect nearby lines so a model sees where a paragraph sits."""

from .lines import is_heading
from .ports import Document

LINES_BEFORE = 10
LINES_AFTER = 5


def find_heading_above(doc: Document, line_index: int) -> int | None:
    """Nearest heading strictly above line_index."""
    for i in range(line_index - 1, -1, -1):
        if is_heading(doc.get_line(i)):
            return i
    return None


def gather_surrounding_context(
    doc: Document,
    start_line: int,
    end_line: int,
    before: int = LINES_BEFORE,
    after: int = LINES_AFTER,
) -> str:
    """
    Return the nearest heading above the paragraph, the lines just before
    it and the lines just after it, as blank-line separated segments.

    The heading gets its own segment only when it lies outside the
    "before" window; inside the window it is already part of those lines.
    The paragraph itself is never included.
    """
    parts: list[str] = []

    before_start = max(0, start_line - before)
    heading = find_heading_above(doc, start_line)
    if heading is not None and heading < before_start:
        parts.append(doc.get_line(heading))

    before_lines = [doc.get_line(i) for i in range(before_start, start_line)]
    if before_lines:
        parts.append("\n".join(before_lines))

    after_end = min(doc.line_count() - 1, end_line + after)
    after_lines = [doc.get_line(i) for i in range(end_line + 1, after_end + 1)]
    if after_lines:
        parts.append("\n".join(after_lines))

    return "\n\n".join(parts).strip()
