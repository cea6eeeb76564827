"""Paragraph location over a line-addressed document."""

from .lines import is_annotation_line, is_blank, is_list_item
from .model import ParagraphBounds, SelectionContext
from .ports import Document


def _is_boundary(line: str) -> bool:
    return is_blank(line) or is_annotation_line(line)


def find_paragraph_bounds(doc: Document, line_index: int) -> ParagraphBounds | None:
    """
    Find the paragraph around a line.

    A paragraph is a contiguous run of non-blank, non-annotation lines.
    List items are always paragraphs of their own, so annotations attach
    to the item and not to the whole list.

    Returns None when the line is blank or an annotation line.
    """
    current = doc.get_line(line_index)
    if _is_boundary(current):
        return None

    if is_list_item(current):
        return ParagraphBounds(line_index, line_index)

    start = line_index
    while start > 0 and not _is_boundary(doc.get_line(start - 1)):
        start -= 1

    last = doc.line_count() - 1
    end = line_index
    while end < last and not _is_boundary(doc.get_line(end + 1)):
        end += 1

    return ParagraphBounds(start, end)


def find_paragraph_bounds_near(doc: Document, line_index: int) -> ParagraphBounds | None:
    """
    Like find_paragraph_bounds, but a cursor resting on an annotation line
    resolves to the paragraph directly above it.
    """
    bounds = find_paragraph_bounds(doc, line_index)
    if bounds is not None:
        return bounds

    if line_index > 0 and is_annotation_line(doc.get_line(line_index)):
        return find_paragraph_bounds(doc, line_index - 1)

    return None


def get_paragraph_text(doc: Document, start_line: int, end_line: int) -> str:
    return "\n".join(doc.get_line(i) for i in range(start_line, end_line + 1))


def get_selection_context(doc: Document) -> SelectionContext | None:
    """Current selection, trimmed, with its range. None if nothing is selected."""
    selected = doc.get_selection().strip()
    if not selected:
        return None
    return SelectionContext(
        selected_text=selected,
        start=doc.get_cursor("from"),
        end=doc.get_cursor("to"),
    )
