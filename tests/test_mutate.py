"""Tests for single-edit document mutations."""

from glossa.adapters.line_buffer import LineBuffer
from glossa.core.mutate import (
    replace_paragraph_and_remove_annotations,
    replace_paragraph_with_inspiration,
)


def test_replace_with_annotation_line():
    """Test that the annotation line goes away with the paragraph."""
    doc = LineBuffer(["", "Line one", "Line two", "%%a%%", "next"])
    replace_paragraph_and_remove_annotations(doc, 1, 2, 3, "New text")
    assert doc.lines == ["", "New text", "next"]
    assert len(doc.history) == 1


def test_replace_without_annotation_line():
    """Test replacing a paragraph alone."""
    doc = LineBuffer(["Old", "", "keep"])
    replace_paragraph_and_remove_annotations(doc, 0, 0, None, "New\nlines")
    assert doc.lines == ["New", "lines", "", "keep"]


def test_replace_with_inspiration():
    """Test paragraph and bullets in one edit."""
    doc = LineBuffer(["Idea {more}", "", "tail"])
    replace_paragraph_with_inspiration(doc, 0, 0, "Idea", ["- a", "- b"])
    assert doc.lines == ["Idea", "- a", "- b", "", "tail"]
    assert len(doc.history) == 1


def test_inspiration_is_undone_in_one_step():
    """Test that one undo restores the paragraph."""
    doc = LineBuffer(["- Item {why}"])
    replace_paragraph_with_inspiration(doc, 0, 0, "- Item", ["  - because"])
    assert doc.lines == ["- Item", "  - because"]
    assert doc.undo()
    assert doc.lines == ["- Item {why}"]
