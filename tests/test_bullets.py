"""Tests for bullet formatting of model output."""

from glossa.format.bullets import format_inspire_response


def test_adds_missing_markers():
    """Test lines with and without a bullet marker."""
    raw = "- First idea\nSecond idea\n\n  - Third idea  "
    assert format_inspire_response(raw, 0) == ["- First idea", "- Second idea", "- Third idea"]


def test_indents_bullets():
    """Test indentation under a list item."""
    assert format_inspire_response("one\ntwo", 2) == ["  - one", "  - two"]


def test_empty_response():
    """Test blank output gives no bullets."""
    assert format_inspire_response("", 0) == []
    assert format_inspire_response("\n  \n", 4) == []


def test_other_markers_are_wrapped():
    """Test that only "- " counts as a marker."""
    assert format_inspire_response("* star\n1. num", 0) == ["- * star", "- 1. num"]
