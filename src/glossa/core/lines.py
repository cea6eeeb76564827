"""Line classification for the paragraph engine.

All predicates look at a single line and nothing else.
"""

import re

from .model import MarkdownPrefix

ANNOTATION_MARKER = "%%"

_LIST_ITEM = re.compile(r"^\s*(?:[-*+]|\d+\.)\s")
_HEADING = re.compile(r"^#{1,6}\s")
_PREFIX = re.compile(r"^(\s*(?:[-*+]|\d+\.)\s+|#{1,6}\s+|>\s+)")


def is_blank(line: str) -> bool:
    return len(line.strip()) == 0


def is_annotation_line(line: str) -> bool:
    """Check for a %%...%% line. Any %% inside the line is ignored."""
    trimmed = line.strip()
    return trimmed.startswith(ANNOTATION_MARKER) and trimmed.endswith(ANNOTATION_MARKER)


def is_list_item(line: str) -> bool:
    """
    Match "- ", "* ", "+ " and "1. " markers, indented or not.
    """
    return _LIST_ITEM.match(line) is not None


def is_heading(line: str) -> bool:
    return _HEADING.match(line) is not None


def extract_markdown_prefix(line: str) -> MarkdownPrefix:
    """
    Split a line into its block marker (list marker with indentation,
    heading hashes or blockquote chevron, plus the whitespace after it)
    and the remaining content.

    Examples:
        >>> extract_markdown_prefix("  - item")
        MarkdownPrefix(prefix='  - ', content='item')
        >>> extract_markdown_prefix("plain")
        MarkdownPrefix(prefix='', content='plain')
    """
    m = _PREFIX.match(line)
    if m and m.group(1):
        return MarkdownPrefix(prefix=m.group(1), content=line[m.end(1):])
    return MarkdownPrefix(prefix="", content=line)
