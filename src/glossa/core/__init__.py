"""Line-level paragraph engine: classification, location, annotations, instructions, context."""

from .annotations import append_annotations, find_annotation_line, format_annotations, parse_annotations
from .context import gather_surrounding_context
from .instructions import extract_instruction
from .lines import extract_markdown_prefix, is_annotation_line, is_blank, is_heading, is_list_item
from .model import Instruction, MarkdownPrefix, ParagraphBounds, Position, SelectionContext
from .mutate import replace_paragraph_and_remove_annotations, replace_paragraph_with_inspiration
from .paragraphs import (
    find_paragraph_bounds,
    find_paragraph_bounds_near,
    get_paragraph_text,
    get_selection_context,
)

__all__ = [
    "append_annotations",
    "extract_instruction",
    "extract_markdown_prefix",
    "find_annotation_line",
    "find_paragraph_bounds",
    "find_paragraph_bounds_near",
    "format_annotations",
    "gather_surrounding_context",
    "get_paragraph_text",
    "get_selection_context",
    "is_annotation_line",
    "is_blank",
    "is_heading",
    "is_list_item",
    "parse_annotations",
    "replace_paragraph_and_remove_annotations",
    "replace_paragraph_with_inspiration",
    "Instruction",
    "MarkdownPrefix",
    "ParagraphBounds",
    "Position",
    "SelectionContext",
]
