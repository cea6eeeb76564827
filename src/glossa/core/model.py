from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    line: int  # 0-based line index
    ch: int  # character offset within the line


@dataclass(frozen=True)
class ParagraphBounds:
    start_line: int  # inclusive
    end_line: int  # inclusive


@dataclass(frozen=True)
class MarkdownPrefix:
    prefix: str  # "" when the line carries no block marker
    content: str


@dataclass(frozen=True)
class Instruction:
    cleaned_text: str
    instruction: str


@dataclass(frozen=True)
class SelectionContext:
    selected_text: str
    start: Position
    end: Position
