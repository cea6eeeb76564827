from dataclasses import dataclass
from typing import Iterable

from ..core.model import Position
from ..core.ports import Document


@dataclass(frozen=True)
class Edit:
    """One replace_range call, enough to undo it."""
    offset: int
    removed: str
    inserted: str


class LineBuffer(Document):
    """
    In-memory document: a list of lines joined by "\\n", a selection given
    by anchor and head, and an undo history with one entry per edit.
    """

    def __init__(self, lines: Iterable[str] | None = None):
        self.lines: list[str] = list(lines) if lines is not None else []
        if not self.lines:
            self.lines = [""]
        self._anchor = Position(0, 0)
        self._head = Position(0, 0)
        self.history: list[Edit] = []

    @classmethod
    def from_text(cls, text: str) -> "LineBuffer":
        return cls(text.split("\n"))

    def text(self) -> str:
        return "\n".join(self.lines)

    # Document interface
    def get_line(self, index: int) -> str:
        if not 0 <= index < len(self.lines):
            raise IndexError(f"Line {index} out of range (0..{len(self.lines) - 1})")
        return self.lines[index]

    def line_count(self) -> int:
        return len(self.lines)

    def replace_range(self, text: str, start: Position, end: Position | None = None) -> None:
        a = self._offset(start)
        b = self._offset(end) if end is not None else a
        if b < a:
            a, b = b, a
        full = self.text()
        self.history.append(Edit(offset=a, removed=full[a:b], inserted=text))
        self._set_text(full[:a] + text + full[b:])

    def get_selection(self) -> str:
        a = self._offset(self.get_cursor("from"))
        b = self._offset(self.get_cursor("to"))
        return self.text()[a:b]

    def get_cursor(self, which: str = "head") -> Position:
        if which == "head":
            return self._head
        if which == "anchor":
            return self._anchor
        ordered = sorted((self._anchor, self._head), key=lambda p: (p.line, p.ch))
        if which == "from":
            return ordered[0]
        if which == "to":
            return ordered[1]
        raise ValueError(f"Unknown cursor: {which}")

    # Editor-side helpers
    def set_cursor(self, pos: Position) -> None:
        self._anchor = self._head = self._clip(pos)

    def set_selection(self, anchor: Position, head: Position) -> None:
        self._anchor = self._clip(anchor)
        self._head = self._clip(head)

    def undo(self) -> bool:
        """Revert the last edit. Returns False when there is nothing to undo."""
        if not self.history:
            return False
        edit = self.history.pop()
        full = self.text()
        end = edit.offset + len(edit.inserted)
        self._set_text(full[: edit.offset] + edit.removed + full[end:])
        return True

    def _set_text(self, text: str) -> None:
        self.lines = text.split("\n")
        self._anchor = self._clip(self._anchor)
        self._head = self._clip(self._head)

    def _clip(self, pos: Position) -> Position:
        line = min(max(pos.line, 0), len(self.lines) - 1)
        ch = min(max(pos.ch, 0), len(self.lines[line]))
        return Position(line, ch)

    def _offset(self, pos: Position) -> int:
        pos = self._clip(pos)
        return sum(len(line) + 1 for line in self.lines[: pos.line]) + pos.ch
