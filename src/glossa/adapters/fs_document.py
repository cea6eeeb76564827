from pathlib import Path

from .line_buffer import LineBuffer


def read_document(path: Path) -> LineBuffer:
    """Load a text file as a line buffer. A missing file is an empty document."""
    if not path.exists():
        return LineBuffer()
    return LineBuffer.from_text(path.read_text(encoding="utf-8"))


def write_document(path: Path, doc: LineBuffer) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(doc.text(), encoding="utf-8")
