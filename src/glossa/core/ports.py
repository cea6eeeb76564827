from typing import Any, Mapping, Protocol

from .model import Position


class Document(Protocol):
    """
    Line-addressed, mutable text owned by an editor. The engine keeps only
    indices into it and re-reads lines at call time.
    """

    def get_line(self, index: int) -> str:
        pass

    def line_count(self) -> int:
        pass

    def replace_range(self, text: str, start: Position, end: Position | None = None) -> None:
        """
        Replace [start, end) with text as a single undoable edit.
        With end omitted, text is inserted at start.
        """
        pass

    def get_selection(self) -> str:
        pass

    def get_cursor(self, which: str = "head") -> Position:
        """which is "head", "anchor", "from" or "to"."""
        pass


class CompletionClient(Protocol):
    """
    Send a system prompt and a user prompt to a language model and return
    its plain-text answer. Failures raise CompletionError.
    """

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        pass


class SettingsStore(Protocol):
    """
    Key-value persistence for user settings.
    """

    def load(self) -> Any:
        pass

    def save(self, settings: Any) -> None:
        pass
