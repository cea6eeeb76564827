"""Errors raised by the glossa flows and the completion client."""

from typing import Literal

CompletionErrorKind = Literal["auth", "rate_limit", "server_error", "bad_request", "network", "parse"]


class GlossaError(Exception):
    """Base class for glossa errors."""
    pass


class UserInputAbsent(GlossaError):
    """
    Nothing to act on: no selection, cursor outside a paragraph, no
    instruction or no annotations. The document is left untouched.
    """
    pass


class CompletionError(GlossaError):
    """The completion request failed. kind classifies the failure."""

    def __init__(self, kind: CompletionErrorKind, message: str, status: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.status = status


class EmptyCompletionResult(GlossaError):
    """The model answered without any usable text."""

    def __init__(self, message: str = "The assistant didn't return any text."):
        super().__init__(message)
