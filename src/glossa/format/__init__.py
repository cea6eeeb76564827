"""Formatting of model responses."""

from .bullets import format_inspire_response

__all__ = [
    "format_inspire_response",
]
