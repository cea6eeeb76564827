"""Shared test fixtures."""

import pytest

from glossa.core.ports import CompletionClient


class FakeClient(CompletionClient):
    """Completion client that records calls and returns a canned answer."""

    def __init__(self, response: str = "", error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt, user_prompt, options=None):
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def make_client():
    """Factory for clients with a given answer or error."""
    return FakeClient
