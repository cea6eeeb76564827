"""Tests for the Responses API client."""

import asyncio
import json

import httpx
import pytest

from glossa.adapters.openai_client import (
    OpenAIResponsesClient,
    build_request_body,
    extract_api_error,
    extract_response_text,
    map_http_error,
)
from glossa.config import Settings
from glossa.errors import CompletionError, EmptyCompletionResult


def _client(handler, api_key="sk-test"):
    settings = Settings(api_key=api_key)
    return OpenAIResponsesClient(settings, url="https://api.test/v1/responses", transport=httpx.MockTransport(handler))


def test_build_request_body_defaults():
    """Test a plain request without reasoning or tools."""
    body = build_request_body(Settings(), "system", "user")
    assert body == {"model": "gpt-5.2", "input": "user", "instructions": "system"}


def test_build_request_body_options():
    """Test reasoning, web search and per-request overrides."""
    settings = Settings(reasoning_effort="high", web_search_enabled=True)
    body = build_request_body(settings, "s", "u")
    assert body["reasoning"] == {"effort": "high"}
    assert body["tools"] == [{"type": "web_search"}]

    body = build_request_body(settings, "s", "u", {"model": "gpt-5-mini", "reasoning_effort": "none", "web_search_enabled": False})
    assert body["model"] == "gpt-5-mini"
    assert "reasoning" not in body
    assert "tools" not in body


def test_extract_response_text_top_level():
    """Test the output_text shortcut."""
    assert extract_response_text(json.dumps({"output_text": "  hi  "})) == "hi"


def test_extract_response_text_from_output_items():
    """Test the first output_text block of the first message."""
    payload = {
        "output": [
            {"type": "reasoning", "content": []},
            {"type": "message", "content": [
                {"type": "refusal", "text": "no"},
                {"type": "output_text", "text": "answer"},
            ]},
            {"type": "message", "content": [{"type": "output_text", "text": "later"}]},
        ]
    }
    assert extract_response_text(json.dumps(payload)) == "answer"


def test_extract_response_text_errors():
    """Test empty and unparsable payloads."""
    with pytest.raises(EmptyCompletionResult):
        extract_response_text(json.dumps({"output": []}))
    with pytest.raises(CompletionError) as exc_info:
        extract_response_text("not json")
    assert exc_info.value.kind == "parse"


def test_extract_response_text_wrong_shape():
    """Test valid JSON with unexpected types is a parse error."""
    for payload in (
        {"output_text": ["x"]},
        {"output": ["oops"]},
        {"output": {"type": "message"}},
        {"output": [{"type": "message", "content": ["text"]}]},
    ):
        with pytest.raises(CompletionError) as exc_info:
            extract_response_text(json.dumps(payload))
        assert exc_info.value.kind == "parse"


def test_extract_api_error():
    """Test error.message and the raw fallback."""
    assert extract_api_error('{"error": {"message": "bad model"}}') == "bad model"
    assert extract_api_error("x" * 300) == "x" * 200


@pytest.mark.parametrize(
    "status,kind",
    [(400, "bad_request"), (401, "auth"), (429, "rate_limit"), (500, "server_error"),
     (502, "server_error"), (503, "server_error"), (504, "server_error"), (520, "server_error"),
     (599, "server_error"), (418, "bad_request")],
)
def test_map_http_error(status, kind):
    """Test status classification."""
    error = map_http_error(status, "{}")
    assert error.kind == kind
    assert error.status == status


def test_complete_success():
    """Test headers, body and answer extraction."""
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"output_text": "Done."})

    client = _client(handler)
    result = asyncio.run(client.complete("sys", "question"))

    assert result == "Done."
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["instructions"] == "sys"
    assert seen["body"]["input"] == "question"


def test_complete_without_key():
    """Test that no request is made without an API key."""
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"output_text": "x"})

    with pytest.raises(CompletionError) as exc_info:
        asyncio.run(_client(handler, api_key="").complete("s", "u"))
    assert exc_info.value.kind == "auth"
    assert calls == []


def test_complete_http_error():
    """Test that error statuses are mapped."""

    def handler(request):
        return httpx.Response(429, json={"error": {"message": "slow down"}})

    with pytest.raises(CompletionError) as exc_info:
        asyncio.run(_client(handler).complete("s", "u"))
    assert exc_info.value.kind == "rate_limit"
    assert exc_info.value.status == 429


def test_complete_gateway_timeout():
    """Test that any 5xx status is a server error."""

    def handler(request):
        return httpx.Response(504, text="upstream timed out")

    with pytest.raises(CompletionError) as exc_info:
        asyncio.run(_client(handler).complete("s", "u"))
    assert exc_info.value.kind == "server_error"
    assert "504" in str(exc_info.value)


def test_complete_network_error():
    """Test transport failures."""

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CompletionError) as exc_info:
        asyncio.run(_client(handler).complete("s", "u"))
    assert exc_info.value.kind == "network"
