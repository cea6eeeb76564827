"""Completion client for the OpenAI Responses API."""

import json
import logging
import time
from typing import Any, Mapping

import httpx

from ..config import DEFAULT_API_URL, Settings
from ..core.ports import CompletionClient
from ..errors import CompletionError, EmptyCompletionResult

logger = logging.getLogger(__name__)


def build_request_body(
    settings: Settings,
    system_prompt: str,
    user_prompt: str,
    options: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build the JSON body of a Responses API call.

    options may override "model", "reasoning_effort" and
    "web_search_enabled" for a single request.
    """
    opts = dict(options or {})
    model = opts.get("model", settings.model)
    effort = opts.get("reasoning_effort", settings.reasoning_effort)
    web_search = opts.get("web_search_enabled", settings.web_search_enabled)

    body: dict[str, Any] = {
        "model": model,
        "input": user_prompt,
        "instructions": system_prompt,
    }
    if effort != "none":
        body["reasoning"] = {"effort": effort}
    if web_search:
        body["tools"] = [{"type": "web_search"}]
    return body


def extract_api_error(body: str) -> str:
    """The API's error.message when the body is JSON, else the first 200 chars."""
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return body[:200]
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return body[:200]


def map_http_error(status: int, body: str) -> CompletionError:
    detail = extract_api_error(body)
    if status == 400:
        return CompletionError("bad_request", f"Bad request: {detail}", status)
    if status == 401:
        return CompletionError("auth", "Invalid API key. Please check your key in glossa settings.", status)
    if status == 429:
        return CompletionError(
            "rate_limit", "Rate limited by OpenAI. Please wait a moment and try again.", status
        )
    if status in (500, 502, 503):
        return CompletionError("server_error", "OpenAI service error. Please try again later.", status)
    if status >= 500:
        return CompletionError("server_error", f"OpenAI API error ({status}): {detail}", status)
    return CompletionError("bad_request", f"OpenAI API error ({status}): {detail}", status)


def extract_response_text(response_text: str) -> str:
    """
    Pull the answer out of a Responses API payload.

    Top-level output_text wins; otherwise the first output_text block of
    the first message item in output is used.
    """
    try:
        data = json.loads(response_text)
    except json.JSONDecodeError as e:
        raise CompletionError("parse", f"Could not parse API response: {e}") from e
    if not isinstance(data, dict):
        raise CompletionError("parse", "Unexpected API response shape")

    output_text = data.get("output_text") or ""
    if not isinstance(output_text, str):
        raise CompletionError("parse", "Unexpected API response shape")

    text = output_text.strip()
    if not text:
        output = data.get("output") or []
        if not isinstance(output, list):
            raise CompletionError("parse", "Unexpected API response shape")
        for item in output:
            if not isinstance(item, dict):
                raise CompletionError("parse", "Unexpected API response shape")
            content = item.get("content")
            if item.get("type") != "message" or not isinstance(content, list):
                continue
            for block in content:
                if not isinstance(block, dict):
                    raise CompletionError("parse", "Unexpected API response shape")
                if block.get("type") == "output_text" and isinstance(block.get("text"), str) and block["text"]:
                    text = block["text"].strip()
                    break
            if text:
                break

    if not text:
        raise EmptyCompletionResult()
    return text


class OpenAIResponsesClient(CompletionClient):
    """Non-streaming completion over the Responses API."""

    def __init__(
        self,
        settings: Settings,
        url: str = DEFAULT_API_URL,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        if not self.settings.api_key:
            raise CompletionError("auth", "API key not configured. Please set it in glossa settings.")

        body = build_request_body(self.settings, system_prompt, user_prompt, options)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_key}",
        }

        start = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Completion request failed: %s", e)
            raise CompletionError("network", f"Network error: {e}") from e

        duration_ms = int((time.time() - start) * 1000)
        logger.debug("Completion model=%s status=%s (%dms)", body["model"], response.status_code, duration_ms)

        if response.is_error:
            raise map_http_error(response.status_code, response.text)

        return extract_response_text(response.text)
