"""Tests for API functionality."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from glossa import __version__
from glossa.api.app import create_app, generate_token
from glossa.errors import CompletionError
from glossa.runtime import API_KEY_ENV, build_runtime


@pytest.fixture
def workspace(monkeypatch):
    """Create an empty workspace."""
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.chdir(tmpdir)
        yield Path(tmpdir)


def _client(workspace, completion, token=None):
    rt = build_runtime(workspace_path=workspace, client=completion)
    return TestClient(create_app(rt, token=token))


def test_health_endpoint(workspace, fake_client):
    """Test /health endpoint."""
    response = _client(workspace, fake_client).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}


def test_auth_required(workspace, fake_client):
    """Test that endpoints require authentication when token is set."""
    token = generate_token()
    client = _client(workspace, fake_client, token=token)

    response = client.get("/health")
    assert response.status_code == 401

    response = client.get("/health", headers={"Authorization": "Bearer wrong"})
    assert response.status_code == 401

    response = client.get("/health", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_paragraph_endpoint(workspace, fake_client):
    """Test /paragraph on an annotation line."""
    client = _client(workspace, fake_client)
    lines = ["# Title", "", "Text {why}", "%%a, b%%"]

    response = client.post("/paragraph", json={"lines": lines, "line": 3})
    assert response.status_code == 200
    data = response.json()
    assert data["bounds"] == {"start_line": 2, "end_line": 2}
    assert data["text"] == "Text {why}"
    assert data["annotation_line"] == 3
    assert data["annotations"] == ["a", "b"]
    assert data["instruction"] == "why"
    assert data["context"].startswith("# Title")


def test_paragraph_endpoint_outside(workspace, fake_client):
    """Test /paragraph on a blank line and out of range."""
    client = _client(workspace, fake_client)
    assert client.post("/paragraph", json={"lines": ["a", ""], "line": 1}).json() == {"bounds": None}
    assert client.post("/paragraph", json={"lines": ["a"], "line": 5}).status_code == 422


def test_annotations_endpoint(workspace, fake_client):
    """Test /annotations returns the edited lines."""
    client = _client(workspace, fake_client)
    response = client.post(
        "/annotations", json={"lines": ["The cat sat.", "%%feline%%"], "line": 0, "items": ["perched"]}
    )
    assert response.status_code == 200
    assert response.json()["lines"] == ["The cat sat.", "%%feline, perched%%"]

    response = client.post("/annotations", json={"lines": ["x"], "line": 0, "items": [" "]})
    assert response.status_code == 422


def test_rewrite_endpoint(workspace, make_client):
    """Test /rewrite with a canned answer."""
    client = _client(workspace, make_client("The feline perched."))
    response = client.post(
        "/rewrite", json={"lines": ["The cat sat.", "%%feline, perched%%", ""], "line": 0}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["lines"] == ["The feline perched.", ""]
    assert data["text"] == "The feline perched."


def test_rewrite_without_annotations(workspace, fake_client):
    """Test missing annotations map to 422."""
    client = _client(workspace, fake_client)
    response = client.post("/rewrite", json={"lines": ["Text"], "line": 0})
    assert response.status_code == 422
    assert "annotations" in response.json()["detail"]


def test_rewrite_empty_answer(workspace, make_client):
    """Test an empty completion maps to 502."""
    client = _client(workspace, make_client("  "))
    response = client.post("/rewrite", json={"lines": ["Text", "%%x%%"], "line": 0})
    assert response.status_code == 502


@pytest.mark.parametrize("kind,status", [("auth", 401), ("rate_limit", 429), ("server_error", 502), ("network", 502)])
def test_completion_errors(workspace, make_client, kind, status):
    """Test completion error kinds map to status codes."""
    client = _client(workspace, make_client(error=CompletionError(kind, "failed")))
    response = client.post("/inspire", json={"lines": ["Idea {more}"], "line": 0})
    assert response.status_code == status
    assert response.json()["kind"] == kind


def test_inspire_endpoint(workspace, make_client):
    """Test /inspire nests bullets under a list item."""
    client = _client(workspace, make_client("first\nsecond"))
    response = client.post("/inspire", json={"lines": ["- Idea {more}"], "line": 0})
    assert response.status_code == 200
    data = response.json()
    assert data["lines"] == ["- Idea", "  - first", "  - second"]
    assert data["bullets"] == ["  - first", "  - second"]


def test_act_endpoint(workspace, make_client):
    """Test /act with a quick action and an unknown action."""
    client = _client(workspace, make_client("Hola"))
    response = client.post("/act", json={"text": "Hello", "action": "translate"})
    assert response.status_code == 200
    assert response.json() == {"text": "Hola"}

    response = client.post("/act", json={"text": "Hello", "action": "dance"})
    assert response.status_code == 422


def test_ask_endpoint(workspace, make_client):
    """Test /ask."""
    client = _client(workspace, make_client("42"))
    response = client.post("/ask", json={"query": "Meaning?"})
    assert response.status_code == 200
    assert response.json() == {"text": "42"}

    assert client.post("/ask", json={"query": " "}).status_code == 422
