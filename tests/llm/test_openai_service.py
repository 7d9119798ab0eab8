"""Tests for the OpenAI-compatible completion backend."""

from __future__ import annotations

import http.client
import io
import json
from typing import Any, Dict, List
from urllib.error import HTTPError, URLError
from urllib.request import Request

import pytest

from docsynth.errors import MalformedResponseError, ServiceError
from docsynth.llm.openai import OpenAIService


class RecordingTransport:
    """Returns canned JSON bodies and records the requests it was given."""

    def __init__(self, *bodies: Any) -> None:
        self.bodies = list(bodies)
        self.requests: List[Request] = []
        self.timeouts: List[float] = []

    def __call__(self, request: Request, timeout: float) -> bytes:
        self.requests.append(request)
        self.timeouts.append(timeout)
        body = self.bodies.pop(0)
        if isinstance(body, BaseException):
            raise body
        if isinstance(body, bytes):
            return body
        return json.dumps(body).encode("utf-8")

    def payload(self, index: int = 0) -> Dict[str, Any]:
        return json.loads(self.requests[index].data.decode("utf-8"))


def _chat_response(content: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_openai_posts_chat_completion_payload() -> None:
    transport = RecordingTransport(_chat_response("# Title"))
    service = OpenAIService("sk-test", transport=transport)

    result = service.complete("Generate a title", "You are a writer.")

    assert result == "# Title"
    request = transport.requests[0]
    assert request.full_url == "https://api.openai.com/v1/chat/completions"
    assert request.get_method() == "POST"
    assert request.get_header("Authorization") == "Bearer sk-test"
    assert transport.payload() == {
        "model": "gpt-4",
        "messages": [
            {"role": "system", "content": "You are a writer."},
            {"role": "user", "content": "Generate a title"},
        ],
        "temperature": 0.7,
        "max_tokens": 4000,
    }
    assert transport.timeouts == [120.0]


def test_openai_local_runtime_without_key_sends_no_auth_header() -> None:
    transport = RecordingTransport(_chat_response("ok"))
    service = OpenAIService(
        None,
        model="llama3",
        base_url="http://localhost:11434/v1/",
        temperature=None,
        max_tokens=None,
        request_timeout=5,
        transport=transport,
    )

    assert service.complete("prompt", "") == "ok"

    request = transport.requests[0]
    assert request.full_url == "http://localhost:11434/v1/chat/completions"
    assert request.get_header("Authorization") is None
    assert transport.payload() == {
        "model": "llama3",
        "messages": [{"role": "user", "content": "prompt"}],
    }
    assert transport.timeouts == [5]


def test_openai_accepts_legacy_text_choice() -> None:
    transport = RecordingTransport({"choices": [{"text": "legacy"}]})

    assert OpenAIService("k", transport=transport).complete("p", "s") == "legacy"


@pytest.mark.parametrize(
    "body",
    [
        {"choices": []},
        {"choices": [{"message": {"content": None}}]},
        {"id": "chatcmpl-1"},
    ],
)
def test_openai_missing_content_is_malformed(body: Dict[str, Any]) -> None:
    service = OpenAIService("k", transport=RecordingTransport(body))

    with pytest.raises(MalformedResponseError):
        service.complete("p", "s")


def test_openai_invalid_json_is_malformed() -> None:
    service = OpenAIService("k", transport=RecordingTransport(b"<html>bad gateway</html>"))

    with pytest.raises(MalformedResponseError):
        service.complete("p", "s")


def test_openai_http_error_carries_status_and_body() -> None:
    error = HTTPError(
        "https://api.openai.com/v1/chat/completions",
        401,
        "Unauthorized",
        {},  # type: ignore[arg-type]
        io.BytesIO(b'{"error": {"message": "Incorrect API key"}}'),
    )
    service = OpenAIService("bad", transport=RecordingTransport(error))

    with pytest.raises(ServiceError) as excinfo:
        service.complete("p", "s")

    assert excinfo.value.status == 401
    assert "Incorrect API key" in str(excinfo.value)


def test_openai_error_payload_raises_service_error() -> None:
    body = {"error": {"message": "Rate limit reached", "code": 429}}
    service = OpenAIService("k", transport=RecordingTransport(body))

    with pytest.raises(ServiceError) as excinfo:
        service.complete("p", "s")

    assert excinfo.value.status == 429
    assert "Rate limit reached" in str(excinfo.value)
    assert not isinstance(excinfo.value, MalformedResponseError)


def test_openai_network_failures_become_service_errors() -> None:
    service = OpenAIService("k", transport=RecordingTransport(URLError("connection refused")))
    with pytest.raises(ServiceError, match="connection refused"):
        service.complete("p", "s")

    service = OpenAIService("k", request_timeout=3, transport=RecordingTransport(TimeoutError()))
    with pytest.raises(ServiceError, match="timed out after 3s"):
        service.complete("p", "s")

    service = OpenAIService("k", transport=RecordingTransport(ConnectionResetError("reset by peer")))
    with pytest.raises(ServiceError, match="reset by peer"):
        service.complete("p", "s")

    service = OpenAIService("k", transport=RecordingTransport(http.client.IncompleteRead(b"")))
    with pytest.raises(ServiceError, match="IncompleteRead"):
        service.complete("p", "s")

    service = OpenAIService("k", transport=RecordingTransport(http.client.RemoteDisconnected("closed")))
    with pytest.raises(ServiceError, match="RemoteDisconnected"):
        service.complete("p", "s")
