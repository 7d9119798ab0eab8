"""Completion service contract and the shared JSON-over-HTTP transport."""

from __future__ import annotations

import http.client
import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import MalformedResponseError, ServiceError

DEFAULT_REQUEST_TIMEOUT = 120.0

Transport = Callable[[Request, float], bytes]


def _urlopen_transport(request: Request, timeout: float) -> bytes:
    with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
        return response.read()


class CompletionService(ABC):
    """Turns a prompt plus a style context into generated text."""

    name = "completion"

    def __init__(
        self,
        *,
        request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        self.request_timeout = request_timeout or DEFAULT_REQUEST_TIMEOUT
        self._transport = transport or _urlopen_transport

    @abstractmethod
    def complete(self, prompt: str, style_context: str) -> str:
        """Return generated text or raise :class:`ServiceError`."""

    def _post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> Dict[str, Any]:
        data = json.dumps(payload).encode("utf-8")
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)
        request = Request(url, data=data, headers=request_headers, method="POST")

        try:
            raw = self._transport(request, self.request_timeout)
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or str(exc.reason)
            raise ServiceError(f"{self.name} request failed: {message}", status=exc.code) from exc
        except URLError as exc:
            raise ServiceError(f"{self.name} request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise ServiceError(
                f"{self.name} request timed out after {self.request_timeout:g}s"
            ) from exc
        except (OSError, http.client.HTTPException) as exc:
            raise ServiceError(f"{self.name} request failed: {exc!r}") from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedResponseError(f"{self.name} returned invalid JSON") from exc
        if not isinstance(response_payload, dict):
            raise MalformedResponseError(f"{self.name} returned a non-object JSON payload")

        error = response_payload.get("error")
        if error:
            raise ServiceError(f"{self.name} API error: {_describe_error(error)}", status=_error_code(error))
        return response_payload


def _describe_error(error: object) -> str:
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return json.dumps(error) if not isinstance(error, str) else error


def _error_code(error: object) -> int | None:
    if isinstance(error, dict):
        code = error.get("code")
        if isinstance(code, int):
            return code
    return None


__all__ = ["CompletionService", "DEFAULT_REQUEST_TIMEOUT", "Transport"]
