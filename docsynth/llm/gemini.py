"""Google Gemini ``generateContent`` backend."""

from __future__ import annotations

from typing import Any, Dict
from urllib.parse import quote, urlencode

from ..errors import MalformedResponseError, ServiceError
from .base import DEFAULT_REQUEST_TIMEOUT, CompletionService, Transport


class GeminiService(CompletionService):
    """Gemini has no system role here; the style context is prepended to the prompt."""

    name = "Gemini"
    DEFAULT_MODEL = "gemini-2.0-flash"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: str,
        *,
        model: str | None = None,
        base_url: str | None = None,
        request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        super().__init__(request_timeout=request_timeout, transport=transport)
        if not api_key:
            raise ServiceError("Gemini requires an API key")
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")

    def endpoint(self) -> str:
        query = urlencode({"key": self.api_key})
        return f"{self.base_url}/models/{quote(self.model, safe='')}:generateContent?{query}"

    def complete(self, prompt: str, style_context: str) -> str:
        text = f"{style_context}\n\n{prompt}" if style_context else prompt
        payload = {"contents": [{"parts": [{"text": text}]}]}
        response = self._post_json(self.endpoint(), payload)
        content = self._extract_text(response)
        if content is None:
            raise MalformedResponseError(
                "Failed to parse Gemini response: missing candidates[0].content.parts[0].text"
            )
        return content

    @staticmethod
    def _extract_text(payload: Dict[str, Any]) -> str | None:
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return None
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        if not isinstance(content, dict):
            return None
        parts = content.get("parts")
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            return None
        text = parts[0].get("text")
        return text if isinstance(text, str) else None


__all__ = ["GeminiService"]
