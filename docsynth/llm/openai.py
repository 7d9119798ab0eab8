"""OpenAI-compatible chat completions backend (hosted or local runtimes)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..errors import MalformedResponseError
from .base import DEFAULT_REQUEST_TIMEOUT, CompletionService, Transport


class OpenAIService(CompletionService):
    """Sends the style context as the system message and the prompt as the user message."""

    name = "OpenAI"
    DEFAULT_MODEL = "gpt-4"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str | None = None,
        base_url: str | None = None,
        temperature: Optional[float] = 0.7,
        max_tokens: Optional[int] = 4000,
        request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        super().__init__(request_timeout=request_timeout, transport=transport)
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens

    def complete(self, prompt: str, style_context: str) -> str:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": self._build_messages(style_context, prompt),
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens

        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        response = self._post_json(f"{self.base_url}/chat/completions", payload, headers)
        content = self._extract_content(response)
        if content is None:
            raise MalformedResponseError("Failed to parse OpenAI response: missing choices[0].message.content")
        return content

    @staticmethod
    def _build_messages(system: str, prompt: str) -> List[Dict[str, str]]:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    @staticmethod
    def _extract_content(payload: Dict[str, Any]) -> str | None:
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        first = choices[0]
        if not isinstance(first, dict):
            return None
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        text = first.get("text")
        if isinstance(text, str):
            return text
        return None


__all__ = ["OpenAIService"]
