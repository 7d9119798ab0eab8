"""Completion service backends."""

from __future__ import annotations

from ..config import LLMConfig
from ..errors import ServiceError
from .base import DEFAULT_REQUEST_TIMEOUT, CompletionService, Transport
from .gemini import GeminiService
from .openai import OpenAIService


def create_completion_service(
    config: LLMConfig,
    api_key: str | None,
    *,
    transport: Transport | None = None,
) -> CompletionService:
    """Build the backend named by ``config.provider``."""
    timeout = config.request_timeout or DEFAULT_REQUEST_TIMEOUT
    if config.provider == "gemini":
        if not api_key:
            raise ServiceError(
                "API key not provided. Set GEMINI_API_KEY or pass --api-key."
            )
        return GeminiService(
            api_key,
            model=config.model,
            base_url=config.base_url,
            request_timeout=timeout,
            transport=transport,
        )
    if config.provider == "openai":
        # Local OpenAI-compatible runtimes accept requests without a key.
        if not api_key and not config.base_url:
            raise ServiceError(
                "API key not provided. Set OPENAI_API_KEY or pass --api-key."
            )
        kwargs = {}
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        if config.max_tokens is not None:
            kwargs["max_tokens"] = config.max_tokens
        return OpenAIService(
            api_key,
            model=config.model,
            base_url=config.base_url,
            request_timeout=timeout,
            transport=transport,
            **kwargs,
        )
    raise ServiceError(f"Unsupported provider '{config.provider}'")


__all__ = [
    "CompletionService",
    "GeminiService",
    "OpenAIService",
    "create_completion_service",
]
