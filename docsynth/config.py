"""Configuration loading for docsynth (.docsynth.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".docsynth.yml"

PROVIDERS = ("gemini", "openai")
MODES = ("incremental", "monolithic")

# Context budgets in bytes. Monolithic budgets follow each backend's token limits.
DEFAULT_MAX_BYTES = {"gemini": 50_000, "openai": 60_000}
INCREMENTAL_MAX_BYTES = 15_000

API_KEY_ENV = {
    "gemini": ("DOCSYNTH_API_KEY", "GEMINI_API_KEY"),
    "openai": ("DOCSYNTH_API_KEY", "OPENAI_API_KEY"),
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Completion backend settings."""

    provider: str = "gemini"
    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None


@dataclass
class ContextConfig:
    """Discovery and context budget settings."""

    max_bytes: Optional[int] = None
    important_first: Optional[bool] = None
    other_limit: int = 8
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class PromptConfig:
    """Style prefix sources; ``text`` wins over ``file``, ``instructions`` are appended."""

    text: Optional[str] = None
    file: Optional[Path] = None
    instructions: Optional[str] = None
    templates_dir: Optional[Path] = None


@dataclass
class DocsynthConfig:
    """Represents the settings defined in .docsynth.yml."""

    root: Path
    llm: LLMConfig = field(default_factory=LLMConfig)
    context: ContextConfig = field(default_factory=ContextConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)
    mode: str = "incremental"
    sections: List[str] = field(default_factory=list)
    output: Optional[Path] = None

    def resolve_max_bytes(self) -> int:
        if self.context.max_bytes is not None:
            return self.context.max_bytes
        if self.mode == "incremental":
            return INCREMENTAL_MAX_BYTES
        return DEFAULT_MAX_BYTES.get(self.llm.provider, INCREMENTAL_MAX_BYTES)

    def resolve_important_first(self) -> bool:
        if self.context.important_first is not None:
            return self.context.important_first
        return self.mode == "monolithic"

    def resolve_output(self) -> Path:
        if self.output is None:
            return self.root / "README.md"
        return self.output if self.output.is_absolute() else self.root / self.output

    def resolve_api_key(self) -> Optional[str]:
        if self.llm.api_key:
            return self.llm.api_key
        for key in API_KEY_ENV.get(self.llm.provider, ("DOCSYNTH_API_KEY",)):
            value = os.getenv(key)
            if value:
                return value
        return None


def load_config(config_path: Path) -> DocsynthConfig:
    """Load configuration from a repository directory or an explicit file path."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocsynthConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    llm_data = _as_dict(data.get("llm"))
    provider = (_as_str(llm_data.get("provider")) or "gemini").lower()
    if provider not in PROVIDERS:
        raise ConfigError(f"Unknown llm.provider '{provider}'; expected one of {', '.join(PROVIDERS)}")
    llm = LLMConfig(
        provider=provider,
        model=_as_str(llm_data.get("model")),
        base_url=_as_str(llm_data.get("base_url")),
        api_key=_as_str(llm_data.get("api_key")),
        temperature=_as_float(llm_data.get("temperature")),
        max_tokens=_as_int(llm_data.get("max_tokens")),
        request_timeout=_as_float(llm_data.get("request_timeout")),
    )

    context_data = _as_dict(data.get("context"))
    context = ContextConfig(
        max_bytes=_as_int(context_data.get("max_bytes")),
        important_first=_as_bool(context_data.get("important_first")),
        other_limit=_as_int(context_data.get("other_limit")) or 8,
        exclude_paths=_as_str_list(context_data.get("exclude_paths")),
    )
    if context.max_bytes is not None and context.max_bytes <= 0:
        raise ConfigError("context.max_bytes must be a positive integer")

    prompt_data = _as_dict(data.get("prompt"))
    prompt_file = _as_str(prompt_data.get("file"))
    templates_dir = _as_str(prompt_data.get("templates_dir"))
    prompt = PromptConfig(
        text=_as_str(prompt_data.get("text")),
        file=root / prompt_file if prompt_file else None,
        instructions=_as_str(prompt_data.get("instructions")),
        templates_dir=root / templates_dir if templates_dir else None,
    )

    generation_data = _as_dict(data.get("generation"))
    mode = (_as_str(generation_data.get("mode")) or "incremental").lower()
    if mode not in MODES:
        raise ConfigError(f"Unknown generation.mode '{mode}'; expected one of {', '.join(MODES)}")
    output = _as_str(generation_data.get("output"))

    return DocsynthConfig(
        root=root,
        llm=llm,
        context=context,
        prompt=prompt,
        mode=mode,
        sections=_as_str_list(generation_data.get("sections")),
        output=Path(output) if output else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.replace("_", ""))
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "API_KEY_ENV",
    "CONFIG_FILENAME",
    "ConfigError",
    "ContextConfig",
    "DEFAULT_MAX_BYTES",
    "DocsynthConfig",
    "INCREMENTAL_MAX_BYTES",
    "LLMConfig",
    "MODES",
    "PROVIDERS",
    "PromptConfig",
    "load_config",
]
