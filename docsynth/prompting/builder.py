"""Renders stage prompts and the caller's style prefix."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..context import slice_context
from .constants import DEFAULT_STYLE_PREFIX, Stage

_BUILTIN_TEMPLATES = Path(__file__).with_name("templates")


def build_style_prefix(
    text: Optional[str] = None,
    *,
    prompt_file: Optional[Path] = None,
    instructions: Optional[str] = None,
) -> str:
    """Combine a custom prompt (inline text wins over a file) with extra instructions.

    With neither a custom prompt nor a file the built-in baseline is used.
    Instructions are appended after a blank line in both cases.
    """
    base = (text or "").strip()
    if not base and prompt_file is not None:
        base = prompt_file.read_text(encoding="utf-8").strip()
    if not base:
        base = DEFAULT_STYLE_PREFIX

    extra = (instructions or "").strip()
    if extra:
        return f"{base}\n\nAdditional instructions:\n{extra}"
    return base


class PromptBuilder:
    """Turns a stage and the assembled context into the prompt text sent to the backend."""

    def __init__(self, templates_dir: Path | None = None, *, project_name: str = "this project") -> None:
        self.templates_dir = templates_dir
        self.project_name = project_name
        # Search order: project overrides first, packaged templates last.
        directories = [str(templates_dir)] if templates_dir is not None else []
        directories.append(str(_BUILTIN_TEMPLATES))
        self._env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def context_slice(self, stage: Stage, context: str) -> str:
        if stage.context_slice_bytes is None:
            return context
        return slice_context(context, stage.context_slice_bytes)

    def build(self, stage: Stage, context: str) -> str:
        template = self._env.get_template(stage.template)
        return template.render(
            context=self.context_slice(stage, context),
            project_name=self.project_name,
            stage=stage,
        )


__all__ = ["PromptBuilder", "build_style_prefix"]
