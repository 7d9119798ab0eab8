"""Cleanup applied to raw completions before they are written."""

from __future__ import annotations

_FENCE = "```"
_WRAPPER_LANGUAGES = {"", "markdown", "md"}


def strip_code_fence(content: str) -> str:
    """Remove one fenced block that wraps the whole response.

    Only a fence with no language or a markdown language hint counts as a
    wrapper, and only when its matching close is the last line. A fence with
    an info string opens a nested level and a bare fence closes the innermost
    one, so a response made of several separate code blocks is left alone.
    Inner content is kept as is apart from the blank lines directly inside
    the wrapper.
    """
    lines = content.strip().splitlines()
    if len(lines) < 2 or not lines[0].startswith(_FENCE):
        return content
    if lines[0][len(_FENCE):].strip().lower() not in _WRAPPER_LANGUAGES:
        return content

    depth = 1
    for index, line in enumerate(lines[1:], start=1):
        stripped = line.strip()
        if not stripped.startswith(_FENCE):
            continue
        if stripped[len(_FENCE):].strip():
            depth += 1
            continue
        depth -= 1
        if depth == 0:
            if index != len(lines) - 1:
                return content
            return "\n".join(lines[1:-1]).strip("\n")
    return content


def normalise_section(content: str) -> str:
    """Return section text with ``\\n`` line endings, ending in one blank line."""
    lines = content.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return ""
    return "\n".join(lines) + "\n\n"


__all__ = ["normalise_section", "strip_code_fence"]
