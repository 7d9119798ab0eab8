"""Bounded context assembly from ordered file chunks."""

from __future__ import annotations

from typing import Iterable, List, Sequence

TRUNCATION_MARKER = "\n\n... [Content truncated for API efficiency] ..."
CHUNK_SEPARATOR = "\n\n"

_IMPORTANT_PATH_HINTS: tuple[str, ...] = (
    "main",
    "cargo.toml",
    "package.json",
    "pyproject.toml",
    "go.mod",
    "cli",
    "lib.",
    "mod.rs",
)
_EXCLUDED_OTHER_HINTS: tuple[str, ...] = ("test", "target", "node_modules")
_OTHER_CHUNK_MAX_CHARS = 10_000
DEFAULT_OTHER_LIMIT = 8


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


def slice_context(text: str, max_bytes: int) -> str:
    """Return the longest prefix of ``text`` that fits in ``max_bytes`` UTF-8 bytes."""
    if max_bytes <= 0:
        return ""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    # errors="ignore" drops a multi-byte character split by the cut.
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def chunk_path(chunk: str) -> str:
    """Return the path header of a ``"<path>:\\n<content>"`` chunk."""
    first_line = chunk.split("\n", 1)[0]
    return first_line[:-1] if first_line.endswith(":") else first_line


class ContextAssembler:
    """Joins chunks in order and truncates on whole-chunk boundaries.

    The result never exceeds ``max_bytes`` plus the marker length. When even
    the first chunk is larger than the budget, that chunk is cut on a
    character boundary instead of returning an empty context.
    """

    def __init__(self, marker: str = TRUNCATION_MARKER) -> None:
        self.marker = marker

    def assemble(self, chunks: Iterable[str], max_bytes: int) -> str:
        ordered = list(chunks)
        if not ordered:
            return ""
        combined = CHUNK_SEPARATOR.join(ordered)
        if _utf8_len(combined) <= max_bytes:
            return combined

        kept: List[str] = []
        used = 0
        separator_bytes = _utf8_len(CHUNK_SEPARATOR)
        for chunk in ordered:
            cost = _utf8_len(chunk) + (separator_bytes if kept else 0)
            if used + cost > max_bytes:
                break
            kept.append(chunk)
            used += cost

        if kept:
            body = CHUNK_SEPARATOR.join(kept)
        else:
            body = slice_context(ordered[0], max_bytes)
        return f"{body}{self.marker}"

    @staticmethod
    def filter_important_chunks(
        chunks: Sequence[str], other_limit: int = DEFAULT_OTHER_LIMIT
    ) -> List[str]:
        """Keep entry-point and manifest chunks, plus a few other short non-test chunks."""
        important: List[str] = []
        other: List[str] = []
        for chunk in chunks:
            if not chunk.strip():
                continue
            path = chunk_path(chunk).lower()
            if any(hint in path for hint in _IMPORTANT_PATH_HINTS):
                important.append(chunk)
            elif not any(hint in path for hint in _EXCLUDED_OTHER_HINTS) and len(chunk) < _OTHER_CHUNK_MAX_CHARS:
                other.append(chunk)

        important.extend(other[:other_limit])
        return important


__all__ = [
    "CHUNK_SEPARATOR",
    "ContextAssembler",
    "DEFAULT_OTHER_LIMIT",
    "TRUNCATION_MARKER",
    "chunk_path",
    "slice_context",
]
