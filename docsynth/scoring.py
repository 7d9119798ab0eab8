"""Relative importance of discovered files, used only for ordering."""

from __future__ import annotations

from pathlib import PurePath

from .constants import CONFIG_EXTENSIONS, ENTRYPOINT_STEM_HINTS, SOURCE_ROOT_SEGMENTS
from .filters import is_important_file

IMPORTANT_SCORE = 100
SOURCE_ROOT_SCORE = 80
ENTRYPOINT_SCORE = 70
CONFIG_SCORE = 60
EXTENSION_SCORE = 50
FALLBACK_SCORE = 20


class PriorityScorer:
    """Scores a path; higher sorts earlier. First matching rule wins."""

    def score(self, path: PurePath) -> int:
        name = path.name
        if is_important_file(name):
            return IMPORTANT_SCORE

        directories = {part.lower() for part in path.parts[:-1]}
        if directories & SOURCE_ROOT_SEGMENTS:
            return SOURCE_ROOT_SCORE

        stem = path.stem.lower()
        if any(hint in stem for hint in ENTRYPOINT_STEM_HINTS):
            return ENTRYPOINT_SCORE

        suffix = path.suffix.lower().lstrip(".")
        if suffix in CONFIG_EXTENSIONS:
            return CONFIG_SCORE
        if suffix:
            return EXTENSION_SCORE
        return FALLBACK_SCORE

    __call__ = score


__all__ = [
    "CONFIG_SCORE",
    "ENTRYPOINT_SCORE",
    "EXTENSION_SCORE",
    "FALLBACK_SCORE",
    "IMPORTANT_SCORE",
    "PriorityScorer",
    "SOURCE_ROOT_SCORE",
]
