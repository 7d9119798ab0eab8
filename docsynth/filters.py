"""Directory and file predicates applied while walking a source tree."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Sequence

from .constants import (
    BINARY_SNIFF_BYTES,
    CODE_EXTENSIONS,
    EXTENSIONLESS_SCRIPTS,
    IMPORTANT_FILES,
    IMPORTANT_HIDDEN_DIRECTORIES,
    MAX_FILE_BYTES,
    SKIP_DIRECTORIES,
    SKIP_DIRECTORY_FRAGMENTS,
    SKIP_DIRECTORY_SUFFIXES,
    SKIP_FILE_PATTERNS,
)


@dataclass(frozen=True)
class IgnoreRule:
    """A gitignore-style pattern supplied through ``exclude_paths``."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern or pattern.startswith("#"):
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def build_ignore_rules(patterns: Iterable[str]) -> List[IgnoreRule]:
    rules: List[IgnoreRule] = []
    for pattern in patterns:
        rule = build_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def is_important_file(name: str) -> bool:
    """Return True when ``name`` is a manifest, README, LICENSE or build descriptor."""
    return name.lower() in IMPORTANT_FILES


def has_code_extension(path: Path) -> bool:
    suffix = path.suffix
    if not suffix:
        return False
    return suffix[1:].lower() in CODE_EXTENSIONS


def should_skip_directory(name: str) -> bool:
    """Return True when a directory named ``name`` must not be descended into."""
    lowered = name.lower()

    if lowered in SKIP_DIRECTORIES:
        return True

    if lowered.startswith(".") and len(lowered) > 1:
        if lowered not in IMPORTANT_HIDDEN_DIRECTORIES:
            return True

    if any(fragment in lowered for fragment in SKIP_DIRECTORY_FRAGMENTS):
        return True
    return lowered.endswith(SKIP_DIRECTORY_SUFFIXES)


def _matches_skip_pattern(lowered_name: str) -> bool:
    return any(fnmatchcase(lowered_name, pattern) for pattern in SKIP_FILE_PATTERNS)


def _is_extensionless_script(lowered_name: str) -> bool:
    return lowered_name.startswith("makefile") or lowered_name in EXTENSIONLESS_SCRIPTS


def _looks_binary(path: Path) -> bool:
    with path.open("rb") as handle:
        head = handle.read(BINARY_SNIFF_BYTES)
    return b"\x00" in head


def should_skip_file(path: Path) -> bool:
    """Apply the ordered file rules; the first rule that matches decides.

    Important files are always kept. Otherwise deny patterns, the size
    ceiling and a NUL-byte sniff on extension-less files exclude a file.
    Files that cannot be stat'ed or read are excluded rather than raising.
    """
    name = path.name
    lowered = name.lower()

    if is_important_file(name):
        return False

    if _matches_skip_pattern(lowered):
        return True

    try:
        size = path.stat().st_size
    except OSError:
        return True
    if size > MAX_FILE_BYTES:
        return True

    if not path.suffix and not _is_extensionless_script(lowered):
        try:
            if _looks_binary(path):
                return True
        except OSError:
            return True

    return False


def is_candidate(path: Path) -> bool:
    return has_code_extension(path) or is_important_file(path.name)


class PathFilter:
    """Combines the built-in rules with user-supplied exclude patterns."""

    def __init__(self, exclude_paths: Sequence[str] | None = None) -> None:
        self._rules = build_ignore_rules(exclude_paths or ())

    def descend(self, name: str, rel_path: str = "") -> bool:
        if should_skip_directory(name):
            return False
        return not self._ignored(rel_path or name, is_dir=True)

    def accepts(self, path: Path, rel_path: str = "") -> bool:
        if self._ignored(rel_path or path.name, is_dir=False):
            return False
        if should_skip_file(path):
            return False
        return is_candidate(path)

    def _ignored(self, rel_path: str, *, is_dir: bool) -> bool:
        return any(rule.matches(rel_path, is_dir) for rule in self._rules)


__all__ = [
    "IgnoreRule",
    "PathFilter",
    "build_ignore_rule",
    "build_ignore_rules",
    "has_code_extension",
    "is_candidate",
    "is_important_file",
    "should_skip_directory",
    "should_skip_file",
]
