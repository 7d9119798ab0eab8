"""Core data models shared across docsynth components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


def format_chunk(path: str, content: str) -> str:
    """Render one file as a context chunk: ``"<path>:\\n<content>"``."""
    return f"{path}:\n{content}"


@dataclass(frozen=True)
class FileRecord:
    """A discovered file, its text and its ordering priority."""

    path: Path
    relative_path: str
    raw_content: str
    priority: int

    def to_chunk(self) -> str:
        return format_chunk(self.relative_path, self.raw_content)


@dataclass
class DiscoveryStats:
    """Counters for files seen during a walk; skipped files are only counted."""

    seen: int = 0
    filtered: int = 0
    unreadable: int = 0
    empty: int = 0
    accepted: int = 0

    @property
    def skipped(self) -> int:
        return self.filtered + self.unreadable + self.empty


@dataclass
class DiscoveryResult:
    """Ordered records produced by a discovery pass."""

    root: Path
    records: List[FileRecord] = field(default_factory=list)
    stats: DiscoveryStats = field(default_factory=DiscoveryStats)

    def chunks(self) -> List[str]:
        return [record.to_chunk() for record in self.records]

    def __len__(self) -> int:
        return len(self.records)


__all__ = ["DiscoveryResult", "DiscoveryStats", "FileRecord", "format_chunk"]
