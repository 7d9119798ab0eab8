"""Helper utilities for constructing temporary source trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Mapping

from docsynth.discovery import FileDiscoverer
from docsynth.models import DiscoveryResult


class RepoBuilder:
    """Utility for writing files into a throwaway repository and rediscovering it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()
        self._discoverer = FileDiscoverer()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the repository."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_bytes(self, relative: str, data: bytes) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def discover(self) -> DiscoveryResult:
        """Return a fresh discovery pass over the repository."""
        return self._discoverer.discover(self.root)

    def discovered_paths(self) -> List[str]:
        return [record.relative_path for record in self.discover().records]

    def path(self) -> Path:
        """Return the repository root path."""
        return self.root


__all__ = ["RepoBuilder"]
