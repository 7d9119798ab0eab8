"""Repository walking: prune, filter, read and rank the files worth describing."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Tuple

from .filters import PathFilter
from .logging import get_logger
from .models import DiscoveryResult, DiscoveryStats, FileRecord
from .scoring import PriorityScorer


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


class FileDiscoverer:
    """Walks a source tree and returns its relevant files, most important first."""

    def __init__(
        self,
        path_filter: PathFilter | None = None,
        scorer: PriorityScorer | None = None,
    ) -> None:
        self.path_filter = path_filter or PathFilter()
        self.scorer = scorer or PriorityScorer()
        self.logger = get_logger("discovery")

    def discover(self, root: str | os.PathLike[str]) -> DiscoveryResult:
        """Return the ordered records found under ``root``.

        Pruned directories are never opened. Files that fail the filters,
        cannot be decoded as UTF-8 or hold only whitespace are counted in
        the result stats and left out. An empty result is not an error.
        """
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Repository path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Repository path is not a directory: {root}")

        stats = DiscoveryStats()
        records: List[FileRecord] = []

        for path, rel_path in self._iter_files(root_path):
            stats.seen += 1
            if not self.path_filter.accepts(path, rel_path):
                stats.filtered += 1
                continue

            content = _read_text(path)
            if content is None:
                stats.unreadable += 1
                self.logger.debug("Skipping unreadable file %s", rel_path)
                continue
            if not content.strip():
                stats.empty += 1
                continue

            records.append(
                FileRecord(
                    path=path,
                    relative_path=rel_path,
                    raw_content=content,
                    priority=self.scorer.score(Path(rel_path)),
                )
            )

        # list.sort is stable, so equal scores keep walk order.
        records.sort(key=lambda record: record.priority, reverse=True)
        stats.accepted = len(records)

        self.logger.debug(
            "Discovered %d relevant files from %d total (%d filtered, %d unreadable, %d empty)",
            stats.accepted,
            stats.seen,
            stats.filtered,
            stats.unreadable,
            stats.empty,
        )
        return DiscoveryResult(root=root_path, records=records, stats=stats)

    def _iter_files(self, root: Path) -> Iterator[Tuple[Path, str]]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept: List[str] = []
            for name in sorted(dirnames):
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if self.path_filter.descend(name, rel_path):
                    kept.append(name)
            dirnames[:] = kept

            for filename in sorted(filenames):
                path = current_dir / filename
                if not path.is_file():
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                yield path, rel_path


__all__ = ["FileDiscoverer"]
