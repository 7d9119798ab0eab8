"""Exclusive, append-only output file flushed to disk after every stage."""

from __future__ import annotations

import os
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Optional, Type

from .errors import SinkError

_IS_WINDOWS = os.name == "nt"
if not _IS_WINDOWS:
    import fcntl
else:  # pragma: no cover - windows specific
    import msvcrt


class DocumentSink:
    """Owns the output path for the duration of one pipeline run.

    Entering truncates the file and takes a non-blocking exclusive lock, so a
    second run targeting the same path fails fast instead of interleaving.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._handle: Optional[BinaryIO] = None
        self.bytes_written = 0

    def open(self) -> "DocumentSink":
        if self._handle is not None:
            raise SinkError(f"Sink for {self.path} is already open")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Open without truncating so a locked file held by another run is left intact.
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o644)
            handle = os.fdopen(fd, "r+b", buffering=0)
        except OSError as exc:
            raise SinkError(f"Unable to open {self.path}: {exc}") from exc

        if not self._try_lock_exclusive(handle):
            handle.close()
            raise SinkError(f"{self.path} is locked by another docsynth run")

        try:
            handle.seek(0)
            handle.truncate(0)
        except OSError as exc:
            self._unlock(handle)
            handle.close()
            raise SinkError(f"Unable to truncate {self.path}: {exc}") from exc

        self._handle = handle
        self.bytes_written = 0
        return self

    def write(self, text: str) -> None:
        handle = self._require_handle()
        data = text.encode("utf-8")
        try:
            handle.seek(0, os.SEEK_END)
            handle.write(data)
        except OSError as exc:
            raise SinkError(f"Failed to write to {self.path}: {exc}") from exc
        self.bytes_written += len(data)

    def flush(self) -> None:
        """Push written bytes through to stable storage."""
        handle = self._require_handle()
        try:
            handle.flush()
            os.fsync(handle.fileno())
        except OSError as exc:
            raise SinkError(f"Failed to flush {self.path}: {exc}") from exc

    def close(self) -> None:
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        try:
            self._unlock(handle)
        finally:
            handle.close()

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __enter__(self) -> "DocumentSink":
        return self.open()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def _require_handle(self) -> BinaryIO:
        if self._handle is None:
            raise SinkError(f"Sink for {self.path} is not open")
        return self._handle

    @staticmethod
    def _try_lock_exclusive(handle: BinaryIO) -> bool:
        if _IS_WINDOWS:  # pragma: no cover
            try:
                handle.seek(0)
                msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)
                return True
            except OSError:
                return False
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            return True
        except OSError:
            return False

    @staticmethod
    def _unlock(handle: BinaryIO) -> None:
        try:
            if _IS_WINDOWS:  # pragma: no cover
                handle.seek(0)
                msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
            else:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
        except OSError:
            pass


__all__ = ["DocumentSink"]
