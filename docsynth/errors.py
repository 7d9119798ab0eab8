"""Exception hierarchy for discovery, completion and document writing."""

from __future__ import annotations

from pathlib import Path


class DocsynthError(RuntimeError):
    """Base class for errors surfaced to docsynth callers."""


class EmptyCorpusError(DocsynthError):
    """Raised when discovery yields no usable files for a repository."""

    def __init__(self, root: Path) -> None:
        super().__init__(f"No relevant files found under {root}")
        self.root = root


class ServiceError(DocsynthError):
    """Raised when the completion backend fails or rejects a request."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        detail = f"status {status}: {message}" if status is not None else message
        super().__init__(detail)
        self.status = status
        self.message = message


class MalformedResponseError(ServiceError):
    """Raised when a successful response lacks the expected text field."""


class SinkError(DocsynthError):
    """Raised when the output document cannot be opened, locked or written."""


class StageFailedError(DocsynthError):
    """Raised when a pipeline stage aborts the run."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(f"Stage '{stage}' failed: {cause}")
        self.stage = stage
        self.cause = cause


class PipelineCancelled(DocsynthError):
    """Raised when a run is cancelled between two stages."""

    def __init__(self, next_stage: str | None) -> None:
        where = f"before stage '{next_stage}'" if next_stage else "before finalizing"
        super().__init__(f"Pipeline cancelled {where}")
        self.next_stage = next_stage


__all__ = [
    "DocsynthError",
    "EmptyCorpusError",
    "MalformedResponseError",
    "PipelineCancelled",
    "ServiceError",
    "SinkError",
    "StageFailedError",
]
