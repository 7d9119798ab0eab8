"""Ordered, durable, fail-fast section pipeline."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, Sequence

from .errors import PipelineCancelled, ServiceError, SinkError, StageFailedError
from .llm.base import CompletionService
from .logging import get_logger
from .postproc.cleanup import normalise_section, strip_code_fence
from .postproc.diagram import FallbackDiagram, render_diagram_section
from .prompting.builder import PromptBuilder
from .prompting.constants import (
    CLOSING_BLOCK,
    DEFAULT_STYLE_PREFIX,
    INCREMENTAL_STAGES,
    MONOLITHIC_STAGES,
    Stage,
)


class Sink(Protocol):
    def write(self, text: str) -> None: ...

    def flush(self) -> None: ...


class PipelineMode(str, Enum):
    INCREMENTAL = "incremental"
    MONOLITHIC = "monolithic"


class PipelineState(Enum):
    """Lifecycle of a single run."""

    IDLE = "idle"
    STAGE = "stage"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class PipelineRun:
    """State threaded through the stages of one invocation."""

    context: str
    style_prefix: str
    sink: Sink
    state: PipelineState = PipelineState.IDLE
    current_stage: Optional[str] = None
    completed: List[str] = field(default_factory=list)
    error: Optional[BaseException] = None


@dataclass
class PipelineResult:
    """Outcome of a finished run."""

    state: PipelineState
    stages: List[str]


class SectionPipeline:
    """Runs stages strictly in order; a stage starts only after the previous one is on disk.

    Any backend failure aborts the run with :class:`StageFailedError` and
    leaves the sections already flushed untouched. Cancellation is observed
    only between stages so a section is never half written.
    """

    def __init__(
        self,
        service: CompletionService,
        stages: Sequence[Stage] | None = None,
        *,
        prompt_builder: PromptBuilder | None = None,
        closing_block: str = CLOSING_BLOCK,
        fallback_diagram: FallbackDiagram | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self.service = service
        self.stages: tuple[Stage, ...] = tuple(stages) if stages is not None else INCREMENTAL_STAGES
        if not self.stages:
            raise ValueError("SectionPipeline requires at least one stage")
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.closing_block = closing_block
        self.fallback_diagram = fallback_diagram
        self.cancel_event = cancel_event or threading.Event()
        self.logger = get_logger("pipeline")
        self.last_run: Optional[PipelineRun] = None

    @classmethod
    def for_mode(cls, mode: PipelineMode | str, service: CompletionService, **kwargs) -> "SectionPipeline":
        stages = kwargs.pop("stages", None)
        if PipelineMode(mode) is PipelineMode.MONOLITHIC:
            stages = MONOLITHIC_STAGES
        return cls(service, stages, **kwargs)

    def cancel(self) -> None:
        """Request cancellation; honoured before the next stage starts."""
        self.cancel_event.set()

    def run(self, context: str, style_prefix: str, sink: Sink) -> PipelineResult:
        run = PipelineRun(
            context=context,
            style_prefix=style_prefix.strip() or DEFAULT_STYLE_PREFIX,
            sink=sink,
        )
        self.last_run = run

        for index, stage in enumerate(self.stages, start=1):
            self._check_cancelled(run, stage.name)
            run.state = PipelineState.STAGE
            run.current_stage = stage.name
            self.logger.info("Generating %s (%d/%d)", stage.title.lower(), index, len(self.stages))
            section = self._generate(run, stage)
            self._persist(run, section)
            run.completed.append(stage.name)
            self.logger.info("%s written", stage.title)

        self._check_cancelled(run, None)
        run.state = PipelineState.FINALIZING
        run.current_stage = None
        self._persist(run, self.closing_block)
        run.state = PipelineState.DONE
        return PipelineResult(state=run.state, stages=list(run.completed))

    def _generate(self, run: PipelineRun, stage: Stage) -> str:
        prompt = self.prompt_builder.build(stage, run.context)
        try:
            raw = self.service.complete(prompt, run.style_prefix)
        except ServiceError as exc:
            run.state = PipelineState.FAILED
            run.error = exc
            self.logger.error("Stage %s failed: %s", stage.name, exc)
            raise StageFailedError(stage.name, exc) from exc

        if stage.kind == "diagram":
            body = render_diagram_section(stage.title, raw, self.fallback_diagram)
        else:
            body = strip_code_fence(raw)
        return normalise_section(body)

    def _persist(self, run: PipelineRun, text: str) -> None:
        try:
            if text:
                run.sink.write(text)
            run.sink.flush()
        except SinkError as exc:
            run.state = PipelineState.FAILED
            run.error = exc
            raise
        except OSError as exc:
            run.state = PipelineState.FAILED
            run.error = exc
            raise SinkError(f"Failed to persist output: {exc}") from exc

    def _check_cancelled(self, run: PipelineRun, next_stage: Optional[str]) -> None:
        if not self.cancel_event.is_set():
            return
        run.state = PipelineState.CANCELLED
        self.logger.warning("Run cancelled after %d completed stage(s)", len(run.completed))
        raise PipelineCancelled(next_stage)


__all__ = [
    "PipelineMode",
    "PipelineResult",
    "PipelineRun",
    "PipelineState",
    "SectionPipeline",
    "Sink",
]
