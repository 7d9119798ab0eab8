"""Generate README documents from a source tree with an LLM backend."""

from .context import ContextAssembler
from .discovery import FileDiscoverer
from .errors import (
    DocsynthError,
    EmptyCorpusError,
    MalformedResponseError,
    PipelineCancelled,
    ServiceError,
    SinkError,
    StageFailedError,
)
from .filters import PathFilter
from .orchestrator import GenerationOptions, GenerationOutcome, Orchestrator
from .pipeline import PipelineState, SectionPipeline
from .scoring import PriorityScorer
from .sink import DocumentSink

__all__ = [
    "ContextAssembler",
    "DocsynthError",
    "DocumentSink",
    "EmptyCorpusError",
    "FileDiscoverer",
    "GenerationOptions",
    "GenerationOutcome",
    "MalformedResponseError",
    "Orchestrator",
    "PathFilter",
    "PipelineCancelled",
    "PipelineState",
    "PriorityScorer",
    "SectionPipeline",
    "ServiceError",
    "SinkError",
    "StageFailedError",
]
