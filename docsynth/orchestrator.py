"""Coordinates a README generation run for one repository."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import ConfigError, DocsynthConfig, LLMConfig, PROVIDERS, MODES, load_config
from .context import TRUNCATION_MARKER, ContextAssembler
from .discovery import FileDiscoverer
from .errors import EmptyCorpusError
from .filters import PathFilter
from .llm import CompletionService, create_completion_service
from .logging import get_logger
from .models import DiscoveryResult
from .pipeline import PipelineResult, SectionPipeline
from .postproc.diagram import FallbackDiagram, detect_project_kind, top_level_components
from .prompting.builder import PromptBuilder, build_style_prefix
from .prompting.constants import Stage, select_stages
from .sink import DocumentSink

ServiceFactory = Callable[[LLMConfig, Optional[str]], CompletionService]


@dataclass
class GenerationOptions:
    """Per-run overrides layered on top of ``.docsynth.yml``."""

    provider: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None
    mode: Optional[str] = None
    prompt: Optional[str] = None
    prompt_file: Optional[Path] = None
    instructions: Optional[str] = None
    max_bytes: Optional[int] = None
    output: Optional[Path] = None
    sections: List[str] = field(default_factory=list)
    force: bool = False


@dataclass
class PreparedContext:
    """Discovery output and the bounded context built from it."""

    discovery: DiscoveryResult
    context: str

    @property
    def truncated(self) -> bool:
        return self.context.endswith(TRUNCATION_MARKER)


@dataclass
class GenerationOutcome:
    """Result of a completed generation run."""

    path: Path
    mode: str
    stages: List[str]
    files_used: int
    context_bytes: int
    truncated: bool


class Orchestrator:
    """Drives one README generation run for a repository path."""

    def __init__(
        self,
        *,
        assembler: ContextAssembler | None = None,
        service: CompletionService | None = None,
        service_factory: ServiceFactory | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self.assembler = assembler or ContextAssembler()
        self._service = service
        self._service_factory = service_factory or create_completion_service
        self.cancel_event = cancel_event or threading.Event()
        self.logger = get_logger("orchestrator")

    def load_config(self, repo_path: Path, options: GenerationOptions | None = None) -> DocsynthConfig:
        """Read ``.docsynth.yml`` and apply ``options`` on top of it."""
        config = load_config(repo_path)
        if options is None:
            return config
        return apply_options(config, options)

    def prepare(self, repo_path: Path, config: DocsynthConfig) -> PreparedContext:
        """Discover files and assemble the bounded context, without calling any backend."""
        discoverer = FileDiscoverer(PathFilter(config.context.exclude_paths))
        discovery = discoverer.discover(repo_path)
        self.logger.info(
            "Found %d relevant files from %d total", len(discovery), discovery.stats.seen
        )
        if not discovery.records:
            raise EmptyCorpusError(discovery.root)

        chunks = discovery.chunks()
        if config.resolve_important_first():
            chunks = self.assembler.filter_important_chunks(chunks, config.context.other_limit)
            self.logger.debug("Important-first filter kept %d chunks", len(chunks))

        context = self.assembler.assemble(chunks, config.resolve_max_bytes())
        return PreparedContext(discovery=discovery, context=context)

    def run(self, path: str, options: GenerationOptions | None = None) -> GenerationOutcome:
        """Generate the document for ``path`` and return where it was written."""
        repo_path = Path(path).expanduser().resolve()
        options = options or GenerationOptions()
        config = self.load_config(repo_path, options)
        output_path = config.resolve_output()
        _resolve_stages(config)

        if output_path.exists() and not options.force:
            raise FileExistsError(
                f"{output_path} already exists. Pass --force to overwrite it."
            )

        self.logger.info("Starting %s run for %s", config.mode, repo_path)
        prepared = self.prepare(repo_path, config)

        style_prefix = build_style_prefix(
            config.prompt.text,
            prompt_file=config.prompt.file,
            instructions=config.prompt.instructions,
        )
        service = self._resolve_service(config)
        pipeline = self._build_pipeline(repo_path, config, service, prepared.discovery)

        with DocumentSink(output_path) as sink:
            result: PipelineResult = pipeline.run(prepared.context, style_prefix, sink)

        self.logger.info("Document generated at %s", output_path)
        return GenerationOutcome(
            path=output_path,
            mode=config.mode,
            stages=result.stages,
            files_used=len(prepared.discovery),
            context_bytes=len(prepared.context.encode("utf-8")),
            truncated=prepared.truncated,
        )

    def _resolve_service(self, config: DocsynthConfig) -> CompletionService:
        if self._service is not None:
            return self._service
        return self._service_factory(config.llm, config.resolve_api_key())

    def _build_pipeline(
        self,
        repo_path: Path,
        config: DocsynthConfig,
        service: CompletionService,
        discovery: DiscoveryResult,
    ) -> SectionPipeline:
        paths = [record.relative_path for record in discovery.records]
        fallback = FallbackDiagram(
            kind=detect_project_kind(paths),
            components=top_level_components(paths),
        )
        builder = PromptBuilder(config.prompt.templates_dir, project_name=repo_path.name or "this project")
        return SectionPipeline.for_mode(
            config.mode,
            service,
            stages=_resolve_stages(config),
            prompt_builder=builder,
            fallback_diagram=fallback,
            cancel_event=self.cancel_event,
        )


def _resolve_stages(config: DocsynthConfig) -> List[Stage]:
    try:
        return select_stages(config.sections)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def apply_options(config: DocsynthConfig, options: GenerationOptions) -> DocsynthConfig:
    """Return a copy of ``config`` with the non-empty ``options`` applied."""
    llm = replace(config.llm)
    if options.provider:
        provider = options.provider.lower()
        if provider not in PROVIDERS:
            raise ConfigError(f"Unknown provider '{options.provider}'")
        llm.provider = provider
    if options.api_key:
        llm.api_key = options.api_key
    if options.model:
        llm.model = options.model

    context = replace(config.context)
    if options.max_bytes is not None:
        if options.max_bytes <= 0:
            raise ConfigError("max_bytes must be a positive integer")
        context.max_bytes = options.max_bytes

    prompt = replace(config.prompt)
    if options.prompt:
        prompt.text = options.prompt
    if options.prompt_file is not None:
        prompt.file = options.prompt_file
        if not options.prompt:
            prompt.text = None
    if options.instructions:
        prompt.instructions = options.instructions

    mode = config.mode
    if options.mode:
        mode = options.mode.lower()
        if mode not in MODES:
            raise ConfigError(f"Unknown mode '{options.mode}'")

    sections: Sequence[str] = options.sections or config.sections

    return replace(
        config,
        llm=llm,
        context=context,
        prompt=prompt,
        mode=mode,
        sections=list(sections),
        output=options.output if options.output is not None else config.output,
    )


__all__ = [
    "GenerationOptions",
    "GenerationOutcome",
    "Orchestrator",
    "PreparedContext",
    "apply_options",
]
