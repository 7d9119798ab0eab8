"""FastAPI application exposing README generation over HTTP."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError
from ..errors import DocsynthError, EmptyCorpusError, StageFailedError
from ..orchestrator import GenerationOptions, GenerationOutcome, Orchestrator


class GenerateRequest(BaseModel):
    path: str
    provider: Optional[str] = None
    model: Optional[str] = None
    mode: Optional[str] = None
    prompt: Optional[str] = None
    instructions: Optional[str] = None
    max_bytes: Optional[int] = Field(default=None, gt=0)
    output: Optional[str] = None
    sections: List[str] = Field(default_factory=list)
    force: bool = False


class GenerateResponse(BaseModel):
    path: str
    mode: str
    stages: List[str]
    files_used: int
    context_bytes: int
    truncated: bool


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _to_options(payload: GenerateRequest) -> GenerationOptions:
    return GenerationOptions(
        provider=payload.provider,
        model=payload.model,
        mode=payload.mode,
        prompt=payload.prompt,
        instructions=payload.instructions,
        max_bytes=payload.max_bytes,
        output=Path(payload.output) if payload.output else None,
        sections=list(payload.sections),
        force=payload.force,
    )


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing docsynth operations."""
    app = FastAPI(title="docsynth", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        # A fresh orchestrator per request keeps runs isolated.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        def _run() -> GenerationOutcome:
            return orchestrator.run(payload.path, _to_options(payload))

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run)
        return GenerateResponse(
            path=str(outcome.path),
            mode=outcome.mode,
            stages=outcome.stages,
            files_used=outcome.files_used,
            context_bytes=outcome.context_bytes,
            truncated=outcome.truncated,
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(FileExistsError)
    async def file_exists_handler(_: Any, exc: FileExistsError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(EmptyCorpusError)
    async def empty_corpus_handler(_: Any, exc: EmptyCorpusError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(StageFailedError)
    async def stage_failed_handler(_: Any, exc: StageFailedError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": str(exc), "stage": exc.stage})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(DocsynthError)
    async def docsynth_error_handler(_: Any, exc: DocsynthError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
