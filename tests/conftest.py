from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from docsynth.logging import reset_logging
from tests._fixtures.repo_builder import RepoBuilder
from tests._fixtures.services import ScriptedService


@pytest.fixture(autouse=True)
def _isolate_docsynth_logging() -> Iterator[None]:
    """CLI runs install handlers on the package logger; drop them after each test."""
    yield
    reset_logging()


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def scripted_service() -> ScriptedService:
    return ScriptedService()
