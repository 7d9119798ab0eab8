"""Tests for docsynth.scoring."""

from __future__ import annotations

from pathlib import PurePath

import pytest

from docsynth.scoring import (
    CONFIG_SCORE,
    ENTRYPOINT_SCORE,
    EXTENSION_SCORE,
    FALLBACK_SCORE,
    IMPORTANT_SCORE,
    SOURCE_ROOT_SCORE,
    PriorityScorer,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("Cargo.toml", IMPORTANT_SCORE),
        ("crates/core/Cargo.toml", IMPORTANT_SCORE),
        ("src/lib.rs", SOURCE_ROOT_SCORE),
        ("app/main/Handler.java", SOURCE_ROOT_SCORE),
        ("cmd/main.go", ENTRYPOINT_SCORE),
        ("web/index.ts", ENTRYPOINT_SCORE),
        ("config/settings.yaml", CONFIG_SCORE),
        ("tools/build.sh", EXTENSION_SCORE),
        ("Jenkinsfile", FALLBACK_SCORE),
    ],
)
def test_priority_scorer_first_matching_rule_wins(path: str, expected: int) -> None:
    assert PriorityScorer().score(PurePath(path)) == expected


def test_source_root_match_uses_directories_not_file_name() -> None:
    scorer = PriorityScorer()
    # "main" as a file stem is an entry-point hint, not a source root.
    assert scorer(PurePath("main.py")) == ENTRYPOINT_SCORE
    assert scorer(PurePath("source/util.py")) == EXTENSION_SCORE


def test_important_files_outrank_everything_else() -> None:
    scorer = PriorityScorer()
    important = scorer(PurePath("package.json"))
    others = [scorer(PurePath(p)) for p in ("src/main.rs", "index.js", "a.toml", "b.c", "Procfile")]
    assert all(important > score for score in others)
