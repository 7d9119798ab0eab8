"""Tests for docsynth.discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsynth.discovery import FileDiscoverer
from docsynth.filters import PathFilter
from docsynth.scoring import IMPORTANT_SCORE, SOURCE_ROOT_SCORE
from tests._fixtures.repo_builder import RepoBuilder


def test_discovery_orders_manifest_before_sources(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/main.rs": "fn main() { println!(\"hi\"); }\n",
            "Cargo.toml": "[package]\nname = \"demo\"\n",
            "node_modules/x.js": "module.exports = 1;\n",
        }
    )
    repo_builder.write_bytes("image.bin", b"\x89PNG\x00\x00\x00\x00data")

    result = repo_builder.discover()

    assert [record.relative_path for record in result.records] == ["Cargo.toml", "src/main.rs"]
    assert [record.priority for record in result.records] == [IMPORTANT_SCORE, SOURCE_ROOT_SCORE]
    assert result.chunks()[0] == "Cargo.toml:\n[package]\nname = \"demo\"\n"


def test_discovery_is_idempotent(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "b.py": "print('b')\n",
            "a.py": "print('a')\n",
            "pkg/z.py": "Z = 1\n",
            "pkg/y.py": "Y = 1\n",
            "README.md": "# Demo\n",
        }
    )

    first = repo_builder.discovered_paths()
    second = repo_builder.discovered_paths()

    assert first == second
    assert first[0] == "README.md"
    # Equal scores keep the sorted walk order.
    assert first[1:] == ["a.py", "b.py", "pkg/y.py", "pkg/z.py"]


@pytest.mark.parametrize("denied", ["node_modules", ".git", "target", "build", "__pycache__"])
def test_denied_directories_are_pruned(repo_builder: RepoBuilder, denied: str) -> None:
    repo_builder.write(
        {
            f"{denied}/package.json": "{}\n",
            f"{denied}/nested/main.py": "print('hidden')\n",
            "app.py": "print('visible')\n",
        }
    )

    paths = repo_builder.discovered_paths()

    assert paths == ["app.py"]


def test_hidden_ci_directories_are_walked(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".github/workflows/ci.yml": "on: push\n",
            ".secret/config.yml": "token: x\n",
        }
    )

    assert repo_builder.discovered_paths() == [".github/workflows/ci.yml"]


def test_binary_and_undecodable_files_are_excluded(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"main.py": "print('ok')\n"})
    repo_builder.write_bytes("blob", b"\x7fELF\x00\x00\x00\x00")
    repo_builder.write_bytes("latin.py", "caf\xe9 = 1\n".encode("latin-1"))

    result = repo_builder.discover()

    assert [record.relative_path for record in result.records] == ["main.py"]
    assert result.stats.unreadable == 1
    assert result.stats.filtered == 1


def test_whitespace_only_files_are_counted_as_empty(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"empty.py": "   \n\n", "real.py": "x = 1\n"})

    result = repo_builder.discover()

    assert [record.relative_path for record in result.records] == ["real.py"]
    assert result.stats.empty == 1
    assert result.stats.skipped == 1
    assert result.stats.seen == 2


def test_empty_root_returns_no_records(tmp_path: Path) -> None:
    result = FileDiscoverer().discover(tmp_path)

    assert len(result) == 0
    assert result.chunks() == []


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileDiscoverer().discover(tmp_path / "missing")


def test_file_root_raises(tmp_path: Path) -> None:
    target = tmp_path / "file.py"
    target.write_text("x = 1\n", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        FileDiscoverer().discover(target)


def test_exclude_paths_prune_matching_directories(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "docs/guide.md": "# Guide\n",
            "src/lib.rs": "pub fn f() {}\n",
        }
    )

    discoverer = FileDiscoverer(PathFilter(["docs/"]))
    result = discoverer.discover(repo_builder.path())

    assert [record.relative_path for record in result.records] == ["src/lib.rs"]
