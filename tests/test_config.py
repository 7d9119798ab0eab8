"""Tests for docsynth.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsynth.config import ConfigError, DocsynthConfig, LLMConfig, load_config


def _write_config(tmp_path: Path, text: str) -> Path:
    config_file = tmp_path / ".docsynth.yml"
    config_file.write_text(text, encoding="utf-8")
    return config_file


@pytest.fixture(autouse=True)
def _clear_api_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DOCSYNTH_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocsynthConfig)
    assert config.root == tmp_path.resolve()
    assert config.llm.provider == "gemini"
    assert config.mode == "incremental"
    assert config.sections == []
    assert config.context.exclude_paths == []
    assert config.prompt.text is None
    assert config.resolve_output() == tmp_path.resolve() / "README.md"
    assert config.resolve_max_bytes() == 15_000
    assert config.resolve_important_first() is False


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
llm:
  provider: openai
  model: "gpt-4o-mini"
  base_url: "http://localhost:8080/v1"
  api_key: "test-key"
  temperature: 0.2
  max_tokens: 2048
  request_timeout: 60
context:
  max_bytes: 40000
  important_first: true
  other_limit: 4
  exclude_paths:
    - "docs/"
    - "*.sql"
prompt:
  file: "prompts/readme.txt"
  instructions: "Mention the MSRV."
  templates_dir: "prompts/templates"
generation:
  mode: monolithic
  sections: [title, usage]
  output: "docs/README.md"
""",
    )

    config = load_config(tmp_path)

    assert config.llm == LLMConfig(
        provider="openai",
        model="gpt-4o-mini",
        base_url="http://localhost:8080/v1",
        api_key="test-key",
        temperature=0.2,
        max_tokens=2048,
        request_timeout=60.0,
    )
    assert config.context.max_bytes == 40_000
    assert config.context.important_first is True
    assert config.context.other_limit == 4
    assert config.context.exclude_paths == ["docs/", "*.sql"]
    assert config.prompt.file == tmp_path.resolve() / "prompts/readme.txt"
    assert config.prompt.instructions == "Mention the MSRV."
    assert config.prompt.templates_dir == tmp_path.resolve() / "prompts/templates"
    assert config.mode == "monolithic"
    assert config.sections == ["title", "usage"]
    assert config.resolve_output() == tmp_path.resolve() / "docs/README.md"
    assert config.resolve_api_key() == "test-key"


def test_monolithic_budget_depends_on_provider(tmp_path: Path) -> None:
    config = DocsynthConfig(root=tmp_path, mode="monolithic")
    assert config.resolve_max_bytes() == 50_000
    assert config.resolve_important_first() is True

    config.llm.provider = "openai"
    assert config.resolve_max_bytes() == 60_000


def test_api_key_falls_back_to_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = DocsynthConfig(root=tmp_path)
    assert config.resolve_api_key() is None

    monkeypatch.setenv("GEMINI_API_KEY", "from-gemini-env")
    assert config.resolve_api_key() == "from-gemini-env"

    monkeypatch.setenv("DOCSYNTH_API_KEY", "from-docsynth-env")
    assert config.resolve_api_key() == "from-docsynth-env"


def test_load_config_accepts_explicit_file_path(tmp_path: Path) -> None:
    config_file = _write_config(tmp_path, "generation:\n  mode: monolithic\n")

    config = load_config(config_file)

    assert config.mode == "monolithic"
    assert config.root == tmp_path.resolve()


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path, "\n# nothing here\n")

    assert load_config(tmp_path).llm.provider == "gemini"


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("llm:\n  provider: claude\n", "llm.provider"),
        ("generation:\n  mode: streaming\n", "generation.mode"),
        ("context:\n  max_bytes: 0\n", "max_bytes"),
        ("- just\n- a list\n", "mapping"),
        ("llm: [unclosed\n", "Failed to parse"),
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str, message: str) -> None:
    _write_config(tmp_path, text)

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
