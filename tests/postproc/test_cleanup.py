"""Tests for docsynth.postproc.cleanup."""

from __future__ import annotations

import pytest

from docsynth.postproc import normalise_section, strip_code_fence


@pytest.mark.parametrize(
    "raw",
    [
        "```markdown\n# Demo\n\nText.\n```",
        "```md\n# Demo\n\nText.\n```",
        "```\n# Demo\n\nText.\n```",
        "\n\n```Markdown\n\n# Demo\n\nText.\n\n```\n",
    ],
)
def test_strip_code_fence_removes_markdown_wrapper(raw: str) -> None:
    assert strip_code_fence(raw) == "# Demo\n\nText."


def test_strip_code_fence_keeps_real_code_blocks() -> None:
    code = "```bash\ncargo install demo\n```"
    assert strip_code_fence(code) == code


def test_strip_code_fence_keeps_nested_fences() -> None:
    raw = "```markdown\n## Usage\n\n```bash\ndemo run\n```\n```"
    assert strip_code_fence(raw) == "## Usage\n\n```bash\ndemo run\n```"


def test_strip_code_fence_keeps_separate_bare_code_blocks() -> None:
    raw = "```\nnpm install\n```\n\nThen run:\n\n```\nnpm start\n```"
    assert strip_code_fence(raw) == raw


def test_strip_code_fence_keeps_wrapper_closed_before_trailing_text() -> None:
    raw = "```markdown\n# Demo\n```\n\nMore text after the block."
    assert strip_code_fence(raw) == raw


def test_strip_code_fence_ignores_unwrapped_text() -> None:
    assert strip_code_fence("# Title") == "# Title"
    assert strip_code_fence("```") == "```"
    assert strip_code_fence("``````") == "``````"


def test_normalise_section_ends_with_single_blank_line() -> None:
    assert normalise_section("# Demo") == "# Demo\n\n"
    assert normalise_section("line one\r\nline two\r\n\r\n\n") == "line one\nline two\n\n"
    assert normalise_section("   \n\n") == ""
