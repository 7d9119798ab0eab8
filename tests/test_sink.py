"""Tests for docsynth.sink."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from docsynth.errors import SinkError
from docsynth.sink import DocumentSink


def test_sink_truncates_existing_file_on_open(tmp_path: Path) -> None:
    target = tmp_path / "README.md"
    target.write_text("stale content that should disappear", encoding="utf-8")

    with DocumentSink(target) as sink:
        sink.write("# Fresh\n\n")
        sink.flush()

    assert target.read_text(encoding="utf-8") == "# Fresh\n\n"


def test_sink_appends_in_order_and_counts_bytes(tmp_path: Path) -> None:
    target = tmp_path / "out" / "README.md"

    with DocumentSink(target) as sink:
        sink.write("one\n")
        sink.flush()
        # Flushed content is visible to other readers before the sink closes.
        assert target.read_text(encoding="utf-8") == "one\n"
        sink.write("two €\n")
        sink.flush()
        assert sink.bytes_written == len("one\ntwo €\n".encode("utf-8"))

    assert target.read_text(encoding="utf-8") == "one\ntwo €\n"
    assert sink.closed


@pytest.mark.skipif(sys.platform == "win32", reason="flock semantics are POSIX specific")
def test_second_sink_on_same_path_fails_fast(tmp_path: Path) -> None:
    target = tmp_path / "README.md"

    with DocumentSink(target) as sink:
        sink.write("kept\n")
        sink.flush()
        with pytest.raises(SinkError, match="locked"):
            DocumentSink(target).open()

    # The losing run must not have truncated the winner's output.
    assert target.read_text(encoding="utf-8") == "kept\n"


def test_write_requires_open_sink(tmp_path: Path) -> None:
    sink = DocumentSink(tmp_path / "README.md")

    with pytest.raises(SinkError, match="not open"):
        sink.write("text")


def test_double_open_is_rejected(tmp_path: Path) -> None:
    sink = DocumentSink(tmp_path / "README.md").open()
    try:
        with pytest.raises(SinkError, match="already open"):
            sink.open()
    finally:
        sink.close()


def test_lock_is_released_on_close(tmp_path: Path) -> None:
    target = tmp_path / "README.md"

    with DocumentSink(target) as sink:
        sink.write("first\n")

    with DocumentSink(target) as sink:
        sink.write("second\n")

    assert target.read_text(encoding="utf-8") == "second\n"
