"""Tests for CLI input resolution and query compilation helpers."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import click
import pytest
import typer

from bquery.cli_common import (
    STDIN_NAME,
    InputSource,
    compile_cli_query,
    iter_lines,
    resolve_input_paths,
)


def test_resolve_input_paths_defaults_to_stdin() -> None:
    """No inputs should mean standard input."""
    assert resolve_input_paths(None) == [InputSource(STDIN_NAME, None)]
    assert resolve_input_paths([]) == [InputSource(STDIN_NAME, None)]


def test_resolve_input_paths_files_and_dash(tmp_path: Path) -> None:
    """Files and '-' should be kept in argument order."""
    first = tmp_path / "a.txt"
    first.write_text("x\n", encoding="utf-8")

    sources = resolve_input_paths([str(first), "-"])

    assert sources == [InputSource(str(first), first), InputSource(STDIN_NAME, None)]
    assert sources[1].is_stdin is True
    assert sources[0].is_stdin is False


def test_resolve_input_paths_missing(tmp_path: Path) -> None:
    """Missing paths should be rejected."""
    with pytest.raises(typer.BadParameter, match="not found"):
        resolve_input_paths([str(tmp_path / "missing.txt")])


def test_resolve_input_paths_directory(tmp_path: Path) -> None:
    """Directories should be rejected."""
    with pytest.raises(typer.BadParameter, match="is a directory"):
        resolve_input_paths([str(tmp_path)])


def test_iter_lines_strips_line_endings(tmp_path: Path) -> None:
    """Lines should be yielded without trailing newlines."""
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"one\r\ntwo\nthree")

    assert list(iter_lines(InputSource(str(path), path))) == ["one", "two", "three"]


def test_iter_lines_replaces_undecodable_bytes(tmp_path: Path) -> None:
    """Invalid UTF-8 should not abort scanning."""
    path = tmp_path / "bad.txt"
    path.write_bytes(b"ok\n\xff\xfe line\n")

    lines = list(iter_lines(InputSource(str(path), path)))

    assert lines[0] == "ok"
    assert lines[1].endswith(" line")


def _fake_stdin(data: bytes) -> io.TextIOWrapper:
    return io.TextIOWrapper(io.BytesIO(data), encoding="utf-8")


def test_iter_lines_reads_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    """Standard input source should read sys.stdin."""
    monkeypatch.setattr(sys, "stdin", _fake_stdin(b"a\r\nb\n"))

    assert list(iter_lines(InputSource(STDIN_NAME, None))) == ["a", "b"]


def test_iter_lines_replaces_undecodable_stdin_bytes(monkeypatch: pytest.MonkeyPatch) -> None:
    """Invalid UTF-8 on standard input should be replaced, not raised."""
    monkeypatch.setattr(sys, "stdin", _fake_stdin(b"ok\n\xff\xfe line\n"))

    lines = list(iter_lines(InputSource(STDIN_NAME, None)))

    assert lines == ["ok", "\ufffd\ufffd line"]


def test_iter_lines_leaves_stdin_open(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reading standard input should not close the underlying stream."""
    fake = _fake_stdin(b"a\n")
    monkeypatch.setattr(sys, "stdin", fake)

    list(iter_lines(InputSource(STDIN_NAME, None)))

    assert fake.closed is False


def test_compile_cli_query_wraps_errors() -> None:
    """Query errors should become click usage errors with the formatted message."""
    with pytest.raises(click.UsageError) as exc_info:
        compile_cli_query('"a" & x')

    assert "Unexpected character 'x'" in str(exc_info.value)
    assert "      ^" in str(exc_info.value)


def test_compile_cli_query_valid() -> None:
    """Valid query should compile to a matcher."""
    matcher = compile_cli_query('"a" | "b"')

    assert matcher.query("b") is True
