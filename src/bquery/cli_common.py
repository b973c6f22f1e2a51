"""Shared helpers for bquery CLI commands."""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import click
import typer

from bquery import config as config_module
from bquery.query_language import Matcher, QueryLanguageError, compile_query


STDIN_NAME = "-"


@dataclass(frozen=True)
class InputSource:
    """One input to scan, either a file path or standard input."""

    name: str
    path: Path | None

    @property
    def is_stdin(self) -> bool:
        return self.path is None


def resolve_input_paths(inputs: list[str] | None) -> list[InputSource]:
    """Resolve CLI inputs into a list of sources to scan.

    Args:
        inputs: List of CLI path arguments; empty or None means stdin

    Returns:
        Input sources in argument order

    Raises:
        typer.BadParameter: If a path does not exist or is not a regular file
    """
    if not inputs:
        return [InputSource(STDIN_NAME, None)]

    sources: list[InputSource] = []
    for raw_path in inputs:
        if raw_path == STDIN_NAME:
            sources.append(InputSource(STDIN_NAME, None))
            continue

        path = Path(raw_path)
        if not path.exists():
            raise typer.BadParameter(f"Path '{raw_path}' not found")
        if path.is_dir():
            raise typer.BadParameter(f"Path '{raw_path}' is a directory")
        if not path.is_file():
            raise typer.BadParameter(f"Path '{raw_path}' is not a file")
        sources.append(InputSource(raw_path, path))

    return sources


def iter_lines(source: InputSource) -> Iterator[str]:
    """Yield lines from a source without trailing newlines.

    Files and standard input are decoded as UTF-8, replacing invalid bytes.

    Raises:
        typer.BadParameter: If the file cannot be read
    """
    if source.path is None:
        stdin = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace")
        try:
            for line in stdin:
                yield line.rstrip("\r\n")
        finally:
            stdin.detach()
        return

    try:
        with open(source.path, encoding="utf-8", errors="replace") as f:
            for line in f:
                yield line.rstrip("\r\n")
    except PermissionError as err:
        raise typer.BadParameter(f"Permission denied for '{source.name}'") from err


def compile_cli_query(query: str) -> Matcher:
    """Resolve saved query references and compile query text.

    Raises:
        typer.BadParameter: If a saved query reference is unknown
        click.UsageError: If the query text is malformed
    """
    query_text = config_module.resolve_query_text(query)
    try:
        return compile_query(query_text)
    except QueryLanguageError as exc:
        raise click.UsageError(str(exc)) from exc
