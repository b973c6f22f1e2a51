"""Filter command printing input lines that satisfy a query."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import typer
from rich.console import Console

from bquery import config as config_module
from bquery.cli_common import InputSource, compile_cli_query, iter_lines, resolve_input_paths
from bquery.color import build_console, dim_white, escape_text, green, magenta, should_use_color
from bquery.query_language import Matcher


logger = logging.getLogger("bquery")

EXIT_NO_MATCH = 1


@dataclass
class FilterArgs:
    """Arguments for the filter command."""

    query: str
    files: list[str] | None
    config: str
    invert: bool
    count: bool
    line_number: bool
    with_filename: bool | None
    max_count: int | None
    color_flag: bool | None


@dataclass(frozen=True)
class LineFormat:
    """Prefix settings for printed lines."""

    with_filename: bool
    line_number: bool
    color_enabled: bool


def format_line(source_name: str, line_no: int, line: str, line_format: LineFormat) -> str:
    """Build one output line with optional filename and line number prefixes."""
    enabled = line_format.color_enabled
    separator = dim_white(":", enabled)
    parts: list[str] = []
    if line_format.with_filename:
        parts.append(magenta(source_name, enabled) + separator)
    if line_format.line_number:
        parts.append(green(str(line_no), enabled) + separator)
    parts.append(escape_text(line, enabled))
    return "".join(parts)


def format_count(source_name: str, count: int, line_format: LineFormat) -> str:
    """Build one count line with optional filename prefix."""
    enabled = line_format.color_enabled
    if line_format.with_filename:
        return magenta(source_name, enabled) + dim_white(":", enabled) + str(count)
    return str(count)


def scan_source(
    matcher: Matcher,
    source: InputSource,
    invert: bool,
    max_count: int | None,
) -> list[tuple[int, str]]:
    """Return selected (line number, line) pairs for one source."""
    selected: list[tuple[int, str]] = []
    if max_count == 0:
        return selected

    for line_no, line in enumerate(iter_lines(source), start=1):
        if matcher.query(line) == invert:
            continue
        selected.append((line_no, line))
        if max_count is not None and len(selected) >= max_count:
            break
    return selected


def _print(console: Console, text: str, color_enabled: bool) -> None:
    console.print(text, markup=color_enabled)


def run_filter(args: FilterArgs) -> None:
    """Run the filter command."""
    if args.max_count is not None and args.max_count < 0:
        raise typer.BadParameter("--max-count must be non-negative")

    matcher = compile_cli_query(args.query)
    sources = resolve_input_paths(args.files)
    color_enabled = should_use_color(args.color_flag)
    console = build_console(color_enabled)

    with_filename = args.with_filename
    if with_filename is None:
        with_filename = len(sources) > 1
    line_format = LineFormat(
        with_filename=with_filename,
        line_number=args.line_number,
        color_enabled=color_enabled,
    )

    total_selected = 0
    for source in sources:
        selected = scan_source(matcher, source, args.invert, args.max_count)
        logger.info("Selected %d line(s) from %s", len(selected), source.name)
        total_selected += len(selected)

        if args.count:
            _print(console, format_count(source.name, len(selected), line_format), color_enabled)
            continue
        for line_no, line in selected:
            _print(console, format_line(source.name, line_no, line, line_format), color_enabled)

    if total_selected == 0:
        raise typer.Exit(EXIT_NO_MATCH)


def register(app: typer.Typer) -> None:
    """Register the filter command."""

    @app.command("filter")
    def filter_command(  # noqa: PLR0913
        query: str = typer.Argument(
            ..., metavar="QUERY", help='Boolean query, e.g. \'"foo" & !"bar"\', or @name'
        ),
        files: list[str] | None = typer.Argument(  # noqa: B008
            None, metavar="FILE", help="Files to scan ('-' or none for stdin)"
        ),
        config: str = typer.Option(
            config_module.DEFAULT_CONFIG_NAME,
            "--config",
            metavar="FILE",
            help="Config file name to load from current directory",
        ),
        invert: bool = typer.Option(
            False,
            "--invert",
            help="Print lines that do not match the query",
        ),
        count: bool = typer.Option(
            False,
            "--count",
            "-c",
            help="Print the number of selected lines per input",
        ),
        line_number: bool = typer.Option(
            False,
            "--line-number",
            "-n",
            help="Prefix each line with its line number",
        ),
        with_filename: bool | None = typer.Option(
            None,
            "--with-filename/--no-filename",
            "-H",
            help="Prefix each line with its file name (default when scanning several files)",
        ),
        max_count: int | None = typer.Option(
            None,
            "--max-count",
            "-m",
            metavar="N",
            help="Stop reading an input after N selected lines",
        ),
        color_flag: bool | None = typer.Option(
            None,
            "--color/--no-color",
            help="Force colored output",
        ),
    ) -> None:
        """Print lines matching a boolean substring query."""
        args = FilterArgs(
            query=query,
            files=files,
            config=config,
            invert=invert,
            count=count,
            line_number=line_number,
            with_filename=with_filename,
            max_count=max_count,
            color_flag=color_flag,
        )
        config_module.log_applied_config_defaults("filter")
        config_module.log_command_arguments(args, "filter")
        run_filter(args)
