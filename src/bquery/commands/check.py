"""Check command validating query syntax."""

from __future__ import annotations

from dataclasses import dataclass

import typer

from bquery import config as config_module
from bquery.cli_common import compile_cli_query
from bquery.color import bright_green, build_console, escape_text, should_use_color


@dataclass
class CheckArgs:
    """Arguments for the check command."""

    query: str
    config: str


def run_check(args: CheckArgs) -> None:
    """Run the check command."""
    matcher = compile_cli_query(args.query)
    color_enabled = should_use_color(None)
    console = build_console(color_enabled)

    literal_count = len(matcher.literals)
    noun = "literal" if literal_count == 1 else "literals"
    summary = escape_text(f" ({literal_count} {noun})", color_enabled)
    console.print(bright_green("Query OK", color_enabled) + summary, markup=color_enabled)


def register(app: typer.Typer) -> None:
    """Register the check command."""

    @app.command("check")
    def check_command(
        query: str = typer.Argument(..., metavar="QUERY", help="Boolean query or @name"),
        config: str = typer.Option(
            config_module.DEFAULT_CONFIG_NAME,
            "--config",
            metavar="FILE",
            help="Config file name to load from current directory",
        ),
    ) -> None:
        """Validate query syntax without scanning any input."""
        args = CheckArgs(query=query, config=config)
        config_module.log_applied_config_defaults("check")
        config_module.log_command_arguments(args, "check")
        run_check(args)
