#!/usr/bin/env python
"""CLI interface for bquery - boolean substring queries over text."""

from __future__ import annotations

import sys

import click
import typer

from bquery import config, logging_config
from bquery.commands import check, filter as filter_command


app = typer.Typer(
    help="Filter text with boolean substring queries.",
    no_args_is_help=True,
)


DEFAULT_VERBOSE: dict[str, bool] = {"value": False}


def _resolve_verbose(verbose: bool | None) -> bool:
    if verbose is None:
        return DEFAULT_VERBOSE["value"]
    return verbose


@app.callback()
def main_callback(
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging output",
    ),
) -> None:
    """Global CLI options."""
    if verbose is None and not DEFAULT_VERBOSE["value"]:
        return
    logging_config.configure_logging(_resolve_verbose(verbose))


filter_command.register(app)
check.register(app)


def main() -> None:
    """Main CLI entry point."""
    try:
        loaded_config = config.load_cli_config(sys.argv)
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)

    defaults = loaded_config.defaults
    DEFAULT_VERBOSE["value"] = bool(defaults.pop("verbose", False))
    config.CONFIG_DEFAULTS.clear()
    config.CONFIG_DEFAULTS.update(defaults)
    config.CONFIG_QUERIES.clear()
    config.CONFIG_QUERIES.update(loaded_config.queries)

    command = typer.main.get_command(app)
    default_map = config.build_default_map(defaults) if defaults else None
    command.main(
        args=sys.argv[1:],
        prog_name="bquery",
        standalone_mode=True,
        default_map=default_map,
    )


if __name__ == "__main__":
    main()
