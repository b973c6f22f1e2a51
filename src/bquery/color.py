"""Color support for CLI output using Rich markup."""

import sys

from rich.console import Console
from rich.markup import escape


def should_use_color(color_flag: bool | None) -> bool:
    """Determine if color should be used based on flag and TTY detection.

    Args:
        color_flag: Explicit color preference (True/False) or None for auto-detect

    Returns:
        True if colors should be used, False otherwise
    """
    if color_flag is None:
        return sys.stdout.isatty()
    return color_flag


def build_console(color_enabled: bool) -> Console:
    """Build console writing to the current stdout."""
    return Console(
        no_color=not color_enabled,
        highlight=False,
        emoji=False,
        soft_wrap=True,
        force_terminal=color_enabled or None,
    )


def escape_text(text: str, enabled: bool) -> str:
    """Escape markup characters when color output is enabled.

    Args:
        text: Text to escape
        enabled: Whether coloring is enabled

    Returns:
        Escaped text when enabled, original text otherwise
    """
    if not enabled:
        return text
    return escape(text)


def colorize(text: str, style: str, enabled: bool) -> str:
    """Apply Rich markup style to text if enabled.

    Args:
        text: Text to colorize
        style: Rich style string (e.g., "green", "bold white")
        enabled: Whether coloring is enabled

    Returns:
        Styled text if enabled, original text otherwise
    """
    if not enabled:
        return text
    return f"[{style}]{escape(text)}[/]"


def magenta(text: str, enabled: bool) -> str:
    """Apply magenta color to text."""
    return colorize(text, "magenta", enabled)


def green(text: str, enabled: bool) -> str:
    """Apply green color to text."""
    return colorize(text, "green", enabled)


def dim_white(text: str, enabled: bool) -> str:
    """Apply dim white color to text."""
    return colorize(text, "dim white", enabled)


def bright_green(text: str, enabled: bool) -> str:
    """Apply bright green color to text."""
    return colorize(text, "bold green", enabled)
