"""Terminal output helpers for the gh-shorthand CLI (ANSI colors, NO_COLOR aware).

Only the human-facing commands use these; ``resolve`` writes bare JSON for
the launcher.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


def _supports_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("TERM") == "dumb":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, color: str, bold: bool = False, stream: TextIO | None = None) -> str:
    """Wrap ``text`` in ANSI codes when ``stream`` is a color-capable TTY."""
    if not _supports_color(stream or sys.stdout):
        return text
    prefix = (Colors.BOLD if bold else "") + color
    return f"{prefix}{text}{Colors.RESET}"


def _print_marked(marker: str, color: str, message: str, stream: TextIO) -> None:
    print(colorize(marker, color, bold=True, stream=stream) + " " + message, file=stream)


def print_success(message: str, stream: TextIO | None = None) -> None:
    _print_marked("✓", Colors.GREEN, message, stream or sys.stdout)


def print_error(message: str, stream: TextIO | None = None) -> None:
    _print_marked("✗", Colors.RED, message, stream or sys.stderr)


def print_warning(message: str, stream: TextIO | None = None) -> None:
    _print_marked("⚠", Colors.YELLOW, message, stream or sys.stderr)


def print_table(
    title: str, rows: Sequence[tuple[str, str | int]], stream: TextIO | None = None
) -> None:
    """Print ``title`` followed by aligned key/value rows, e.g. a shorthand table."""
    stream = stream or sys.stdout
    width = max((len(k) for k, _ in rows), default=0)
    print(colorize(title, Colors.CYAN, bold=True, stream=stream), file=stream)
    print(colorize("─" * 60, Colors.DIM, stream=stream), file=stream)
    for key, value in rows:
        print(f"  {colorize(key.ljust(width), Colors.BOLD, stream=stream)}  {value}", file=stream)
    if not rows:
        print(colorize("  (none)", Colors.DIM, stream=stream), file=stream)


__all__ = [
    "Colors",
    "colorize",
    "print_success",
    "print_error",
    "print_warning",
    "print_table",
]
