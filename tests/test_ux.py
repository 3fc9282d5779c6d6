"""Tests for terminal UX helpers."""

from __future__ import annotations

import io

import pytest

from ghshorthand.ux import (
    Colors,
    colorize,
    print_error,
    print_success,
    print_table,
    print_warning,
)


def test_colorize_with_tty_support(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERM", "xterm-256color")
    stream = io.StringIO()
    stream.isatty = lambda: True  # type: ignore[method-assign]

    result = colorize("test", Colors.RED, bold=True, stream=stream)
    assert result == f"{Colors.BOLD}{Colors.RED}test{Colors.RESET}"


def test_colorize_respects_no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    stream = io.StringIO()
    stream.isatty = lambda: True  # type: ignore[method-assign]
    assert colorize("test", Colors.RED, bold=True, stream=stream) == "test"


def test_colorize_no_tty() -> None:
    assert colorize("test", Colors.GREEN, stream=io.StringIO()) == "test"


def test_print_helpers(capsys: pytest.CaptureFixture[str]) -> None:
    print_success("Configuration OK")
    print_error("Something went wrong")
    print_warning("Be careful")
    captured = capsys.readouterr()
    assert "✓ Configuration OK" in captured.out
    assert "✗ Something went wrong" in captured.err
    assert "⚠ Be careful" in captured.err


def test_print_table(capsys: pytest.CaptureFixture[str]) -> None:
    print_table("Repo shorthands", [("zw", "zerowidth/dotfiles"), ("ghs", "zerowidth/gh-shorthand")])
    out = capsys.readouterr().out
    assert "Repo shorthands" in out
    assert "  zw   zerowidth/dotfiles" in out
    assert "  ghs  zerowidth/gh-shorthand" in out
    assert "─" in out


def test_print_table_empty(capsys: pytest.CaptureFixture[str]) -> None:
    print_table("User shorthands", [])
    assert "(none)" in capsys.readouterr().out
