"""Pytest configuration for gh-shorthand tests.

Ensures the in-repo `src` directory is on `sys.path` so the package can be
imported without an editable install (`pip install -e .`), and that
subprocesses started with `python -m ghshorthand` see it too.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

py_path = os.environ.get("PYTHONPATH", "")
parts = [p for p in py_path.split(os.pathsep) if p]
if str(SRC) not in parts:
    parts.insert(0, str(SRC))
    os.environ["PYTHONPATH"] = os.pathsep.join(parts)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep the user's real ~/.gh-shorthand.yml and logger state out of tests."""
    import ghshorthand.logging as gh_logging  # noqa: PLC0415

    empty_config = tmp_path / "empty-config.yml"
    empty_config.write_text("")
    monkeypatch.setenv("GH_SHORTHAND_CONFIG", str(empty_config))
    for name in ("GH_SHORTHAND_QUIET", "GH_SHORTHAND_DEBUG", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    gh_logging._GLOBAL = None
    yield
    gh_logging._GLOBAL = None
