"""gh-shorthand - expand GitHub shorthand for launcher integrations.

High-level public API:

from ghshorthand import load_config, resolve

cfg = load_config('~/.gh-shorthand.yml')
resolution = resolve(cfg.repos, cfg.users, 'zw 42')
print(resolution.repo, resolution.issue, resolution.annotation())

The CLI (``gh-shorthand``) and the unix-socket server delegate to ``resolve``.
"""

from __future__ import annotations

from .config import ShorthandConfig, load_config
from .errors import ConfigError, ShorthandError
from .models import MatchKind, Resolution
from .parser import resolve

# Version constant (sync manually with pyproject)
__version__ = "0.2.0"

__all__ = [
    "load_config",
    "ShorthandConfig",
    "resolve",
    "Resolution",
    "MatchKind",
    "ShorthandError",
    "ConfigError",
    "__version__",
]
