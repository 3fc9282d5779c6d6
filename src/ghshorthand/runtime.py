"""Runtime helpers for gh-shorthand CLI orchestration."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from ghshorthand.config import CONFIG_ENV_VAR, ShorthandConfig, default_config_path, load_config
from ghshorthand.errors import ShorthandError, classify_error
from ghshorthand.logging import configure_logging, get_logger
from ghshorthand.ux import print_error


class _HandlerCallable(Protocol):
    def __call__(self) -> Any: ...


def prepare_config(
    args: Any, *, loader: Callable[[Path], ShorthandConfig] = load_config
) -> ShorthandConfig:
    """Load the configuration for the given argparse namespace and apply overrides.

    A missing file at the default location yields an empty configuration so
    literal ``owner/name`` input still resolves. A file named by ``--config``
    or ``GH_SHORTHAND_CONFIG`` must exist.
    """
    explicit = getattr(args, "config", None) or os.environ.get(CONFIG_ENV_VAR)
    path = Path(explicit).expanduser() if explicit else default_config_path()
    if not explicit and not path.exists():
        get_logger().debug("no configuration found, using empty shorthand tables", config=str(path))
        cfg = ShorthandConfig()
    else:
        cfg = loader(path)
    socket_override = getattr(args, "socket", None)
    if socket_override:
        cfg.socket_path = os.path.expanduser(socket_override)
    level = cfg.logging_level
    if os.environ.get("GH_SHORTHAND_DEBUG") == "1":
        level = "DEBUG"
    elif getattr(args, "quiet", False):
        level = "WARNING"
    configure_logging(json_logging=cfg.logging_json_enabled, level=level)
    return cfg


def execute_command(handler: _HandlerCallable, args: Any, command: str) -> int:
    """Run a command handler, logging its duration and reporting known failures.

    ``ShorthandError`` becomes exit code 1 with a message on stderr; anything
    else propagates.
    """
    logger = get_logger()
    try:
        with logger.timed_operation(command):
            result = handler()
    except ShorthandError as exc:
        info = classify_error(exc)
        print_error(info.message)
        return 1
    return int(result) if result is not None else 0


__all__ = ["prepare_config", "execute_command"]
