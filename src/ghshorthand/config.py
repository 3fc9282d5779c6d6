from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

import yaml

from .errors import ConfigError
from .logging import get_logger
from .parser import split_repo

CONFIG_DEFAULT = '~/.gh-shorthand.yml'
CONFIG_ENV_VAR = 'GH_SHORTHAND_CONFIG'


@dataclass
class ShorthandConfig:
    repos: dict[str, str] = field(default_factory=dict)
    users: dict[str, str] = field(default_factory=dict)
    default_repo: str | None = None
    socket_path: str | None = None
    source_file: Path | None = None
    # Logging configuration
    logging_json_enabled: bool = False
    logging_level: str = 'INFO'

    def malformed_repos(self) -> dict[str, str]:
        """Repo shorthands whose expansion is not ``owner/name``.

        The resolver skips these; they are surfaced here so ``check`` can
        report them.
        """
        return {k: v for k, v in self.repos.items() if split_repo(v) is None}


def default_config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV_VAR) or CONFIG_DEFAULT).expanduser()


def _expand(value: Any) -> str | None:
    if value is None or value == '':
        return None
    return os.path.expanduser(str(value))


def _string_table(raw: Any, section: str, source: Path) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f'{section} in {source} must be a mapping of shorthand to target')
    table: dict[str, str] = {}
    for key, value in raw.items():
        if value is None:
            continue
        table[str(key)] = str(value)
    return table


def load_config(path: str | Path | None = None) -> ShorthandConfig:
    p = Path(path).expanduser() if path is not None else default_config_path()
    if not p.exists():
        raise ConfigError(f'Configuration file not found: {p}')
    try:
        text = p.read_text()
    except OSError as exc:
        raise ConfigError(f'Unable to read configuration {p}: {exc}') from exc
    try:
        loaded_any = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f'Invalid YAML in {p}: {exc}') from exc
    if not isinstance(loaded_any, dict):
        raise ConfigError(f'Configuration {p} must be a mapping')
    raw = cast(dict[str, Any], loaded_any)
    logging_config = cast(dict[str, Any], raw.get('logging', {}) or {})

    cfg = ShorthandConfig(
        repos=_string_table(raw.get('repos'), 'repos', p),
        users=_string_table(raw.get('users'), 'users', p),
        default_repo=str(raw['default_repo']) if raw.get('default_repo') else None,
        socket_path=_expand(raw.get('socket_path')),
        source_file=p,
        logging_json_enabled=bool(logging_config.get('json_enabled', False)),
        logging_level=str(logging_config.get('level', 'INFO')),
    )
    if cfg.default_repo is not None and split_repo(cfg.default_repo) is None:
        raise ConfigError(f'default_repo must be owner/name, got {cfg.default_repo!r}')
    malformed = cfg.malformed_repos()
    if malformed:
        get_logger().warning(
            'ignoring malformed repo shorthands', config=str(p), shorthands=sorted(malformed)
        )
    return cfg


__all__ = ['ShorthandConfig', 'ConfigError', 'load_config', 'default_config_path', 'CONFIG_DEFAULT']
