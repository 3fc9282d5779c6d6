from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from ghshorthand.config import ShorthandConfig, default_config_path, load_config
from ghshorthand.errors import ConfigError

FULL_CONFIG = textwrap.dedent(
    """\
    default_repo: zerowidth/dotfiles
    socket_path: ~/.gh-shorthand.sock
    repos:
      zw: zerowidth/dotfiles
      ghs: zerowidth/gh-shorthand
    users:
      gh: octocat
      z: zerowidth
    logging:
      level: DEBUG
      json_enabled: true
    """
)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / 'gh-shorthand.yml'
    path.write_text(text)
    return path


def test_load_full_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('HOME', str(tmp_path))
    cfg = load_config(_write(tmp_path, FULL_CONFIG))
    assert cfg.repos == {'zw': 'zerowidth/dotfiles', 'ghs': 'zerowidth/gh-shorthand'}
    assert cfg.users == {'gh': 'octocat', 'z': 'zerowidth'}
    assert cfg.default_repo == 'zerowidth/dotfiles'
    assert cfg.socket_path == str(tmp_path / '.gh-shorthand.sock')
    assert cfg.logging_level == 'DEBUG'
    assert cfg.logging_json_enabled is True
    assert cfg.malformed_repos() == {}


def test_empty_file_yields_empty_config(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, ''))
    assert cfg.repos == {}
    assert cfg.users == {}
    assert cfg.default_repo is None
    assert cfg.socket_path is None
    assert cfg.logging_level == 'INFO'


def test_keys_and_values_are_coerced_to_strings(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, 'repos:\n  1: a/b\nusers:\n  x: 42\n  skipped:\n'))
    assert cfg.repos == {'1': 'a/b'}
    assert cfg.users == {'x': '42'}


def test_malformed_repo_values_are_kept_and_reported(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = load_config(_write(tmp_path, 'repos:\n  ok: a/b\n  bad: nope\n'))
    assert cfg.repos == {'ok': 'a/b', 'bad': 'nope'}
    assert cfg.malformed_repos() == {'bad': 'nope'}
    assert 'ignoring malformed repo shorthands' in capsys.readouterr().err


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match='not found'):
        load_config(tmp_path / 'nope.yml')


@pytest.mark.parametrize(
    'text, message',
    [
        ('repos: [unterminated', 'Invalid YAML'),
        ('- just\n- a list\n', 'must be a mapping'),
        ('repos:\n  - zw\n', 'repos'),
        ('users: octocat\n', 'users'),
        ('default_repo: nodivider\n', 'default_repo'),
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        load_config(_write(tmp_path, text))


def test_default_config_path_honours_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / 'custom.yml'
    monkeypatch.setenv('GH_SHORTHAND_CONFIG', str(target))
    assert default_config_path() == target
    monkeypatch.delenv('GH_SHORTHAND_CONFIG')
    monkeypatch.setenv('HOME', str(tmp_path))
    assert default_config_path() == tmp_path / '.gh-shorthand.yml'


def test_load_config_without_path_uses_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = _write(tmp_path, 'users:\n  gh: octocat\n')
    monkeypatch.setenv('GH_SHORTHAND_CONFIG', str(path))
    cfg = load_config()
    assert cfg.users == {'gh': 'octocat'}
    assert cfg.source_file == path


def test_shorthand_config_defaults() -> None:
    cfg = ShorthandConfig()
    assert cfg.repos == {}
    assert cfg.malformed_repos() == {}
