from __future__ import annotations

import re
from collections.abc import Mapping

from .models import MatchKind, Resolution

# owner/name typed out in full; ASCII classes so \w and \d match what GitHub allows
_literal_repo_re = re.compile(r'^([A-Za-z0-9][-A-Za-z0-9]*)/([\w.\-]+)\b', re.ASCII)
_issue_re = re.compile(r'#?([1-9]\d*)', re.ASCII)
_path_re = re.compile(r'(/\S*)', re.ASCII)


def split_repo(value: str) -> tuple[str, str] | None:
    """Split an ``owner/name`` expansion on its first ``/``.

    Returns ``None`` for values that cannot name a repo (no separator, or an
    empty owner or name).
    """
    owner, sep, name = value.partition('/')
    if not sep or not owner or not name:
        return None
    return owner, name


def sorted_shorthands(table: Mapping[str, str]) -> list[str]:
    """Candidate keys in match order: longest first, ties lexicographic."""
    return sorted(table, key=lambda key: (-len(key), key))


def _remainder(text: str, consumed: int) -> str:
    return text[consumed:].lstrip(' ')


def _match_repo_shorthand(
    repo_table: Mapping[str, str], text: str
) -> tuple[str, str, str, str] | None:
    for key in sorted_shorthands(repo_table):
        if not key or not text.startswith(key):
            continue
        parts = split_repo(str(repo_table[key]))
        if parts is None:
            continue
        owner, name = parts
        return owner, name, key, _remainder(text, len(key))
    return None


def _match_literal_repo(text: str) -> tuple[str, str, str] | None:
    m = _literal_repo_re.match(text)
    if not m:
        return None
    return m.group(1), m.group(2), _remainder(text, m.end())


def _match_user_shorthand(
    user_table: Mapping[str, str], text: str
) -> tuple[str, str, str] | None:
    for key in sorted_shorthands(user_table):
        if not key or not text.startswith(key):
            continue
        user = str(user_table[key])
        if not user:
            continue
        return user, key, _remainder(text, len(key))
    return None


def resolve(
    repo_table: Mapping[str, str], user_table: Mapping[str, str], text: str
) -> Resolution:
    """Resolve shorthand ``text`` into a :class:`Resolution`.

    The repo table is consulted first, then a literal ``owner/name`` prefix,
    then the user table. Whatever remains is checked for a bare issue number
    (``42`` or ``#42``) and, failing that, a single ``/path`` fragment. Input
    that matches nothing comes back unchanged in ``query``.
    """
    owner = name = user = repo_match = user_match = ''
    kind = MatchKind.NONE
    query = text

    repo_hit = _match_repo_shorthand(repo_table, text)
    if repo_hit is not None:
        owner, name, repo_match, query = repo_hit
        kind = MatchKind.REPO_SHORTHAND
    else:
        literal_hit = _match_literal_repo(text)
        if literal_hit is not None:
            owner, name, query = literal_hit
            kind = MatchKind.LITERAL_REPO
        else:
            user_hit = _match_user_shorthand(user_table, text)
            if user_hit is not None:
                user, user_match, query = user_hit
                kind = MatchKind.USER_SHORTHAND

    issue = path = ''
    issue_m = _issue_re.fullmatch(query)
    if issue_m:
        issue, query = issue_m.group(1), ''
    else:
        path_m = _path_re.fullmatch(query)
        if path_m:
            path, query = path_m.group(1), ''

    return Resolution(
        owner=owner,
        name=name,
        user=user,
        repo_match=repo_match,
        user_match=user_match,
        issue=issue,
        path=path,
        query=query,
        kind=kind,
    )


def annotation(resolution: Resolution) -> str:
    return resolution.annotation()


__all__ = ['resolve', 'annotation', 'split_repo', 'sorted_shorthands']
