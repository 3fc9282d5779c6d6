from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MatchKind(str, Enum):
    """Which resolution pass produced the repo or user on a Resolution."""

    NONE = 'none'
    REPO_SHORTHAND = 'repo_shorthand'
    LITERAL_REPO = 'literal_repo'
    USER_SHORTHAND = 'user_shorthand'


def _infer_kind(owner: str, repo_match: str, user_match: str) -> MatchKind:
    if repo_match:
        return MatchKind.REPO_SHORTHAND
    if user_match:
        return MatchKind.USER_SHORTHAND
    if owner:
        return MatchKind.LITERAL_REPO
    return MatchKind.NONE


@dataclass(frozen=True)
class Resolution:
    """Structured result of resolving one input string against the shorthand tables.

    Instances are immutable. Field combinations that could not come out of the
    resolver (a half-known repo, both an issue and a path, a user shorthand
    alongside a repo) are rejected with ``ValueError`` at construction.
    """

    owner: str = ''
    name: str = ''
    user: str = ''
    repo_match: str = ''
    user_match: str = ''
    issue: str = ''
    path: str = ''
    query: str = ''
    kind: MatchKind = field(default=MatchKind.NONE)

    def __post_init__(self) -> None:
        if bool(self.owner) != bool(self.name):
            raise ValueError('owner and name must both be set or both be empty')
        if self.issue and self.path:
            raise ValueError('issue and path are mutually exclusive')
        if self.path and not self.path.startswith('/'):
            raise ValueError(f'path must start with "/": {self.path!r}')
        if self.issue and not self.issue.isdigit():
            raise ValueError(f'issue must be numeric: {self.issue!r}')
        if self.repo_match and self.user_match:
            raise ValueError('repo_match and user_match are mutually exclusive')
        if self.repo_match and not self.owner:
            raise ValueError('repo_match requires a resolved repo')
        if self.user_match and (self.owner or not self.user):
            raise ValueError('user_match requires a resolved user and no repo')
        inferred = _infer_kind(self.owner, self.repo_match, self.user_match)
        if self.kind is MatchKind.NONE and inferred is not MatchKind.NONE:
            # kind left at its default: derive it from the match fields
            object.__setattr__(self, 'kind', inferred)
        elif self.kind is not inferred:
            raise ValueError(f'kind {self.kind.value} contradicts match fields ({inferred.value})')

    @property
    def has_repo(self) -> bool:
        return bool(self.owner) and bool(self.name)

    @property
    def repo(self) -> str:
        """``owner/name`` when a repo was resolved, else empty."""
        return f'{self.owner}/{self.name}' if self.has_repo else ''

    @property
    def has_user(self) -> bool:
        return bool(self.user)

    @property
    def has_issue(self) -> bool:
        return bool(self.issue)

    @property
    def has_path(self) -> bool:
        return bool(self.path)

    @property
    def has_query(self) -> bool:
        return bool(self.query)

    @property
    def empty_query(self) -> bool:
        return not self.query

    def annotation(self) -> str:
        """Display note for the matched shorthand, with a leading space.

        Repo shorthands include the issue number when one was extracted,
        e.g. ``" (zw#5)"``; user shorthands render as ``" (gh)"``; literal
        repos and unmatched input render as an empty string.
        """
        if self.repo_match:
            issue = f'#{self.issue}' if self.issue else ''
            return f' ({self.repo_match}{issue})'
        if self.user_match:
            return f' ({self.user_match})'
        return ''

    def repo_annotation(self) -> str:
        """Like :meth:`annotation` but never mentions the issue."""
        if self.repo_match:
            return f' ({self.repo_match})'
        if self.user_match:
            return f' ({self.user_match})'
        return ''

    def to_dict(self) -> dict[str, Any]:
        return {
            'owner': self.owner,
            'name': self.name,
            'repo': self.repo,
            'user': self.user,
            'repo_match': self.repo_match,
            'user_match': self.user_match,
            'issue': self.issue,
            'path': self.path,
            'query': self.query,
            'kind': self.kind.value,
        }


__all__ = ['MatchKind', 'Resolution']
