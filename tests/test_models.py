from __future__ import annotations

import dataclasses

import pytest

from ghshorthand.models import MatchKind, Resolution


def test_annotation_for_repo_shorthand_with_issue() -> None:
    res = Resolution(owner='zerowidth', name='dotfiles', repo_match='zw', issue='5')
    assert res.annotation() == ' (zw#5)'
    assert res.repo_annotation() == ' (zw)'


def test_annotation_for_user_shorthand() -> None:
    res = Resolution(user='octocat', user_match='gh')
    assert res.annotation() == ' (gh)'
    assert res.repo_annotation() == ' (gh)'


def test_annotation_for_user_shorthand_ignores_issue() -> None:
    res = Resolution(user='octocat', user_match='gh', issue='9')
    assert res.annotation() == ' (gh)'


def test_annotation_empty_without_shorthand() -> None:
    assert Resolution(owner='owner', name='name', issue='3').annotation() == ''
    assert Resolution(query='anything').annotation() == ''


def test_annotation_is_idempotent() -> None:
    res = Resolution(owner='zerowidth', name='dotfiles', repo_match='zw', issue='5')
    assert res.annotation() == res.annotation()


def test_kind_is_derived_from_match_fields() -> None:
    assert Resolution().kind is MatchKind.NONE
    assert Resolution(owner='o', name='n').kind is MatchKind.LITERAL_REPO
    assert Resolution(owner='o', name='n', repo_match='x').kind is MatchKind.REPO_SHORTHAND
    assert Resolution(user='u', user_match='x').kind is MatchKind.USER_SHORTHAND


def test_repo_helpers() -> None:
    res = Resolution(owner='o', name='n', path='/pulls')
    assert res.has_repo
    assert res.repo == 'o/n'
    assert res.has_path
    assert not res.has_issue
    assert res.empty_query
    assert Resolution().repo == ''


def test_resolution_is_immutable() -> None:
    res = Resolution(owner='o', name='n')
    with pytest.raises(dataclasses.FrozenInstanceError):
        res.owner = 'other'  # type: ignore[misc]


@pytest.mark.parametrize(
    'kwargs',
    [
        {'owner': 'o'},
        {'name': 'n'},
        {'issue': '1', 'path': '/x'},
        {'path': 'relative'},
        {'issue': 'abc'},
        {'repo_match': 'zw'},
        {'owner': 'o', 'name': 'n', 'repo_match': 'zw', 'user_match': 'gh', 'user': 'u'},
        {'owner': 'o', 'name': 'n', 'user_match': 'gh', 'user': 'u'},
        {'user_match': 'gh'},
        {'kind': MatchKind.REPO_SHORTHAND},
        {'owner': 'o', 'name': 'n', 'kind': MatchKind.USER_SHORTHAND},
    ],
)
def test_contradictory_fields_are_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        Resolution(**kwargs)  # type: ignore[arg-type]


def test_to_dict() -> None:
    res = Resolution(owner='o', name='n', repo_match='x', issue='4')
    assert res.to_dict() == {
        'owner': 'o',
        'name': 'n',
        'repo': 'o/n',
        'user': '',
        'repo_match': 'x',
        'user_match': '',
        'issue': '4',
        'path': '',
        'query': '',
        'kind': 'repo_shorthand',
    }
