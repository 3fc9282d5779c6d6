"""Alfred script-filter items built from a Resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, quote_plus

from .config import ShorthandConfig
from .models import Resolution
from .parser import split_repo

GITHUB_URL = "https://github.com"
PROMPT_TITLE = "Enter a repo shorthand, owner/name, user shorthand, or #issue"


@dataclass
class Icon:
    path: str
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"path": self.path}
        if self.type:
            data["type"] = self.type
        return data


ICONS = {
    kind: Icon(path=f"icons/{kind}.png")
    for kind in ("repo", "issue", "path", "user", "search")
}


@dataclass
class Item:
    """One launcher result row; ``valid`` False means "autocomplete only"."""

    title: str
    valid: bool = False
    uid: str = ""
    subtitle: str = ""
    arg: str = ""
    icon: Icon | None = None
    autocomplete: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"title": self.title, "valid": self.valid}
        for key in ("uid", "subtitle", "arg", "autocomplete"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.icon is not None:
            data["icon"] = self.icon.to_dict()
        return data


@dataclass
class Items:
    items: list[Item] = field(default_factory=list)
    rerun: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"items": [item.to_dict() for item in self.items]}
        if self.rerun:
            data["rerun"] = self.rerun
        return data


def _repo_items(owner: str, name: str, resolution: Resolution) -> list[Item]:
    repo = f"{owner}/{name}"
    repo_url = f"{GITHUB_URL}/{repo}"
    if resolution.has_issue:
        return [
            Item(
                uid=f"gh:{repo}#{resolution.issue}",
                icon=ICONS["issue"],
                title=f"Open {repo}#{resolution.issue}{resolution.annotation()}",
                subtitle=f"{repo_url}/issues/{resolution.issue}",
                arg=f"{repo_url}/issues/{resolution.issue}",
                valid=True,
            )
        ]
    if resolution.has_path:
        return [
            Item(
                uid=f"gh:{repo}{resolution.path}",
                icon=ICONS["path"],
                title=f"Open {repo}{resolution.path}{resolution.repo_annotation()}",
                subtitle=f"{repo_url}{resolution.path}",
                arg=f"{repo_url}{resolution.path}",
                valid=True,
            )
        ]
    items = [
        Item(
            uid=f"gh:{repo}",
            icon=ICONS["repo"],
            title=f"Open {repo}{resolution.repo_annotation()}",
            subtitle=repo_url,
            arg=repo_url,
            valid=True,
        )
    ]
    if resolution.has_query:
        search_url = f"{repo_url}/search?q={quote_plus(resolution.query)}&type=Issues"
        items.append(
            Item(
                uid=f"ghs:{repo}",
                icon=ICONS["search"],
                title=f"Search issues in {repo}{resolution.repo_annotation()} for {resolution.query}",
                subtitle=search_url,
                arg=search_url,
                valid=True,
            )
        )
    return items


def _user_items(resolution: Resolution) -> list[Item]:
    user = resolution.user
    user_url = f"{GITHUB_URL}/{quote(user)}"
    if resolution.has_path:
        return [
            Item(
                uid=f"gh:{user}{resolution.path}",
                icon=ICONS["path"],
                title=f"Open {user}{resolution.path}{resolution.annotation()}",
                subtitle=f"{user_url}{resolution.path}",
                arg=f"{user_url}{resolution.path}",
                valid=True,
            )
        ]
    items = [
        Item(
            uid=f"gh:{user}",
            icon=ICONS["user"],
            title=f"Open {user}{resolution.annotation()}",
            subtitle=user_url,
            arg=user_url,
            valid=True,
        )
    ]
    # an issue number needs a repo; for a user it is only a search term
    term = f"#{resolution.issue}" if resolution.has_issue else resolution.query
    if term:
        search_url = f"{GITHUB_URL}/search?q={quote_plus(f'user:{user} {term}')}&type=Repositories"
        items.append(
            Item(
                uid=f"ghs:{user}",
                icon=ICONS["search"],
                title=f"Search repositories of {user}{resolution.annotation()} for {term}",
                subtitle=search_url,
                arg=search_url,
                valid=True,
            )
        )
    return items


def build_items(resolution: Resolution, config: ShorthandConfig | None = None) -> Items:
    """Turn a Resolution into launcher items.

    When the input names neither a repo nor a user, the configured
    ``default_repo`` (if any) stands in for the repo.
    """
    if resolution.has_repo:
        return Items(_repo_items(resolution.owner, resolution.name, resolution))
    if resolution.has_user:
        return Items(_user_items(resolution))
    default_repo = split_repo(config.default_repo) if config and config.default_repo else None
    if default_repo is not None:
        return Items(_repo_items(default_repo[0], default_repo[1], resolution))
    if resolution.has_issue:
        leftover = f"#{resolution.issue}"
    else:
        leftover = resolution.path or resolution.query
    if not leftover:
        return Items([Item(title=PROMPT_TITLE, valid=False)])
    return Items(
        [
            Item(
                title=f"No repo or user matched {leftover}",
                subtitle=PROMPT_TITLE,
                autocomplete=resolution.query,
                valid=False,
            )
        ]
    )


__all__ = ["Icon", "Item", "Items", "build_items", "GITHUB_URL", "PROMPT_TITLE"]
