"""Map platform-native JSON payloads onto ``Commit`` / ``RepositorySummary``.

Pure functions, one pair per platform. A payload missing a required key
raises ``DataError`` naming the field, so one bad record fails its own
repository only.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from ..behavioral.scoring import days_between, parse_timestamp
from ..exceptions import DataError
from ..models import Commit, Platform, RepositoryStatus, RepositorySummary

T = TypeVar("T")

Payload = dict[str, Any]

# Days since last update before a repository is considered to be drifting
DEVELOPMENT_AFTER_DAYS = 30
PLANNING_AFTER_DAYS = 90


def _require(payload: Payload, *path: str) -> Any:
    """Walk nested keys, raising DataError on the first missing one."""
    node: Any = payload
    for key in path:
        if not isinstance(node, dict) or node.get(key) is None:
            raise DataError(f"payload is missing '{'.'.join(path)}'")
        node = node[key]
    return node


def _count(payload: Payload, key: str) -> int:
    value = payload.get(key) or 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise DataError(f"'{key}' must be an integer, got {value!r}")
    return value


def _guarded(platform: Platform, build: Callable[[], T]) -> T:
    try:
        return build()
    except (TypeError, AttributeError) as e:
        raise DataError(f"malformed {platform.value} payload: {e}")


def unwrap_records(platform: Platform, payload: Any, key: Optional[str] = None) -> list[Any]:
    """Return the records of a listing response.

    GitHub and GitLab answer with a bare list; Bitbucket and Azure wrap it in
    an object under ``key``. Any other shape raises ``DataError``.
    """
    if key is not None:
        if not isinstance(payload, dict):
            raise DataError(
                f"malformed {platform.value} payload: expected an object with '{key}', "
                f"got {type(payload).__name__}"
            )
        payload = payload.get(key) or []
    if not isinstance(payload, list):
        raise DataError(
            f"malformed {platform.value} payload: expected a list, got {type(payload).__name__}"
        )
    return payload


# ---------------------------------------------------------------------------
# GitHub
# ---------------------------------------------------------------------------


def github_repository(payload: Payload) -> RepositorySummary:
    return _guarded(
        Platform.GITHUB,
        lambda: RepositorySummary(
            name=_require(payload, "name"),
            platform=Platform.GITHUB,
            open_issue_count=_count(payload, "open_issues_count"),
            star_count=_count(payload, "stargazers_count"),
            fork_count=_count(payload, "forks_count"),
            last_updated_at=payload.get("updated_at"),
            archived=bool(payload.get("archived", False)),
            full_name=payload.get("full_name") or "",
            description=payload.get("description"),
            language=payload.get("language"),
            topics=tuple(payload.get("topics") or ()),
            url=payload.get("html_url") or "",
            is_private=bool(payload.get("private", False)),
            default_branch=payload.get("default_branch") or "main",
        ),
    )


def github_commit(payload: Payload) -> Commit:
    return Commit(
        id=_require(payload, "sha"),
        message=_require(payload, "commit", "message"),
        timestamp=_require(payload, "commit", "author", "date"),
        author=_require(payload, "commit", "author", "name"),
    )


# ---------------------------------------------------------------------------
# GitLab
# ---------------------------------------------------------------------------


def gitlab_project(payload: Payload) -> RepositorySummary:
    return _guarded(
        Platform.GITLAB,
        lambda: RepositorySummary(
            name=_require(payload, "name"),
            platform=Platform.GITLAB,
            open_issue_count=_count(payload, "open_issues_count"),
            star_count=_count(payload, "star_count"),
            fork_count=_count(payload, "forks_count"),
            last_updated_at=payload.get("last_activity_at"),
            archived=bool(payload.get("archived", False)),
            full_name=payload.get("path_with_namespace") or "",
            description=payload.get("description"),
            # Project listings carry no primary language
            language=None,
            topics=tuple(payload.get("topics") or ()),
            url=payload.get("web_url") or "",
            is_private=payload.get("visibility") == "private",
            default_branch=payload.get("default_branch") or "main",
        ),
    )


def gitlab_commit(payload: Payload) -> Commit:
    return Commit(
        id=_require(payload, "id"),
        message=_require(payload, "title"),
        timestamp=_require(payload, "created_at"),
        author=_require(payload, "author_name"),
    )


# ---------------------------------------------------------------------------
# Bitbucket
# ---------------------------------------------------------------------------


def bitbucket_repository(payload: Payload) -> RepositorySummary:
    # Stars do not exist on Bitbucket; forks and issues need extra calls.
    return _guarded(
        Platform.BITBUCKET,
        lambda: RepositorySummary(
            name=_require(payload, "name"),
            platform=Platform.BITBUCKET,
            last_updated_at=payload.get("updated_on"),
            full_name=payload.get("full_name") or "",
            description=payload.get("description") or None,
            language=payload.get("language") or None,
            url=((payload.get("links") or {}).get("html") or {}).get("href") or "",
            is_private=bool(payload.get("is_private", False)),
            default_branch=((payload.get("mainbranch") or {}).get("name")) or "main",
        ),
    )


def bitbucket_commit(payload: Payload) -> Commit:
    # Only the subject line, matching what the other platforms list
    return _guarded(
        Platform.BITBUCKET,
        lambda: Commit(
            id=_require(payload, "hash"),
            message=_require(payload, "message").split("\n", 1)[0],
            timestamp=_require(payload, "date"),
            author=_require(payload, "author", "raw"),
        ),
    )


# ---------------------------------------------------------------------------
# Azure DevOps
# ---------------------------------------------------------------------------


def azure_repository(payload: Payload) -> RepositorySummary:
    # The repositories listing has no update time; recency is left unknown.
    name = _require(payload, "name")
    return _guarded(
        Platform.AZURE,
        lambda: RepositorySummary(
            name=name,
            platform=Platform.AZURE,
            last_updated_at=None,
            archived=bool(payload.get("isDisabled", False)),
            full_name=_azure_full_name(payload, name),
            url=payload.get("webUrl") or payload.get("remoteUrl") or "",
            is_private=True,
            default_branch=(payload.get("defaultBranch") or "refs/heads/main").rsplit("/", 1)[-1],
        ),
    )


def _azure_full_name(payload: Payload, name: str) -> str:
    project = (payload.get("project") or {}).get("name") or ""
    return f"{project}/{name}" if project else name


def azure_commit(payload: Payload) -> Commit:
    return Commit(
        id=_require(payload, "commitId"),
        message=_require(payload, "comment"),
        timestamp=_require(payload, "author", "date"),
        author=_require(payload, "author", "name"),
    )


def repository_status(repo: RepositorySummary, now: datetime) -> RepositoryStatus:
    """Lifecycle status: archived, then by days since last update.

    A repository with no known update time is reported as active.
    """
    if repo.archived:
        return RepositoryStatus.LEGACY
    if repo.last_updated_at is None:
        return RepositoryStatus.ACTIVE

    days_since_update = days_between(parse_timestamp(repo.last_updated_at), now)
    if days_since_update > PLANNING_AFTER_DAYS:
        return RepositoryStatus.PLANNING
    if days_since_update > DEVELOPMENT_AFTER_DAYS:
        return RepositoryStatus.DEVELOPMENT
    return RepositoryStatus.ACTIVE


def technologies(repo: RepositorySummary, limit: int = 5) -> list[str]:
    """Primary language followed by topics, truncated for display."""
    found: list[str] = []
    if repo.language:
        found.append(repo.language)
    found.extend(repo.topics)
    return found[:limit]

