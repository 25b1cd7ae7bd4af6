"""Offline commit feeds: JSON files holding repositories and their commits.

Layout::

    [
      {
        "repository": {"name": "api", "platform": "github", "open_issue_count": 3, ...},
        "commits": [
          {"id": "a1b2", "message": "fix: login", "timestamp": "2024-05-01T10:00:00Z",
           "author": "Ada"}
        ]
      }
    ]
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError, DataError
from .logging_config import get_logger
from .models import Commit, Platform, RepositoryFailure, RepositorySummary

logger = get_logger(__name__)

_SUMMARY_FIELDS = {f.name for f in fields(RepositorySummary)}


@dataclass(frozen=True)
class RepositoryFeed:
    repository: RepositorySummary
    commits: tuple[Commit, ...]


@dataclass(frozen=True)
class FeedFile:
    """Parsed entries plus the entries that were skipped as malformed."""

    entries: tuple[RepositoryFeed, ...]
    failures: tuple[RepositoryFailure, ...]


def load_feed(path: Path) -> FeedFile:
    """Read a feed file.

    A malformed entry is skipped and recorded as a failure; the remaining
    entries still load.

    Raises:
        ConfigurationError: If the file does not exist or is not JSON.
        DataError: If the top level is not a list of entries.
    """
    if not path.exists():
        raise ConfigurationError(f"Feed file not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid feed file '{path}': {e}")

    if not isinstance(raw, list):
        raise DataError("feed must be a list of repository entries")

    entries = []
    failures = []
    for index, entry in enumerate(raw):
        try:
            entries.append(parse_entry(entry))
        except DataError as e:
            name = e.repository or f"entry {index}"
            logger.warning("Skipping feed entry %s: %s", name, e)
            failures.append(RepositoryFailure(repo_name=name, reason=str(e)))
    return FeedFile(entries=tuple(entries), failures=tuple(failures))


def parse_entry(entry: Any) -> RepositoryFeed:
    if not isinstance(entry, dict) or not isinstance(entry.get("repository"), dict):
        raise DataError("feed entry needs a 'repository' object")

    repository = parse_repository(entry["repository"])
    commits = entry.get("commits", [])
    if not isinstance(commits, list):
        raise DataError("'commits' must be a list", repository=repository.name)

    try:
        parsed = tuple(parse_commit(c) for c in commits)
    except DataError as e:
        raise e.with_repository(repository.name)
    return RepositoryFeed(repository=repository, commits=parsed)


def parse_repository(data: dict[str, Any]) -> RepositorySummary:
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise DataError("repository 'name' is required")

    unknown = set(data) - _SUMMARY_FIELDS
    if unknown:
        raise DataError(f"unknown repository fields: {', '.join(sorted(unknown))}", repository=name)

    values = dict(data)
    try:
        values["platform"] = Platform(values.get("platform", Platform.GITHUB.value))
    except ValueError:
        raise DataError(f"unknown platform {values.get('platform')!r}", repository=name)
    topics = values.get("topics") or []
    if not isinstance(topics, list):
        raise DataError("'topics' must be a list", repository=name)
    values["topics"] = tuple(topics)
    return RepositorySummary(**values)


def parse_commit(data: Any) -> Commit:
    if not isinstance(data, dict):
        raise DataError(f"commit entry must be an object, got {type(data).__name__}")
    commit_id = str(data.get("id") or data.get("sha") or "")
    for key in ("message", "timestamp", "author"):
        if data.get(key) is None:
            raise DataError(f"commit is missing '{key}'", commit_id=commit_id or None)
    return Commit(
        id=commit_id,
        message=data["message"],
        timestamp=data["timestamp"],
        author=data["author"],
    )
