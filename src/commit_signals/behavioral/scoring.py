"""Shared arithmetic for the behavioral analyzers.

Every analyzer scores commit messages with the same primitives so that
percentages stay comparable across analyzers:

- keyword matching is a case-insensitive substring search (no tokenizing,
  no word boundaries, so ``"pr"`` matches ``"improve"``);
- percentages follow ``min(matches / max(total, 1) * 100, 100)``;
- recency decays linearly by 2 points per day and floors at 0 after 50 days.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from ..exceptions import DataError
from ..models import Commit, TimestampLike

SECONDS_PER_DAY = 86400.0
SECONDS_PER_HOUR = 3600.0

CONVENTIONAL_COMMIT_RE = re.compile(
    r"^(fix|feat|chore|docs|style|refactor|test|perf|ci|build)(\(.+\))?:"
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: TimestampLike, commit_id: Optional[str] = None) -> datetime:
    """Parse a feed timestamp into a datetime.

    Accepts datetimes, ISO-8601 strings (a trailing ``Z`` means UTC) and
    unix seconds. The returned datetime keeps the feed's own offset so hour
    and day bucketing happen in the author's wall clock.

    Raises:
        DataError: If the value cannot be read as an absolute instant.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise DataError(f"timestamp is not a time value: {value!r}", commit_id=commit_id)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise DataError(f"unix timestamp out of range: {value!r} ({e})", commit_id=commit_id)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise DataError(f"unparsable timestamp: {value!r}", commit_id=commit_id)
    raise DataError(f"missing or unparsable timestamp: {value!r}", commit_id=commit_id)


def to_utc(dt: datetime) -> datetime:
    """Normalize for comparisons; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def days_between(start: datetime, end: datetime) -> float:
    return (to_utc(end) - to_utc(start)).total_seconds() / SECONDS_PER_DAY


def recency_score(moment: Optional[datetime], now: datetime) -> float:
    """Linear decay: 100 today, minus 2 per day, 0 after 50 days."""
    if moment is None:
        return 0.0
    return max(0.0, 100.0 - days_between(moment, now) * 2)


def clamp_score(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class ObservedCommit:
    """A validated commit: parsed time plus lower-cased message."""

    commit: Commit
    local_time: datetime  # as delivered, used for hour/day buckets
    instant: datetime  # UTC, used for ordering and ages
    text: str  # lower-cased message

    @property
    def author(self) -> str:
        return self.commit.author

    @property
    def message(self) -> str:
        return self.commit.message


def observe(commits: Iterable[Commit]) -> list[ObservedCommit]:
    """Validate a commit feed and precompute what the analyzers read.

    Raises:
        DataError: On a missing message, missing author or bad timestamp.
    """
    observed = []
    for commit in commits:
        if not isinstance(commit.message, str):
            raise DataError("commit message is missing", commit_id=commit.id)
        if not isinstance(commit.author, str):
            raise DataError("commit author is missing", commit_id=commit.id)
        local_time = parse_timestamp(commit.timestamp, commit_id=commit.id)
        observed.append(
            ObservedCommit(
                commit=commit,
                local_time=local_time,
                instant=to_utc(local_time),
                text=commit.message.lower(),
            )
        )
    return observed


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def count_matching(observed: Sequence[ObservedCommit], keywords: Iterable[str]) -> int:
    keywords = tuple(keywords)
    return sum(1 for c in observed if contains_any(c.text, keywords))


def percentage(matches: int, total: int) -> float:
    return min((matches / max(total, 1)) * 100.0, 100.0)


def keyword_percentage(observed: Sequence[ObservedCommit], keywords: Iterable[str]) -> float:
    """Share of commits whose message mentions any keyword, in [0, 100]."""
    return percentage(count_matching(observed, keywords), len(observed))


def distinct_authors(observed: Sequence[ObservedCommit]) -> set[str]:
    return {c.author for c in observed}


def message_quality(message: str) -> int:
    """Score one commit message out of 100, in four 25-point checks.

    Length is measured in code points, so an emoji or an accented letter
    counts as one character.
    """
    score = 0
    if 10 < len(message) < 100:
        score += 25
    # Non-letters pass: only a lower-case first letter fails.
    if message and message[0] == message[0].upper():
        score += 25
    if not message.endswith("."):
        score += 25
    if CONVENTIONAL_COMMIT_RE.match(message.lower()) or len(message.split()) > 2:
        score += 25
    return score


def average_message_quality(observed: Sequence[ObservedCommit]) -> float:
    if not observed:
        return 0.0
    return sum(message_quality(c.message) for c in observed) / len(observed)
