"""Composite repository health and its keyword-derived sub-scores."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from ..exceptions import DataError
from ..models import NO_COMMITS_AGE, Commit, RepositoryHealth, RepositorySummary
from .scoring import (
    ObservedCommit,
    clamp_score,
    days_between,
    distinct_authors,
    keyword_percentage,
    observe,
    parse_timestamp,
    recency_score,
    to_utc,
    utc_now,
)

CHURN_KEYWORDS = ("fix", "bug")
TEST_KEYWORDS = ("test", "spec", "coverage")
DOC_KEYWORDS = ("doc", "readme", "comment")
DEBT_KEYWORDS = ("fix", "bug", "hotfix")

ACTIVE_WINDOW = timedelta(days=30)
MAX_ISSUE_RESOLUTION_DAYS = 30.0


class RepositoryHealthAnalyzer:
    """Blend activity, recency, author diversity and issue load.

    The composite is four parts, capped at 100:
        activity   min(commits / 10, 1) * 30
        recency    recency(last_updated_at) * 0.3
        diversity  min(authors * 10, 30)
        issues     max(0, 40 - open_issues)
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def analyze(self, repo: RepositorySummary, commits: Iterable[Commit]) -> RepositoryHealth:
        try:
            validate_summary(repo)
            observed = observe(commits)
            last_updated = (
                parse_timestamp(repo.last_updated_at) if repo.last_updated_at is not None else None
            )
        except DataError as e:
            raise e.with_repository(repo.name)

        now = self._clock()
        return RepositoryHealth(
            repo_name=repo.name,
            platform=repo.platform,
            health_score=health_score(repo, observed, last_updated, now),
            last_commit_age_days=last_commit_age_days(observed, now),
            active_developer_count=active_developer_count(observed, now),
            code_churn_rate=keyword_percentage(observed, CHURN_KEYWORDS),
            test_coverage_estimate=keyword_percentage(observed, TEST_KEYWORDS),
            documentation_score=keyword_percentage(observed, DOC_KEYWORDS),
            issue_resolution_estimate_days=issue_resolution_estimate_days(repo),
            technical_debt_score=keyword_percentage(observed, DEBT_KEYWORDS),
        )


def validate_summary(repo: RepositorySummary) -> None:
    """Reject negative or non-integer counters in a repository summary."""
    for field_name in ("open_issue_count", "star_count", "fork_count"):
        value = getattr(repo, field_name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise DataError(f"{field_name} must be a non-negative integer, got {value!r}")


def health_score(
    repo: RepositorySummary,
    observed: list[ObservedCommit],
    last_updated: Optional[datetime],
    now: datetime,
) -> float:
    activity = min(len(observed) / 10, 1.0) * 30
    recency = recency_score(last_updated, now) * 0.3
    diversity = min(len(distinct_authors(observed)) * 10, 30)
    issues = max(0, 40 - repo.open_issue_count)
    return clamp_score(activity + recency + diversity + issues)


def last_commit_age_days(observed: list[ObservedCommit], now: datetime) -> float:
    """Days since the newest commit, ``NO_COMMITS_AGE`` if there is none."""
    if not observed:
        return NO_COMMITS_AGE
    newest = max(c.instant for c in observed)
    return max(0.0, days_between(newest, now))


def active_developer_count(observed: list[ObservedCommit], now: datetime) -> int:
    cutoff = to_utc(now) - ACTIVE_WINDOW
    return len({c.author for c in observed if c.instant > cutoff})


def issue_resolution_estimate_days(repo: RepositorySummary) -> float:
    if repo.open_issue_count == 0:
        return 0.0
    issue_ratio = repo.open_issue_count / max(repo.star_count + repo.fork_count, 1)
    return min(issue_ratio * 10, MAX_ISSUE_RESOLUTION_DAYS)
