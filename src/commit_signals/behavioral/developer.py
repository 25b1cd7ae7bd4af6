"""Per-developer volume and recency metrics."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable

from ..models import Commit, DeveloperActivity
from .scoring import ObservedCommit, clamp_score, days_between, observe, recency_score, utc_now

# Commit count at which the volume component saturates
VOLUME_SATURATION = 50


class DeveloperActivityAnalyzer:
    """Group commits by author display name and score each developer.

    Two people sharing a display name count as one developer; the feed
    carries no stronger identity.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def analyze(self, commits: Iterable[Commit]) -> list[DeveloperActivity]:
        observed = observe(commits)
        if not observed:
            return []

        now = self._clock()
        groups: dict[str, list[ObservedCommit]] = {}
        for c in observed:
            groups.setdefault(c.author, []).append(c)

        return [self._score(author, group, now) for author, group in groups.items()]

    def _score(self, author: str, group: list[ObservedCommit], now: datetime) -> DeveloperActivity:
        instants = sorted(c.instant for c in group)
        total = len(group)
        last_activity = instants[-1]

        volume = min(total / VOLUME_SATURATION, 1.0) * 100.0
        engagement = (recency_score(last_activity, now) + volume) / 2

        return DeveloperActivity(
            developer_id=author,
            name=author,
            total_commits=total,
            last_activity=last_activity,
            commit_frequency=commit_frequency(instants),
            engagement_score=clamp_score(engagement),
        )


def commit_frequency(sorted_instants: list[datetime]) -> float:
    """Commits per day across the developer's own first-to-last span.

    Spans shorter than a day count as one day; a lone commit has no rate.
    """
    if len(sorted_instants) < 2:
        return 0.0
    span_days = days_between(sorted_instants[0], sorted_instants[-1])
    return len(sorted_instants) / max(1.0, span_days)

