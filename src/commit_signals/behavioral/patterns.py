"""Temporal distribution and message-quality patterns for one repository."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

import numpy as np

from ..models import Commit, CommitPattern
from .scoring import (
    SECONDS_PER_HOUR,
    ObservedCommit,
    average_message_quality,
    clamp_score,
    observe,
)

# Burst detection
BURST_MIN_COMMITS = 3
BURST_GAP_SECONDS = SECONDS_PER_HOUR
BURST_PERCENT = 30

# Consistency scoring
CONSISTENCY_MIN_COMMITS = 7
CONSISTENCY_VARIANCE_WEIGHT = 10


class CommitPatternAnalyzer:
    """Hour/day distributions, inter-commit gaps, bursts and consistency."""

    def analyze(self, commits: Iterable[Commit]) -> CommitPattern:
        observed = observe(commits)
        if not observed:
            return CommitPattern(
                hourly_distribution=(0,) * 24,
                weekly_distribution=(0,) * 7,
                message_quality=0.0,
                average_gap_hours=0.0,
                burst_detected=False,
                consistency_score=0.0,
            )

        ordered = sorted(observed, key=lambda c: c.instant)
        gaps = _gaps_seconds(ordered)

        return CommitPattern(
            hourly_distribution=hourly_distribution(ordered),
            weekly_distribution=weekly_distribution(ordered),
            message_quality=clamp_score(average_message_quality(ordered)),
            average_gap_hours=float(gaps.mean()) / SECONDS_PER_HOUR if gaps.size else 0.0,
            burst_detected=detect_burst(gaps, len(ordered)),
            consistency_score=consistency_score(ordered),
        )


def hourly_distribution(observed: Sequence[ObservedCommit]) -> tuple[int, ...]:
    buckets = [0] * 24
    for c in observed:
        buckets[c.local_time.hour] += 1
    return tuple(buckets)


def weekly_distribution(observed: Sequence[ObservedCommit]) -> tuple[int, ...]:
    """Commits per weekday, index 0 = Sunday."""
    buckets = [0] * 7
    for c in observed:
        buckets[c.local_time.isoweekday() % 7] += 1
    return tuple(buckets)


def _gaps_seconds(ordered: Sequence[ObservedCommit]) -> np.ndarray:
    seconds = np.array([c.instant.timestamp() for c in ordered], dtype=float)
    return np.diff(seconds)


def detect_burst(gaps: np.ndarray, commit_count: int) -> bool:
    """True when sub-hour gaps exceed 30% of the commit count."""
    if commit_count < BURST_MIN_COMMITS:
        return False
    short_gaps = int(np.count_nonzero(gaps < BURST_GAP_SECONDS))
    return short_gaps * 100 > commit_count * BURST_PERCENT


def consistency_score(observed: Sequence[ObservedCommit]) -> float:
    """Penalize uneven per-day commit counts.

    Only days with at least one commit are counted; idle days between them
    do not enter the variance.
    """
    if len(observed) < CONSISTENCY_MIN_COMMITS:
        return 0.0
    per_day = Counter(c.local_time.date() for c in observed)
    variance = float(np.var(list(per_day.values())))
    return max(0.0, 100.0 - variance * CONSISTENCY_VARIANCE_WEIGHT)
