"""Collaboration signals from message keywords and author cardinality."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..exceptions import DataError
from ..models import CollaborationSignals, Commit
from .scoring import (
    ObservedCommit,
    average_message_quality,
    clamp_score,
    distinct_authors,
    keyword_percentage,
    observe,
)

REVIEW_KEYWORDS = ("review", "merge", "pr", "pull request")
KNOWLEDGE_KEYWORDS = ("doc", "comment", "readme", "guide")
MENTORSHIP_KEYWORDS = ("help", "guide", "example", "tutorial")
CONFLICT_KEYWORDS = ("conflict", "merge", "resolve")

# Points per distinct author, and the commit count at which cadence saturates
CROSS_TEAM_POINTS_PER_AUTHOR = 20
COMMUNICATION_SATURATION = 30


class CollaborationAnalyzer:
    def analyze(
        self, commits: Iterable[Commit], repo_name: str = "repository"
    ) -> CollaborationSignals:
        try:
            observed = observe(commits)
        except DataError as e:
            raise e.with_repository(repo_name)

        return CollaborationSignals(
            repo_name=repo_name,
            code_review_participation=keyword_percentage(observed, REVIEW_KEYWORDS),
            cross_team_contributions=cross_team_contributions(observed),
            knowledge_sharing=keyword_percentage(observed, KNOWLEDGE_KEYWORDS),
            mentorship_activity=keyword_percentage(observed, MENTORSHIP_KEYWORDS),
            communication_frequency=communication_frequency(observed),
            conflict_resolution=keyword_percentage(observed, CONFLICT_KEYWORDS),
        )


def cross_team_contributions(observed: Sequence[ObservedCommit]) -> float:
    return float(min(len(distinct_authors(observed)) * CROSS_TEAM_POINTS_PER_AUTHOR, 100))


def communication_frequency(observed: Sequence[ObservedCommit]) -> float:
    """Mean of message quality and commit cadence."""
    if not observed:
        return 0.0
    cadence = min(len(observed) / COMMUNICATION_SATURATION, 1.0) * 100.0
    return clamp_score((average_message_quality(observed) + cadence) / 2)
