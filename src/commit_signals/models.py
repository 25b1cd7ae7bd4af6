"""Data models for Commit Signals.

Inputs (``Commit``, ``RepositorySummary``) are normalized by the platform
layer. Outputs are one record per analyzer invocation. Every record is a
frozen dataclass: analyzers build them once and never mutate them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

# Raw commit timestamp as delivered by a feed: datetime, ISO-8601 string,
# or unix seconds.
TimestampLike = Union[datetime, str, int, float]

# Sentinel for "no commits": the age of the newest commit is unknown.
NO_COMMITS_AGE = math.inf


class Platform(Enum):
    """Supported hosting platforms."""

    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    AZURE = "azure"


class RepositoryStatus(Enum):
    """Coarse lifecycle status derived from archive flag and update recency."""

    ACTIVE = "active"
    DEVELOPMENT = "development"
    PLANNING = "planning"
    LEGACY = "legacy"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Commit:
    id: str
    message: str
    timestamp: TimestampLike
    author: str  # display name, the only developer identity available


@dataclass(frozen=True)
class RepositorySummary:
    name: str
    platform: Platform
    open_issue_count: int = 0
    star_count: int = 0
    fork_count: int = 0
    last_updated_at: Optional[TimestampLike] = None
    archived: bool = False

    # Descriptive metadata carried through for display
    full_name: str = ""
    description: Optional[str] = None
    language: Optional[str] = None
    topics: tuple[str, ...] = ()
    url: str = ""
    is_private: bool = False
    default_branch: str = "main"

    @property
    def owner(self) -> str:
        """Owner segment of ``full_name`` (empty if unknown)."""
        if "/" in self.full_name:
            return self.full_name.split("/", 1)[0]
        return ""


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DeveloperActivity:
    """Per-author activity.

    Diff-level fields are placeholders: the engine only sees commit
    messages, authors and timestamps, so they stay ``None``/empty.
    """

    developer_id: str
    name: str
    total_commits: int
    last_activity: datetime
    commit_frequency: float  # commits per day over the author's own span
    engagement_score: float

    email: Optional[str] = None
    lines_added: Optional[int] = None
    lines_deleted: Optional[int] = None
    files_modified: Optional[int] = None
    average_commit_size: Optional[float] = None
    active_repos: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommitPattern:
    hourly_distribution: tuple[int, ...]  # 24 buckets, hour of day
    weekly_distribution: tuple[int, ...]  # 7 buckets, 0 = Sunday
    message_quality: float
    average_gap_hours: float
    burst_detected: bool
    consistency_score: float


@dataclass(frozen=True)
class RepositoryHealth:
    repo_name: str
    platform: Platform
    health_score: float
    last_commit_age_days: float  # NO_COMMITS_AGE when there are no commits
    active_developer_count: int
    code_churn_rate: float
    test_coverage_estimate: float
    documentation_score: float
    issue_resolution_estimate_days: float
    technical_debt_score: float

    @property
    def has_commits(self) -> bool:
        return not math.isinf(self.last_commit_age_days)


@dataclass(frozen=True)
class SecurityMetrics:
    repo_name: str
    suspicious_patterns: tuple[str, ...]  # distinct labels, first-seen order
    vulnerability_commit_count: int
    secrets_exposed_count: int
    dependency_risk_score: float
    compliance_score: float
    last_scan_timestamp: datetime  # wall clock at analysis time


@dataclass(frozen=True)
class CollaborationSignals:
    repo_name: str
    code_review_participation: float
    cross_team_contributions: float
    knowledge_sharing: float
    mentorship_activity: float
    communication_frequency: float
    conflict_resolution: float


@dataclass(frozen=True)
class TechnicalDebtMetrics:
    repo_name: str
    code_complexity: float
    duplicate_code: float
    outdated_dependencies: int  # raw count, not a percentage
    unused_code: float
    test_debt: float
    documentation_debt: float
    refactoring_opportunities: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RepositoryFailure:
    """A repository skipped because its feed, fetch or analysis failed."""

    repo_name: str
    reason: str
