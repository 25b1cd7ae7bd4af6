"""
Commit Signals - Behavioral scoring of repository commit history

Turns commit feeds from GitHub, GitLab, Bitbucket and Azure DevOps into
bounded 0-100 signals: developer engagement, commit patterns, repository
health, security hygiene, collaboration and technical debt. Signals come
from message keywords, author counts and timestamps only; no diffs are read.
"""

__version__ = "0.1.0"

from .behavioral import (
    CollaborationAnalyzer,
    CommitPatternAnalyzer,
    DeveloperActivityAnalyzer,
    RepositoryHealthAnalyzer,
    SecurityAnalyzer,
    TechnicalDebtAnalyzer,
)
from .dashboard import DashboardView, build_dashboard
from .models import Commit, Platform, RepositorySummary
from .runner import BehavioralEngine, analyze_batch, fetch_and_analyze

__all__ = [
    "BehavioralEngine",  # All six analyzers over one repository
    "analyze_batch",
    "fetch_and_analyze",
    "build_dashboard",
    "DashboardView",
    "Commit",
    "RepositorySummary",
    "Platform",
    "DeveloperActivityAnalyzer",
    "CommitPatternAnalyzer",
    "RepositoryHealthAnalyzer",
    "SecurityAnalyzer",
    "CollaborationAnalyzer",
    "TechnicalDebtAnalyzer",
]
