"""Assemble the dashboard view from per-repository reports.

Cross-repository figures are plain averages and totals; no further
aggregation happens here.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import DeveloperActivity
from .runner import BatchResult, RepositoryFailure, RepositoryReport


@dataclass(frozen=True)
class DashboardView:
    developers: tuple[DeveloperActivity, ...]  # concatenated, one entry per repo/author
    repository_count: int
    average_health_score: float
    total_suspicious_patterns: int
    average_technical_debt: float
    reports: tuple[RepositoryReport, ...]
    failures: tuple[RepositoryFailure, ...]


def build_dashboard(batch: BatchResult) -> DashboardView:
    reports = batch.reports
    developers = tuple(dev for report in reports for dev in report.developers)
    return DashboardView(
        developers=developers,
        repository_count=len(reports),
        average_health_score=_mean([r.health.health_score for r in reports]),
        total_suspicious_patterns=sum(len(r.security.suspicious_patterns) for r in reports),
        average_technical_debt=_mean([r.health.technical_debt_score for r in reports]),
        reports=reports,
        failures=batch.failures,
    )


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0
