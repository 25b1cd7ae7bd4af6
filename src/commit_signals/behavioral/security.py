"""Keyword scan of commit messages for security-relevant signals."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, NamedTuple

from ..exceptions import DataError
from ..models import Commit, SecurityMetrics
from .scoring import contains_any, count_matching, keyword_percentage, observe, utc_now


class PatternFamily(NamedTuple):
    label: str
    keywords: tuple[str, ...]


SECRETS = PatternFamily(
    "Potential secrets in commit messages", ("password", "secret", "key", "token")
)
BYPASS = PatternFamily(
    "Security bypass attempts", ("bypass", "disable security", "skip validation")
)
WORKAROUND = PatternFamily(
    "Potentially risky workarounds", ("hack", "workaround", "quick fix")
)
PATTERN_FAMILIES = (SECRETS, BYPASS, WORKAROUND)

VULNERABILITY_KEYWORDS = ("security", "vulnerability", "exploit", "patch", "cve")
DEPENDENCY_KEYWORDS = ("dependency", "package", "update", "upgrade")

# Compliance loses this much per distinct triggered family
COMPLIANCE_PENALTY = 10


class SecurityAnalyzer:
    """Flag leaked-secret, bypass and workaround language; score compliance.

    ``last_scan_timestamp`` is the only field that depends on when the scan
    ran; everything else is a function of the commit messages.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def analyze(self, commits: Iterable[Commit], repo_name: str = "repository") -> SecurityMetrics:
        try:
            observed = observe(commits)
        except DataError as e:
            raise e.with_repository(repo_name)

        triggered: list[str] = []
        secrets_exposed = 0
        for c in observed:
            for family in PATTERN_FAMILIES:
                if contains_any(c.text, family.keywords):
                    triggered.append(family.label)
                    if family is SECRETS:
                        secrets_exposed += 1

        # Collapse repeats only after the whole scan
        patterns = tuple(dict.fromkeys(triggered))

        return SecurityMetrics(
            repo_name=repo_name,
            suspicious_patterns=patterns,
            vulnerability_commit_count=count_matching(observed, VULNERABILITY_KEYWORDS),
            secrets_exposed_count=secrets_exposed,
            dependency_risk_score=keyword_percentage(observed, DEPENDENCY_KEYWORDS),
            compliance_score=compliance_score(len(patterns)),
            last_scan_timestamp=self._clock(),
        )


def compliance_score(distinct_pattern_count: int) -> float:
    return float(max(0, 100 - COMPLIANCE_PENALTY * distinct_pattern_count))
