"""Technical-debt scores and refactoring advice from commit messages."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Sequence

from ..exceptions import DataError
from ..models import Commit, RepositorySummary, TechnicalDebtMetrics
from .scoring import ObservedCommit, count_matching, keyword_percentage, observe

COMPLEXITY_KEYWORDS = ("refactor", "simplify", "cleanup")
DUPLICATION_KEYWORDS = ("duplicate", "dry", "reuse")
DEPENDENCY_KEYWORDS = ("update", "upgrade", "dependency")
UNUSED_KEYWORDS = ("remove", "cleanup", "unused")
TEST_KEYWORDS = ("test",)
DOC_KEYWORDS = ("doc", "readme", "comment")

WELL_MAINTAINED = "Code appears well-maintained"


class AdvisoryRule(NamedTuple):
    keyword: str
    percent: int
    above: bool  # True: fires when the share exceeds percent; False: when below
    advice: str


# Evaluated in order; comparisons are strict and done in integers so that
# e.g. exactly 10% refactor commits does not fire the low-refactoring rule.
ADVISORY_RULES = (
    AdvisoryRule(
        "fix", 30, True, "High bug fix ratio suggests code quality improvements needed"
    ),
    AdvisoryRule(
        "refactor", 10, False, "Low refactoring activity - consider code structure improvements"
    ),
    AdvisoryRule(
        "test", 20, False, "Insufficient test coverage - add missing unit tests"
    ),
    AdvisoryRule(
        "doc", 10, False, "Poor documentation coverage - improve code comments and documentation"
    ),
)


class TechnicalDebtAnalyzer:
    def analyze(self, repo: RepositorySummary, commits: Iterable[Commit]) -> TechnicalDebtMetrics:
        try:
            observed = observe(commits)
        except DataError as e:
            raise e.with_repository(repo.name)

        return TechnicalDebtMetrics(
            repo_name=repo.name,
            code_complexity=keyword_percentage(observed, COMPLEXITY_KEYWORDS),
            duplicate_code=keyword_percentage(observed, DUPLICATION_KEYWORDS),
            outdated_dependencies=count_matching(observed, DEPENDENCY_KEYWORDS),
            unused_code=keyword_percentage(observed, UNUSED_KEYWORDS),
            test_debt=100.0 - keyword_percentage(observed, TEST_KEYWORDS),
            documentation_debt=100.0 - keyword_percentage(observed, DOC_KEYWORDS),
            refactoring_opportunities=refactoring_opportunities(observed),
        )


def refactoring_opportunities(observed: Sequence[ObservedCommit]) -> tuple[str, ...]:
    total = len(observed)
    advice = []
    for rule in ADVISORY_RULES:
        share = count_matching(observed, (rule.keyword,)) * 100
        threshold = total * rule.percent
        fired = share > threshold if rule.above else share < threshold
        if fired:
            advice.append(rule.advice)
    return tuple(advice) or (WELL_MAINTAINED,)
