"""Run the behavioral analyzers over one or many repositories.

The analyzers are independent pure functions, so repositories are analyzed
in parallel. A repository whose fetch fails or whose feed is malformed is
logged and recorded as a failure; its siblings carry on.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from .behavioral import (
    CollaborationAnalyzer,
    CommitPatternAnalyzer,
    DeveloperActivityAnalyzer,
    RepositoryHealthAnalyzer,
    SecurityAnalyzer,
    TechnicalDebtAnalyzer,
)
from .behavioral.scoring import utc_now
from .config import AnalysisConfig
from .exceptions import CommitSignalsError, DataError
from .feed import RepositoryFeed
from .logging_config import get_logger
from .models import (
    CollaborationSignals,
    Commit,
    CommitPattern,
    DeveloperActivity,
    RepositoryFailure,
    RepositoryHealth,
    RepositoryStatus,
    RepositorySummary,
    SecurityMetrics,
    TechnicalDebtMetrics,
)
from .platforms import PlatformClient, repository_status

logger = get_logger(__name__)


@dataclass(frozen=True)
class RepositoryReport:
    """Every analyzer's record for one repository."""

    repository: RepositorySummary
    status: RepositoryStatus
    developers: tuple[DeveloperActivity, ...]
    patterns: CommitPattern
    health: RepositoryHealth
    security: SecurityMetrics
    collaboration: CollaborationSignals
    debt: TechnicalDebtMetrics


@dataclass(frozen=True)
class BatchResult:
    reports: tuple[RepositoryReport, ...]
    failures: tuple[RepositoryFailure, ...]


class BehavioralEngine:
    """Feed one commit list to all six analyzers.

    Holds no state between calls beyond the analyzers themselves, which are
    stateless; ``clock`` is injected so tests can pin "now".
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self.developers = DeveloperActivityAnalyzer(clock=clock)
        self.patterns = CommitPatternAnalyzer()
        self.health = RepositoryHealthAnalyzer(clock=clock)
        self.security = SecurityAnalyzer(clock=clock)
        self.collaboration = CollaborationAnalyzer()
        self.debt = TechnicalDebtAnalyzer()

    def analyze_repository(
        self, repo: RepositorySummary, commits: Iterable[Commit]
    ) -> RepositoryReport:
        """Analyze one repository, all or nothing.

        Raises:
            DataError: If the summary or any commit is malformed. No partial
                report is produced.
        """
        commits = list(commits)
        try:
            return RepositoryReport(
                repository=repo,
                status=repository_status(repo, self._clock()),
                developers=tuple(self.developers.analyze(commits)),
                patterns=self.patterns.analyze(commits),
                health=self.health.analyze(repo, commits),
                security=self.security.analyze(commits, repo_name=repo.name),
                collaboration=self.collaboration.analyze(commits, repo_name=repo.name),
                debt=self.debt.analyze(repo, commits),
            )
        except DataError as e:
            raise e.with_repository(repo.name)


def analyze_batch(
    feeds: Sequence[RepositoryFeed],
    engine: Optional[BehavioralEngine] = None,
    workers: int = 4,
    skipped: Sequence[RepositoryFailure] = (),
) -> BatchResult:
    """Analyze already-fetched feeds; one bad feed never stops the rest.

    ``skipped`` holds entries that failed before analysis (for example while
    loading a feed file); they lead the returned failures.
    """
    engine = engine or BehavioralEngine()
    jobs = [
        (feed.repository.name, lambda feed=feed: engine.analyze_repository(feed.repository, feed.commits))
        for feed in feeds
    ]
    batch = _run_isolated(jobs, workers)
    return BatchResult(reports=batch.reports, failures=tuple(skipped) + batch.failures)


def fetch_and_analyze(
    client: PlatformClient,
    config: AnalysisConfig,
    engine: Optional[BehavioralEngine] = None,
) -> BatchResult:
    """List repositories, sample the first ``sample_size`` and analyze each.

    Commit fetches run concurrently, bounded by ``config.workers``.

    Raises:
        CommitSignalsError: If the repository listing itself fails.
    """
    engine = engine or BehavioralEngine()
    repositories = client.list_repositories(config.username, config.organization)
    sample = repositories[: config.sample_size]
    logger.info(
        "Analyzing %d of %d %s repositories",
        len(sample),
        len(repositories),
        config.platform,
    )

    def job(repo: RepositorySummary) -> RepositoryReport:
        owner = repo.owner or config.account or ""
        commits = client.fetch_commits(owner, repo.name)
        logger.debug("Fetched %d commits for %s", len(commits), repo.name)
        return engine.analyze_repository(repo, commits)

    jobs = [(repo.name, lambda repo=repo: job(repo)) for repo in sample]
    return _run_isolated(jobs, config.workers)


def _run_isolated(
    jobs: list[tuple[str, Callable[[], RepositoryReport]]], workers: int
) -> BatchResult:
    """Run jobs on a thread pool, keeping input order for the reports."""
    results: dict[int, RepositoryReport] = {}
    failures: dict[int, RepositoryFailure] = {}

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        futures = {executor.submit(run): (i, name) for i, (name, run) in enumerate(jobs)}
        for future in as_completed(futures):
            index, name = futures[future]
            try:
                results[index] = future.result()
            except CommitSignalsError as e:
                logger.warning("Failed to analyze repository %s: %s", name, e)
                failures[index] = RepositoryFailure(repo_name=name, reason=str(e))
            except Exception as e:
                logger.exception("Unexpected error analyzing repository %s", name)
                failures[index] = RepositoryFailure(
                    repo_name=name, reason=f"{e.__class__.__name__}: {e}"
                )

    return BatchResult(
        reports=tuple(results[i] for i in sorted(results)),
        failures=tuple(failures[i] for i in sorted(failures)),
    )
