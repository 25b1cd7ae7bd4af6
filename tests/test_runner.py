"""Tests for running the analyzers over repositories and batches."""

from unittest import mock

import pytest

from commit_signals.config import AnalysisConfig
from commit_signals.exceptions import DataError, PlatformError
from commit_signals.feed import RepositoryFeed
from commit_signals.models import Platform, RepositoryFailure, RepositoryStatus, RepositorySummary
from commit_signals.platforms import AzureDevOpsClient, PlatformClient
from commit_signals.runner import BehavioralEngine, analyze_batch, fetch_and_analyze


class InMemoryClient(PlatformClient):
    """Serves canned repositories and commits; a commit list may be an exception."""

    platform = Platform.GITHUB
    default_base_url = "http://platform.test"

    def __init__(self, repositories, commits):
        super().__init__()
        self.repositories = repositories
        self.commits = commits
        self.fetched = []

    def list_user_repositories(self, username):
        return list(self.repositories)

    def list_org_repositories(self, organization):
        raise PlatformError("github", "403 Forbidden", status_code=403)

    def fetch_commits(self, owner, repo_name):
        self.fetched.append((owner, repo_name))
        result = self.commits.get(repo_name, [])
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def engine(clock):
    return BehavioralEngine(clock=clock)


class TestAnalyzeRepository:
    def test_report_has_every_record(self, engine, make_repo, make_commit, now):
        repo = make_repo(last_updated_at=now)
        commits = [make_commit(author="alice"), make_commit("fix bug", author="bob", days_ago=1)]

        report = engine.analyze_repository(repo, commits)

        assert report.repository is repo
        assert report.status is RepositoryStatus.ACTIVE
        assert [d.name for d in report.developers] == ["alice", "bob"]
        assert report.health.repo_name == "api"
        assert report.security.repo_name == "api"
        assert report.collaboration.repo_name == "api"
        assert report.debt.repo_name == "api"
        assert sum(report.patterns.hourly_distribution) == 2
        assert report.security.last_scan_timestamp == now

    def test_malformed_commit_names_repository(self, engine, make_repo, make_commit):
        with pytest.raises(DataError) as exc_info:
            engine.analyze_repository(make_repo(name="web"), [make_commit(timestamp="??")])
        assert exc_info.value.repository == "web"

    def test_empty_repository(self, engine, make_repo):
        report = engine.analyze_repository(make_repo(), [])
        assert report.developers == ()
        assert report.health.has_commits is False
        assert report.security.compliance_score == 100.0

    def test_same_input_same_report(self, engine, make_repo, make_commit):
        repo = make_repo(open_issue_count=3)
        commits = [make_commit("hack around token check", author="a", days_ago=i) for i in range(5)]
        assert engine.analyze_repository(repo, commits) == engine.analyze_repository(repo, commits)

    def test_scores_stay_in_range(self, engine, make_repo, make_commit):
        messages = ["fix", "hack bypass password", "Update deps", "refactor legacy code", "TODO cleanup"]
        commits = [
            make_commit(msg * (i + 1), author=f"dev{i}", days_ago=-i)
            for i, msg in enumerate(messages * 30)
        ]
        report = engine.analyze_repository(make_repo(open_issue_count=500), commits)

        scores = [
            report.health.health_score,
            report.health.code_churn_rate,
            report.health.technical_debt_score,
            report.security.compliance_score,
            report.security.dependency_risk_score,
            report.patterns.message_quality,
            report.patterns.consistency_score,
            report.collaboration.code_review_participation,
            report.collaboration.knowledge_sharing,
            report.debt.code_complexity,
            report.debt.test_debt,
        ] + [d.engagement_score for d in report.developers]
        assert all(0.0 <= s <= 100.0 for s in scores)


class TestAnalyzeBatch:
    """One bad feed never stops its siblings."""

    def test_failure_isolated_and_order_kept(self, engine, make_repo, make_commit):
        feeds = [
            RepositoryFeed(make_repo(name=f"repo{i}"), (make_commit(),)) for i in range(6)
        ]
        feeds.insert(2, RepositoryFeed(make_repo(name="broken"), (make_commit(timestamp="??"),)))

        result = analyze_batch(feeds, engine=engine, workers=4)

        assert [r.repository.name for r in result.reports] == [f"repo{i}" for i in range(6)]
        assert [f.repo_name for f in result.failures] == ["broken"]
        assert "timestamp" in result.failures[0].reason

    def test_skipped_entries_lead_failures(self, engine, make_repo, make_commit):
        feeds = [RepositoryFeed(make_repo(name="broken"), (make_commit(timestamp="??"),))]
        skipped = [RepositoryFailure(repo_name="entry 0", reason="feed entry needs a 'repository' object")]

        result = analyze_batch(feeds, engine=engine, skipped=skipped)

        assert [f.repo_name for f in result.failures] == ["entry 0", "broken"]

    def test_empty_batch(self, engine):
        result = analyze_batch([], engine=engine)
        assert result.reports == ()
        assert result.failures == ()


class TestFetchAndAnalyze:
    def repos(self, count, owner="octo"):
        return [
            RepositorySummary(name=f"r{i}", platform=Platform.GITHUB, full_name=f"{owner}/r{i}")
            for i in range(count)
        ]

    def test_samples_first_repositories(self, engine, make_commit):
        client = InMemoryClient(self.repos(7), {"r0": [make_commit()]})
        config = AnalysisConfig(username="octo", sample_size=5)

        result = fetch_and_analyze(client, config, engine=engine)

        assert [r.repository.name for r in result.reports] == ["r0", "r1", "r2", "r3", "r4"]
        assert sorted(name for _, name in client.fetched) == ["r0", "r1", "r2", "r3", "r4"]
        assert all(owner == "octo" for owner, _ in client.fetched)

    def test_fetch_failure_isolated(self, engine, make_commit):
        client = InMemoryClient(
            self.repos(3),
            {"r1": PlatformError("github", "500 Server Error", status_code=500)},
        )
        result = fetch_and_analyze(client, AnalysisConfig(username="octo"), engine=engine)

        assert [r.repository.name for r in result.reports] == ["r0", "r2"]
        assert [f.repo_name for f in result.failures] == ["r1"]
        assert "500" in result.failures[0].reason

    def test_owner_falls_back_to_account(self, engine):
        repos = [RepositorySummary(name="solo", platform=Platform.GITHUB)]
        client = InMemoryClient(repos, {})
        fetch_and_analyze(client, AnalysisConfig(username="ada"), engine=engine)
        assert client.fetched == [("ada", "solo")]

    def test_listing_failure_propagates(self, engine):
        client = InMemoryClient([], {})
        with pytest.raises(PlatformError):
            fetch_and_analyze(client, AnalysisConfig(organization="acme"), engine=engine)

    def test_malformed_platform_payload_isolated(self, engine):
        """Azure answering a bare list for one repository's commits skips only that repository."""
        commit = {
            "commitId": "c1",
            "comment": "Add login page",
            "author": {"name": "Ada", "date": "2024-06-14T10:00:00Z"},
        }

        def get(url, params=None, timeout=None):
            if url.endswith("/git/repositories"):
                payload = {"value": [{"name": "x"}, {"name": "y"}]}
            elif "/repositories/x/" in url:
                payload = []
            else:
                payload = {"value": [commit]}
            return mock.Mock(ok=True, status_code=200, reason="OK", json=mock.Mock(return_value=payload))

        session = mock.MagicMock()
        session.headers = {}
        session.get.side_effect = get
        client = AzureDevOpsClient(session=session)

        result = fetch_and_analyze(
            client, AnalysisConfig(platform="azure", organization="o"), engine=engine
        )

        assert [r.repository.name for r in result.reports] == ["y"]
        assert [f.repo_name for f in result.failures] == ["x"]
        assert "azure" in result.failures[0].reason

    def test_unexpected_error_isolated(self, engine, make_commit):
        client = InMemoryClient(self.repos(3), {"r0": KeyError("commits"), "r2": [make_commit()]})
        result = fetch_and_analyze(client, AnalysisConfig(username="octo"), engine=engine)

        assert [r.repository.name for r in result.reports] == ["r1", "r2"]
        assert [f.repo_name for f in result.failures] == ["r0"]
        assert result.failures[0].reason.startswith("KeyError")
