"""Tests for repository health scoring."""

import math
from datetime import timedelta

import pytest

from commit_signals.behavioral import RepositoryHealthAnalyzer
from commit_signals.exceptions import DataError
from commit_signals.models import NO_COMMITS_AGE, Platform


@pytest.fixture
def analyzer(clock):
    return RepositoryHealthAnalyzer(clock=clock)


class TestEmptyRepository:
    """A repository without commits still gets a health record."""

    def test_defaults(self, analyzer, make_repo):
        health = analyzer.analyze(make_repo(), [])

        # Only the issues component contributes: 40 - 0
        assert health.health_score == pytest.approx(40.0)
        assert health.last_commit_age_days == NO_COMMITS_AGE
        assert math.isinf(health.last_commit_age_days)
        assert health.has_commits is False
        assert health.active_developer_count == 0
        assert health.code_churn_rate == 0.0
        assert health.technical_debt_score == 0.0
        assert health.issue_resolution_estimate_days == 0.0

    def test_platform_carried_through(self, analyzer, make_repo):
        health = analyzer.analyze(make_repo(platform=Platform.GITLAB), [])
        assert health.platform is Platform.GITLAB
        assert health.repo_name == "api"


class TestHealthScore:
    """Test the four-part composite."""

    def test_capped_at_100(self, analyzer, make_repo, make_commit, now):
        commits = [make_commit(author=f"dev{i % 3}") for i in range(10)]
        health = analyzer.analyze(make_repo(last_updated_at=now), commits)
        # 30 + 30 + 30 + 40 would be 130
        assert health.health_score == 100.0

    def test_components(self, analyzer, make_repo, make_commit, now):
        repo = make_repo(open_issue_count=5, last_updated_at=now - timedelta(days=10))
        commits = [make_commit() for _ in range(5)]
        health = analyzer.analyze(repo, commits)
        # activity 15 + recency 80 * 0.3 + diversity 10 + issues 35
        assert health.health_score == pytest.approx(84.0)

    def test_issue_component_floors_at_zero(self, analyzer, make_repo):
        health = analyzer.analyze(make_repo(open_issue_count=50), [])
        assert health.health_score == 0.0

    def test_iso_last_updated_accepted(self, analyzer, make_repo):
        repo = make_repo(last_updated_at="2024-06-15T12:00:00Z")
        # issues 40 + recency 100 * 0.3
        assert analyzer.analyze(repo, []).health_score == pytest.approx(70.0)


class TestDerivedFields:
    """Test age, active developers, keyword percentages and issue estimate."""

    def test_last_commit_age(self, analyzer, make_repo, make_commit):
        commits = [make_commit(days_ago=5), make_commit(days_ago=2)]
        health = analyzer.analyze(make_repo(), commits)
        assert health.last_commit_age_days == pytest.approx(2.0)
        assert health.has_commits is True

    def test_active_developers_within_30_days(self, analyzer, make_repo, make_commit):
        commits = [
            make_commit(author="alice", days_ago=5),
            make_commit(author="bob", days_ago=40),
            make_commit(author="alice", days_ago=1),
        ]
        assert analyzer.analyze(make_repo(), commits).active_developer_count == 1

    def test_keyword_percentages(self, analyzer, make_repo, make_commit):
        commits = [
            make_commit("fix login bug"),
            make_commit("Add tests for api"),
            make_commit("Update readme"),
            make_commit("hotfix crash"),
        ]
        health = analyzer.analyze(make_repo(), commits)
        assert health.code_churn_rate == pytest.approx(50.0)
        assert health.test_coverage_estimate == pytest.approx(25.0)
        assert health.documentation_score == pytest.approx(25.0)
        assert health.technical_debt_score == pytest.approx(50.0)

    def test_issue_resolution_estimate(self, analyzer, make_repo):
        repo = make_repo(open_issue_count=5, star_count=10)
        assert analyzer.analyze(repo, []).issue_resolution_estimate_days == pytest.approx(5.0)

    def test_issue_resolution_capped(self, analyzer, make_repo):
        repo = make_repo(open_issue_count=100)
        assert analyzer.analyze(repo, []).issue_resolution_estimate_days == 30.0


class TestMalformedInput:
    """DataError carries the repository name."""

    def test_negative_issue_count(self, analyzer, make_repo):
        with pytest.raises(DataError) as exc_info:
            analyzer.analyze(make_repo(open_issue_count=-1), [])
        assert exc_info.value.repository == "api"

    def test_bad_commit(self, analyzer, make_repo, make_commit):
        with pytest.raises(DataError) as exc_info:
            analyzer.analyze(make_repo(name="web"), [make_commit(timestamp="soon")])
        assert exc_info.value.repository == "web"
        assert "repository=web" in str(exc_info.value)

    def test_bad_last_updated(self, analyzer, make_repo):
        with pytest.raises(DataError):
            analyzer.analyze(make_repo(last_updated_at="last tuesday"), [])


class TestChurnExample:
    def test_all_fix_commits(self, analyzer, make_repo, make_commit):
        """Ten 'fix' commits saturate churn and debt."""
        commits = [make_commit(f"fix issue {i}") for i in range(10)]
        health = analyzer.analyze(make_repo(), commits)
        assert health.code_churn_rate == 100.0
        assert health.technical_debt_score == 100.0


class TestRepeatable:
    def test_same_input_same_health(self, analyzer, make_repo, make_commit, now):
        repo = make_repo(open_issue_count=4, star_count=2, last_updated_at=now - timedelta(days=3))
        commits = [make_commit("fix docs", author="A", days_ago=1), make_commit(author="B", days_ago=45)]
        assert analyzer.analyze(repo, commits) == analyzer.analyze(repo, commits)
