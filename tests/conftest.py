"""Shared test fixtures for Commit Signals tests."""

import itertools
import os
from datetime import datetime, timedelta, timezone

import pytest

from commit_signals.models import Commit, Platform, RepositorySummary

# Saturday, fixed so recency and weekday buckets are deterministic
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user/project config files and COMMIT_SIGNALS_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("COMMIT_SIGNALS_"):
            monkeypatch.delenv(key)


@pytest.fixture
def now():
    """The pinned wall-clock time."""
    return NOW


@pytest.fixture
def clock():
    """Clock callable returning the pinned time."""
    return lambda: NOW


@pytest.fixture
def make_commit():
    """Factory for commits placed relative to the pinned time."""
    ids = itertools.count(1)

    def _make(message="Add login page", author="alice", timestamp=None, days_ago=0, hours_ago=0):
        if timestamp is None:
            timestamp = NOW - timedelta(days=days_ago, hours=hours_ago)
        return Commit(id=f"c{next(ids)}", message=message, timestamp=timestamp, author=author)

    return _make


@pytest.fixture
def make_repo():
    """Factory for GitHub repository summaries."""

    def _make(name="api", **kwargs):
        kwargs.setdefault("platform", Platform.GITHUB)
        return RepositorySummary(name=name, **kwargs)

    return _make
