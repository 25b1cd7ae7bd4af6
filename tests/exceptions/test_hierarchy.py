"""Tests for the exception hierarchy."""

from commit_signals.exceptions import (
    AnalysisError,
    CommitSignalsError,
    ConfigurationError,
    DataError,
    InvalidConfigError,
    PlatformError,
    UnsupportedPlatformError,
)


class TestHierarchy:
    def test_everything_is_a_commit_signals_error(self):
        for exc in (
            DataError("bad"),
            InvalidConfigError("workers", 0, "must be at least 1"),
            PlatformError("github", "timeout"),
            UnsupportedPlatformError("svn", ["github"]),
        ):
            assert isinstance(exc, CommitSignalsError)

    def test_branches(self):
        assert issubclass(DataError, AnalysisError)
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(UnsupportedPlatformError, PlatformError)


class TestDataError:
    def test_message_and_details(self):
        err = DataError("unparsable timestamp", repository="api", commit_id="a1")
        assert err.message == "Malformed input data: unparsable timestamp"
        assert err.details == {"reason": "unparsable timestamp", "repository": "api", "commit": "a1"}
        assert str(err) == (
            "Malformed input data: unparsable timestamp "
            "(reason=unparsable timestamp, repository=api, commit=a1)"
        )

    def test_with_repository_tags_copy(self):
        err = DataError("bad", commit_id="a1")
        tagged = err.with_repository("api")
        assert tagged is not err
        assert tagged.repository == "api"
        assert tagged.commit_id == "a1"
        assert err.repository is None

    def test_with_repository_keeps_existing_tag(self):
        err = DataError("bad", repository="api")
        assert err.with_repository("web") is err


class TestPlatformError:
    def test_status_in_details(self):
        err = PlatformError("gitlab", "404 Not Found", status_code=404)
        assert err.details["status"] == "404"
        assert err.status_code == 404
        assert "gitlab API error" in str(err)

    def test_unsupported_lists_platforms(self):
        err = UnsupportedPlatformError("svn", ["github", "gitlab"])
        assert err.supported_platforms == ["github", "gitlab"]
        assert "github, gitlab" in str(err)
