"""Tests for the shared scoring primitives."""

from datetime import datetime, timedelta, timezone

import pytest

from commit_signals.behavioral.scoring import (
    clamp_score,
    days_between,
    keyword_percentage,
    message_quality,
    observe,
    parse_timestamp,
    percentage,
    recency_score,
)
from commit_signals.exceptions import DataError
from commit_signals.models import Commit


class TestParseTimestamp:
    """Test parse_timestamp function."""

    def test_iso_with_z_suffix_is_utc(self):
        parsed = parse_timestamp("2024-06-15T10:00:00Z")
        assert parsed == datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc)

    def test_offset_is_preserved(self):
        """Wall-clock hour stays as delivered."""
        parsed = parse_timestamp("2024-06-15T23:30:00-05:00")
        assert parsed.hour == 23
        assert parsed.utcoffset() == timedelta(hours=-5)

    def test_unix_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_datetime_passthrough(self, now):
        assert parse_timestamp(now) is now

    @pytest.mark.parametrize("value", ["not a date", "", None, True, ["2024-01-01"]])
    def test_rejects_unparsable(self, value):
        with pytest.raises(DataError) as exc_info:
            parse_timestamp(value, commit_id="abc")
        assert exc_info.value.commit_id == "abc"


class TestRecency:
    """Test recency_score and days_between."""

    def test_today_scores_100(self, now):
        assert recency_score(now, now) == pytest.approx(100.0)

    def test_linear_decay(self, now):
        assert recency_score(now - timedelta(days=10), now) == pytest.approx(80.0)

    def test_floors_at_zero(self, now):
        assert recency_score(now - timedelta(days=60), now) == 0.0

    def test_unknown_moment_scores_zero(self, now):
        assert recency_score(None, now) == 0.0

    def test_naive_datetime_treated_as_utc(self, now):
        assert days_between(datetime(2024, 6, 14, 12, 0), now) == pytest.approx(1.0)


class TestPercentages:
    """Test percentage helpers."""

    def test_no_total_is_zero(self):
        assert percentage(0, 0) == 0.0

    def test_capped_at_100(self):
        assert percentage(5, 3) == 100.0

    def test_quarter(self):
        assert percentage(1, 4) == pytest.approx(25.0)

    def test_substring_match_without_word_boundaries(self, make_commit):
        """'pr' matches inside 'improve'."""
        observed = observe([make_commit("improve caching"), make_commit("Add login page")])
        assert keyword_percentage(observed, ("pr",)) == pytest.approx(50.0)

    def test_case_insensitive(self, make_commit):
        observed = observe([make_commit("Update README")])
        assert keyword_percentage(observed, ("readme",)) == 100.0

    @pytest.mark.parametrize("value,expected", [(150.0, 100.0), (-5.0, 0.0), (42.5, 42.5)])
    def test_clamp(self, value, expected):
        assert clamp_score(value) == expected


class TestMessageQuality:
    """Test the four 25-point message checks."""

    @pytest.mark.parametrize(
        "message,expected",
        [
            ("Add login page", 100),
            ("feat: add login", 75),  # lower-case first letter
            ("wip", 25),
            ("Fixed.", 25),
            ("", 25),  # only the trailing-period check passes
            ("123 numbers first here", 100),  # non-letters pass the case check
            ("fix(auth): x", 75),  # conventional prefix, two tokens
            ("A" * 100, 50),  # too long, single token
            ("Fix \U0001f41b bugs", 75),  # ten code points is not over ten
        ],
    )
    def test_scores(self, message, expected):
        assert message_quality(message) == expected


class TestObserve:
    """Test feed validation."""

    def test_missing_message_raises(self):
        commit = Commit(id="x1", message=None, timestamp="2024-06-15T10:00:00Z", author="alice")
        with pytest.raises(DataError) as exc_info:
            observe([commit])
        assert exc_info.value.commit_id == "x1"

    def test_missing_author_raises(self):
        commit = Commit(id="x2", message="Add", timestamp="2024-06-15T10:00:00Z", author=None)
        with pytest.raises(DataError):
            observe([commit])

    def test_lowercases_text_and_normalizes_instant(self):
        commit = Commit(
            id="x3", message="Fix BUG", timestamp="2024-06-15T23:30:00-05:00", author="alice"
        )
        (observed,) = observe([commit])
        assert observed.text == "fix bug"
        assert observed.instant == datetime(2024, 6, 16, 4, 30, tzinfo=timezone.utc)
        assert observed.local_time.hour == 23
