"""
Unit tests for daily summary validation functions.
"""

import pandas as pd
import numpy as np

from turbine_power.data.validation import (
    find_missing_days,
    find_duplicate_days,
    validate_daily_summary,
)


def make_daily(dates, **columns):
    """Daily summary with the given dates and constant values."""
    dates = pd.to_datetime(dates)
    data = {
        "date": dates,
        "day_active_power": np.ones(len(dates)),
        "wind_speed": np.ones(len(dates)),
    }
    data.update(columns)
    return pd.DataFrame(data)


class TestFindMissingDays:
    """Tests for `find_missing_days`."""

    def test_no_gaps(self):
        df = make_daily(pd.date_range("2018-01-01", periods=5, freq="D"))
        assert find_missing_days(df) == []

    def test_single_gap(self):
        df = make_daily(["2018-01-01", "2018-01-02", "2018-01-04"])
        assert find_missing_days(df) == [pd.Timestamp("2018-01-03")]

    def test_unsorted_input(self):
        df = make_daily(["2018-01-05", "2018-01-01", "2018-01-03"])
        assert find_missing_days(df) == [
            pd.Timestamp("2018-01-02"),
            pd.Timestamp("2018-01-04"),
        ]

    def test_empty(self):
        df = make_daily([])
        assert find_missing_days(df) == []


class TestFindDuplicateDays:
    """Tests for `find_duplicate_days`."""

    def test_no_duplicates(self):
        df = make_daily(pd.date_range("2018-01-01", periods=3, freq="D"))
        assert find_duplicate_days(df) == []

    def test_duplicate(self):
        df = make_daily(["2018-01-01", "2018-01-02", "2018-01-02"])
        assert find_duplicate_days(df) == [pd.Timestamp("2018-01-02")]


class TestValidateDailySummary:
    """Tests for `validate_daily_summary`."""

    def test_valid(self):
        df = make_daily(pd.date_range("2018-01-01", periods=10, freq="D"))
        is_valid, errors = validate_daily_summary(df)
        assert is_valid
        assert errors == []

    def test_gap_reported(self):
        df = make_daily(["2018-01-01", "2018-01-03"])
        is_valid, errors = validate_daily_summary(df)
        assert not is_valid
        assert any("missing days" in e for e in errors)

    def test_excluded_year_reported(self):
        df = make_daily(["2017-12-31", "2018-01-01"])
        is_valid, errors = validate_daily_summary(df, exclude_years=(2017,))
        assert not is_valid
        assert any("excluded year" in e for e in errors)

    def test_excluded_year_ignored_when_none(self):
        df = make_daily(["2017-12-31", "2018-01-01"])
        is_valid, _ = validate_daily_summary(df, exclude_years=None)
        assert is_valid

    def test_missing_values_reported(self):
        df = make_daily(
            ["2018-01-01", "2018-01-02"], wind_speed=[1.0, np.nan]
        )
        is_valid, errors = validate_daily_summary(df)
        assert not is_valid
        assert any("wind_speed" in e for e in errors)

    def test_duplicates_reported(self):
        df = make_daily(["2018-01-01", "2018-01-01", "2018-01-02"])
        is_valid, errors = validate_daily_summary(df)
        assert not is_valid
        assert any("duplicate" in e for e in errors)

    def test_verbose_prints(self, capsys):
        df = make_daily(["2018-01-01", "2018-01-03"])
        validate_daily_summary(df, verbose=True)
        captured = capsys.readouterr()
        assert "Validation failed" in captured.out
        assert "2018-01-02" in captured.out
