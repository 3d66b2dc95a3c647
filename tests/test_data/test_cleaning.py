"""
Unit tests for data cleaning functions.
"""

import pytest
import pandas as pd
import numpy as np

from turbine_power.data.cleaning import (
    drop_duplicate_timestamps,
    impute_missing_with_mean,
)


@pytest.fixture
def observations():
    """Observations with gaps in every sensor column."""
    return pd.DataFrame(
        {
            "timestamp": pd.date_range("2018-01-01", periods=6, freq="10min"),
            "active_power": [100.0, np.nan, 300.0, 400.0, np.nan, 600.0],
            "ambient_temperature": [10.0, 12.0, np.nan, 14.0, 16.0, 18.0],
            "wind_direction": [np.nan, 90.0, 180.0, 270.0, 90.0, 180.0],
            "wind_speed": [5.0, 6.0, 7.0, np.nan, np.nan, 8.0],
        }
    )


class TestImputeMissingWithMean:
    """Tests for `impute_missing_with_mean`."""

    def test_no_missing_values_remain(self, observations):
        df = impute_missing_with_mean(observations)
        assert df.isna().sum().sum() == 0

    def test_means_unchanged(self, observations):
        columns = ["active_power", "ambient_temperature", "wind_direction", "wind_speed"]
        means_before = observations[columns].mean()
        df = impute_missing_with_mean(observations, inplace=False)
        np.testing.assert_allclose(df[columns].mean(), means_before, rtol=1e-12)

    def test_missing_replaced_by_column_mean(self, observations):
        df = impute_missing_with_mean(observations, inplace=False)
        # mean of 100, 300, 400, 600
        assert df.loc[1, "active_power"] == pytest.approx(350.0)
        assert df.loc[4, "active_power"] == pytest.approx(350.0)
        # mean of 5, 6, 7, 8
        assert df.loc[3, "wind_speed"] == pytest.approx(6.5)

    def test_observed_values_untouched(self, observations):
        df = impute_missing_with_mean(observations, inplace=False)
        mask = observations["ambient_temperature"].notna()
        pd.testing.assert_series_equal(
            df.loc[mask, "ambient_temperature"],
            observations.loc[mask, "ambient_temperature"],
        )

    def test_inplace_mutates_input(self, observations):
        result = impute_missing_with_mean(observations)
        assert result is observations
        assert observations.isna().sum().sum() == 0

    def test_copy_leaves_input(self, observations):
        n_missing = observations.isna().sum().sum()
        impute_missing_with_mean(observations, inplace=False)
        assert observations.isna().sum().sum() == n_missing

    def test_selected_columns_only(self, observations):
        df = impute_missing_with_mean(observations, columns=["wind_speed"], inplace=False)
        assert df["wind_speed"].isna().sum() == 0
        assert df["active_power"].isna().sum() == 2

    def test_timestamp_column_ignored(self, observations):
        df = impute_missing_with_mean(observations, inplace=False)
        pd.testing.assert_series_equal(df["timestamp"], observations["timestamp"])

    def test_all_missing_column_raises(self, observations):
        observations["wind_speed"] = np.nan
        with pytest.raises(ValueError, match="wind_speed"):
            impute_missing_with_mean(observations)


class TestDropDuplicateTimestamps:
    """Tests for `drop_duplicate_timestamps`."""

    def test_keeps_first_occurrence(self):
        df = pd.DataFrame(
            {
                "timestamp": pd.to_datetime(
                    ["2018-01-01 00:00", "2018-01-01 00:10", "2018-01-01 00:10"]
                ),
                "active_power": [1.0, 2.0, 3.0],
            }
        )
        df_clean = drop_duplicate_timestamps(df)
        assert len(df_clean) == 2
        assert df_clean["active_power"].tolist() == [1.0, 2.0]

    def test_no_duplicates_no_change(self, observations):
        df_clean = drop_duplicate_timestamps(observations)
        pd.testing.assert_frame_equal(df_clean, observations)
