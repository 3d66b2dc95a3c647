"""Time series construction utilities for daily turbine data."""

import pandas as pd
from typing import List, Optional, Tuple, Union

from . import config
from .data.validation import find_duplicate_days, find_missing_days


def to_time_series(
    df: pd.DataFrame,
    value_column: str = config.DAY_ACTIVE_POWER,
    date_column: str = config.DATE,
    freq: str = config.FREQ,
    fill_method: Optional[str] = None,
) -> pd.Series:
    """
    Build a regular, date-indexed series from a daily summary.

    Args:
        df: `pandas.DataFrame` with one row per day
        value_column: Column holding the series values
            (default: 'day_active_power')
        date_column: Name of the date column (default: 'date')
        freq: Frequency of the resulting index (default: 'D')
        fill_method: How to fill missing days: None to reject gaps,
            'interpolate' or 'forward_fill' (default: None)

    Returns:
        `pandas.Series` indexed by date with frequency `freq`
    """
    duplicates = find_duplicate_days(df, date_column)
    if duplicates:
        raise ValueError(
            f"Found {len(duplicates)} duplicate days, first: {duplicates[0].date()}"
        )

    missing = find_missing_days(df, date_column)
    if missing and fill_method is None:
        raise ValueError(
            f"Series has {len(missing)} missing days (first: {missing[0].date()}). "
            "Pass fill_method='interpolate' or 'forward_fill' to fill them."
        )

    index = pd.DatetimeIndex(pd.to_datetime(df[date_column])).normalize()
    series = pd.Series(df[value_column].values, index=index, name=value_column)
    series = series.sort_index().asfreq(freq)

    if fill_method == "interpolate":
        series = series.interpolate(method="time", limit_direction="both")
    elif fill_method == "forward_fill":
        series = series.ffill().bfill()
    elif fill_method is not None:
        raise ValueError(
            f"Unknown fill_method '{fill_method}', expected 'interpolate' or 'forward_fill'."
        )

    return series


def exog_frame(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None,
    date_column: str = config.DATE,
    freq: str = config.FREQ,
    fill_method: Optional[str] = None,
) -> pd.DataFrame:
    """
    Extract date-indexed exogenous regressors from a daily summary.

    Args:
        df: `pandas.DataFrame` with one row per day
        columns: Regressor columns (default: `config.COVARIATE_COLUMNS`)
        date_column: Name of the date column (default: 'date')
        freq: Frequency of the resulting index (default: 'D')
        fill_method: Passed to `to_time_series` for each column

    Returns:
        `pandas.DataFrame` with one column per regressor
    """
    columns = config.COVARIATE_COLUMNS if columns is None else columns
    return pd.concat(
        [
            to_time_series(df, col, date_column, freq, fill_method)
            for col in columns
        ],
        axis=1,
    )


def holdout_split(
    df: Union[pd.DataFrame, pd.Series], n_holdout: int = config.FORECAST_HORIZON
) -> Tuple[Union[pd.DataFrame, pd.Series], Union[pd.DataFrame, pd.Series]]:
    """
    Split off the last `n_holdout` rows of a time-ordered dataset.

    Split the series and regressors built from the full daily summary, so
    that gaps at the boundary are caught before splitting. The held-out
    rows provide the future regressor values (and actuals) for a forecast
    of horizon `n_holdout`.

    Args:
        df: `pandas.DataFrame` or `pandas.Series` sorted by time
        n_holdout: Number of final rows to hold out (default: 5)

    Returns:
        df_fit: Rows used for fitting
        df_holdout: Held-out rows
    """
    if n_holdout < 1 or n_holdout >= len(df):
        raise ValueError(
            f"n_holdout must be between 1 and {len(df) - 1}, got {n_holdout}."
        )
    return df.iloc[:-n_holdout].copy(), df.iloc[-n_holdout:].copy()
