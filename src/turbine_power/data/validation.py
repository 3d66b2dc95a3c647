"""
Data validation functions for daily turbine summaries.

This module provides functions to check that a daily summary can be turned
into a regular time series: one row per day, no gaps, no missing values and
no rows from excluded years.
"""

import pandas as pd
from typing import Iterable, List, Optional, Tuple

from .. import config


def find_missing_days(
        df: pd.DataFrame,
        date_column: str = config.DATE
        ) -> List[pd.Timestamp]:
    """
    Find calendar days absent between the first and last day of the summary.

    Args:
        df: pandas.DataFrame
        date_column: Name of the date column. Default: 'date'.

    Returns:
        List of missing days, in order
    """
    dates = pd.DatetimeIndex(pd.to_datetime(df[date_column])).normalize()
    if len(dates) == 0:
        return []
    expected = pd.date_range(dates.min(), dates.max(), freq="D")
    return list(expected.difference(dates))


def find_duplicate_days(
        df: pd.DataFrame,
        date_column: str = config.DATE
        ) -> List[pd.Timestamp]:
    """
    Find days that appear more than once in the summary.

    Args:
        df: pandas.DataFrame
        date_column: Name of the date column. Default: 'date'.

    Returns:
        List of repeated days
    """
    dates = pd.to_datetime(df[date_column]).dt.normalize()
    return list(pd.DatetimeIndex(dates[dates.duplicated()].unique()).sort_values())


def validate_daily_summary(
    df: pd.DataFrame,
    exclude_years: Optional[Iterable[int]] = config.EXCLUDED_YEARS,
    date_column: str = config.DATE,
    verbose: bool = False
) -> Tuple[bool, List[str]]:
    """
    Validate that the daily summary is ready for time series modelling.

    Checks:
    1. No duplicate days
    2. No gaps between the first and last day
    3. No rows from excluded years
    4. No missing values in numeric columns

    Args:
        df: DataFrame with one row per day
        exclude_years: Years that must not appear. Default: (2017,).
        date_column: Name of the date column
        verbose: If True, print validation results

    Returns:
        Tuple of (is_valid, list_of_error_messages)
    """
    errors = []

    duplicates = find_duplicate_days(df, date_column)
    if duplicates:
        errors.append(f"Found {len(duplicates)} duplicate days")

    missing = find_missing_days(df, date_column)
    if missing:
        errors.append(f"Found {len(missing)} missing days")
        if verbose:
            for day in missing[:5]:  # Show first 5
                errors.append(f"  - {day.date()} has no observations")

    if exclude_years:
        years = pd.to_datetime(df[date_column]).dt.year
        excluded = years.isin(list(exclude_years))
        if excluded.any():
            errors.append(
                f"Found {excluded.sum()} rows from excluded year(s) {sorted(set(years[excluded]))}"
            )

    n_missing = df.select_dtypes(include="number").isna().sum()
    for col, count in n_missing[n_missing > 0].items():
        errors.append(f"Column '{col}' has {count} missing values")

    is_valid = len(errors) == 0

    if verbose:
        if is_valid:
            print("All validation checks passed")
        else:
            print(f"Validation failed with {len(errors)} error(s):")
            for error in errors:
                print(f"  {error}")

    return is_valid, errors
