"""
Data pipeline for creating the daily turbine dataset.

This module chains loading, cleaning, imputation, aggregation and
validation of the raw turbine observations.
"""

from typing import Iterable, Optional

import pandas as pd

from .. import config
from .aggregation import aggregate_daily
from .cleaning import drop_duplicate_timestamps, impute_missing_with_mean
from .loading import load_turbine_data
from .validation import validate_daily_summary


def create_daily_dataset(
    file_path: str,
    exclude_years: Optional[Iterable[int]] = config.EXCLUDED_YEARS,
    output_path: Optional[str] = None,
    verbose: bool = False
) -> pd.DataFrame:
    """
    Create the daily summary dataset from raw turbine observations.

    Args:
        file_path: Path to the raw CSV file
        exclude_years: Years to drop from the summary. Default: (2017,).
        output_path: Path to save the output CSV file (optional)
        verbose: If True, print progress messages

    Returns:
        DataFrame with one row per day
    """
    print("\n=== Creating Daily Dataset ===") if verbose else None

    df = load_turbine_data(file_path, verbose=verbose)
    df = drop_duplicate_timestamps(df, verbose=verbose)

    print("Imputing missing values...") if verbose else None
    impute_missing_with_mean(df, columns=config.SENSOR_COLUMNS, verbose=verbose)

    print("Aggregating to daily summaries...") if verbose else None
    daily = aggregate_daily(df, exclude_years=exclude_years, verbose=verbose)

    print("Validating daily summaries...") if verbose else None
    is_valid, errors = validate_daily_summary(
        daily, exclude_years=exclude_years, verbose=verbose
    )
    if not is_valid and verbose:
        print(f"  Warning: Validation found {len(errors)} issue(s)")

    # Save to disk if path provided
    if output_path:
        print(f"\nSaving daily data to {output_path}...") if verbose else None
        daily.to_csv(output_path, index=False)
        print(f"Saved {len(daily)} records") if verbose else None

    return daily
