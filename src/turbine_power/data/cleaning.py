"""
Data cleaning functions for turbine observations.

This module provides functions to remove repeated timestamps and to impute
missing sensor readings.
"""

import pandas as pd
import numpy as np
from typing import List, Optional

from .. import config


def drop_duplicate_timestamps(
    df: pd.DataFrame,
    timestamp_column: str = config.TIMESTAMP,
    verbose: bool = False
) -> pd.DataFrame:
    """
    Remove rows with a repeated timestamp, keeping the first occurrence.

    Args:
        df: pandas.DataFrame
        timestamp_column: Name of the timestamp column. Default: 'timestamp'.
        verbose: If True, print progress messages

    Returns:
        pandas.DataFrame
    """
    n_before = len(df)
    df_clean = df.drop_duplicates(subset=[timestamp_column]).reset_index(drop=True)
    n_after = len(df_clean)
    if verbose and n_before > n_after:
        print(f"Removed {n_before - n_after} duplicate timestamps")
    return df_clean


def impute_missing_with_mean(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None,
    inplace: bool = True,
    verbose: bool = False
) -> pd.DataFrame:
    """
    Replace missing values in each numeric column with that column's mean.

    The mean is taken over the non-missing values of the column, so it is
    unchanged by the imputation.

    Args:
        df: pandas.DataFrame
        columns: Columns to impute. Default: all numeric columns.
        inplace: If True, modifies dataframe in place. If False, works on a copy.
        verbose: If True, print progress messages

    Returns:
        pandas.DataFrame with no missing values in `columns`
    """
    if not inplace:
        df = df.copy()

    if columns is None:
        columns = df.select_dtypes(include=[np.number]).columns.tolist()

    for col in columns:
        n_missing = df[col].isna().sum()
        if n_missing == 0:
            continue

        mean = df[col].mean()
        if pd.isna(mean):
            raise ValueError(
                f"Column '{col}' has no observed values, cannot impute its mean."
            )

        df[col] = df[col].fillna(mean)
        if verbose:
            print(f"  Imputed {n_missing} missing values in '{col}' with mean {mean:.4f}")

    return df
