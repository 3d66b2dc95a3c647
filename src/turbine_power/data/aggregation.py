"""
Daily aggregation of turbine observations.

Power is summed over each calendar day and the covariates are averaged.
Days without observations are left out, they are not filled.
"""

import pandas as pd
from typing import Iterable, List, Optional

from .. import config


def aggregate_daily(
    df: pd.DataFrame,
    exclude_years: Optional[Iterable[int]] = config.EXCLUDED_YEARS,
    timestamp_column: str = config.TIMESTAMP,
    power_column: str = config.ACTIVE_POWER,
    covariate_columns: Optional[List[str]] = None,
    verbose: bool = False
) -> pd.DataFrame:
    """
    Aggregate observations to one row per calendar day.

    Args:
        df: pandas.DataFrame of observations
        exclude_years: Years to drop from the summary. Default: (2017,).
        timestamp_column: Name of the timestamp column. Default: 'timestamp'.
        power_column: Name of the active power column. Default: 'active_power'.
        covariate_columns: Columns to average.
            Default: ambient temperature, wind direction and wind speed.
        verbose: If True, print progress messages

    Returns:
        pandas.DataFrame with columns: date, year, month, day,
        day_active_power and one column per covariate
    """
    covariate_columns = (
        config.COVARIATE_COLUMNS if covariate_columns is None else covariate_columns
    )
    timestamps = pd.to_datetime(df[timestamp_column])

    grouped = df.groupby(timestamps.dt.normalize().rename(config.DATE))
    daily = grouped[covariate_columns].mean()
    daily.insert(0, config.DAY_ACTIVE_POWER, grouped[power_column].sum())
    daily = daily.reset_index()

    daily.insert(1, "year", daily[config.DATE].dt.year)
    daily.insert(2, "month", daily[config.DATE].dt.month)
    daily.insert(3, "day", daily[config.DATE].dt.day)

    if exclude_years:
        excluded = daily["year"].isin(list(exclude_years))
        if verbose and excluded.any():
            print(f"Dropped {excluded.sum()} days in excluded year(s) {list(exclude_years)}")
        daily = daily[~excluded]

    daily = daily.sort_values(config.DATE).reset_index(drop=True)

    if verbose:
        print(f"Aggregated {len(df)} observations to {len(daily)} days")

    return daily
