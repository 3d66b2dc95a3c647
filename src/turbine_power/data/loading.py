"""
Data loading functions for wind turbine sensor data.

This module provides functions to load raw turbine observations from CSV
and standardise them to the canonical column names used by the package.
"""

import pandas as pd
from typing import Dict, List, Optional

from .. import config


def standardise_columns(
    df: pd.DataFrame, aliases: Optional[Dict[str, str]] = None
) -> pd.DataFrame:
    """
    Rename raw sensor columns to their canonical names.

    Args:
        df: pandas.DataFrame with raw column names.
        aliases: Mapping from raw to canonical column names.
            Default: `config.RAW_COLUMN_ALIASES`.

    Returns:
        pandas.DataFrame
    """
    aliases = config.RAW_COLUMN_ALIASES if aliases is None else aliases
    renames = {raw: name for raw, name in aliases.items() if raw in df.columns}

    # The first match wins if several raw columns map to the same name
    seen = set(df.columns) - set(renames)
    for raw, name in list(renames.items()):
        if name in seen:
            del renames[raw]
        seen.add(name)

    return df.rename(columns=renames)


def load_turbine_data(
    file_path: str,
    columns: Optional[List[str]] = None,
    aliases: Optional[Dict[str, str]] = None,
    verbose: bool = False,
) -> pd.DataFrame:
    """
    Load turbine observations from CSV.

    The timestamp column is parsed and converted to timezone-naive UTC.
    Only the timestamp and sensor columns are kept, sorted by timestamp.

    Args:
        file_path: Path to CSV file.
        columns: Sensor columns to keep. Default: `config.SENSOR_COLUMNS`.
        aliases: Mapping from raw to canonical column names.
            Default: `config.RAW_COLUMN_ALIASES`.
        verbose: Print progress messages. Default: False.

    Returns:
        pandas.DataFrame
    """
    columns = config.SENSOR_COLUMNS if columns is None else columns

    if verbose:
        print(f"Loading turbine data from {file_path}...")

    df = pd.read_csv(file_path)
    df = standardise_columns(df, aliases)

    required = [config.TIMESTAMP] + list(columns)
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(
            f"Missing required column(s) {missing} in {file_path}. "
            f"Found: {list(df.columns)}"
        )

    df = df[required].copy()
    df[config.TIMESTAMP] = pd.to_datetime(
        df[config.TIMESTAMP], utc=True
    ).dt.tz_convert(None)
    for col in columns:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    df = df.sort_values(config.TIMESTAMP).reset_index(drop=True)

    if verbose:
        print(f"  Loaded {len(df)} rows with {len(df.columns)} columns")
        print(
            f"  Time range: {df[config.TIMESTAMP].min()} "
            f"to {df[config.TIMESTAMP].max()}"
        )

    return df
