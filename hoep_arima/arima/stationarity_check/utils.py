"""Utility functions for stationarity checks."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from hoep_arima.constants import TIMESTAMP_COLUMN
from hoep_arima.utils import (
    load_csv_file,
    validate_file_exists,
    validate_required_columns,
    validate_series as _validate_series,
)


def load_series_from_csv(
    *, data_file: Path | str, column: str, date_col: str = TIMESTAMP_COLUMN
) -> pd.Series:
    """Load a column as Series from a CSV with a timestamp column.

    Args:
        data_file: Path to CSV file.
        column: Column name to extract.
        date_col: Name of the timestamp column.

    Returns:
        Series with a DatetimeIndex, sorted chronologically, NaN removed.

    Raises:
        FileNotFoundError: If data_file does not exist.
        KeyError: If a required column is missing.
    """
    path = Path(data_file)
    validate_file_exists(path, "Data file")

    df = load_csv_file(path)
    validate_required_columns(df, [date_col, column], df_name=path.name)
    df[date_col] = pd.to_datetime(df[date_col])
    df = df.sort_values(date_col).set_index(date_col)
    return df[column].astype(float).dropna()


def validate_series(series: pd.Series) -> pd.Series:
    """Delegate to the shared series validator."""
    return _validate_series(series)
