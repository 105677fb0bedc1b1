"""Data integrity fixing functions: timestamps, duplicates and median imputation."""

from __future__ import annotations

import numpy as np
import pandas as pd

from hoep_arima.constants import (
    HOUR_MAX,
    HOUR_MIN,
    NUMERIC_COLUMNS,
    RAW_COLUMN_RENAMES,
    RAW_DATE_COLUMN,
    RAW_HOUR_COLUMN,
    TIMESTAMP_COLUMN,
)
from hoep_arima.errors import DataFormatError
from hoep_arima.utils import get_logger

logger = get_logger(__name__)


def _get_empty_fix_counters() -> dict[str, int]:
    """Return empty fix counters dictionary."""
    return {
        "duplicates_removed": 0,
        "missing_values_filled": 0,
    }


def _to_numeric(values: pd.Series) -> pd.Series:
    """Parse numbers that may carry thousands separators; unparseable cells become NaN."""
    if not pd.api.types.is_numeric_dtype(values):
        values = values.astype(str).str.replace(",", "", regex=False).str.strip()
    return pd.to_numeric(values, errors="coerce").astype(float)


def derive_timestamp(dates: pd.Series, hours: pd.Series) -> pd.Series:
    """Combine the ``Date`` and ``Hour`` columns into an hourly timestamp.

    IESO hours run 1..24 and label the hour ending, so the timestamp is the
    calendar date plus ``Hour`` hours (``Hour 24`` is midnight of the next day).

    Args:
        dates: Date column (any format pandas can parse, day precision).
        hours: Hour column (1..24).

    Returns:
        Series of hour-precision timestamps.

    Raises:
        DataFormatError: If a date or hour cannot be parsed or is out of range.
    """
    parsed_dates = pd.to_datetime(dates.astype(str).str.strip(), errors="coerce")
    parsed_hours = _to_numeric(hours)

    bad_dates = parsed_dates.isna()
    bad_hours = parsed_hours.isna() | (parsed_hours < HOUR_MIN) | (parsed_hours > HOUR_MAX)
    bad_hours |= parsed_hours.notna() & (parsed_hours != np.floor(parsed_hours))
    if bad_dates.any() or bad_hours.any():
        bad_rows = list(dates.index[bad_dates | bad_hours][:5])
        msg = (
            f"Could not derive timestamps for {int((bad_dates | bad_hours).sum())} row(s) "
            f"(first rows: {bad_rows}); expected a parseable {RAW_DATE_COLUMN} and "
            f"{RAW_HOUR_COLUMN} in [{HOUR_MIN}, {HOUR_MAX}]"
        )
        raise DataFormatError(msg)

    timestamps = parsed_dates.dt.normalize() + pd.to_timedelta(parsed_hours, unit="h")
    return timestamps.dt.floor("h")


def fill_missing_with_median(
    df: pd.DataFrame, columns: tuple[str, ...] | list[str] = NUMERIC_COLUMNS
) -> tuple[pd.DataFrame, int]:
    """Replace missing numeric cells with the column median.

    The median is taken over the full loaded column, NA excluded.

    Args:
        df: DataFrame to clean.
        columns: Numeric columns to impute.

    Returns:
        Tuple of (cleaned DataFrame, number of values filled).

    Raises:
        DataFormatError: If a column has no parseable value at all.
    """
    df_filled = df.copy()
    filled_count = 0
    for col in columns:
        missing = df_filled[col].isna()
        n_missing = int(missing.sum())
        if n_missing == 0:
            continue
        median = df_filled[col].median(skipna=True)
        if pd.isna(median):
            raise DataFormatError(f"Column '{col}' has no numeric value to impute from")
        df_filled.loc[missing, col] = median
        filled_count += n_missing
        logger.info("Filled %d missing value(s) in '%s' with median %.4f", n_missing, col, median)
    return df_filled, filled_count


def _remove_duplicates(df: pd.DataFrame) -> tuple[pd.DataFrame, int]:
    """Remove rows sharing a timestamp, keeping the first occurrence."""
    before = len(df)
    cleaned_df = df.drop_duplicates(subset=[TIMESTAMP_COLUMN], keep="first")
    removed = before - len(cleaned_df)
    if removed > 0:
        logger.info("Removed %d duplicate row(s) on %s", removed, TIMESTAMP_COLUMN)
    return cleaned_df, int(removed)


def normalize_raw_table(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Rename columns, parse numbers and derive the timestamp column.

    Args:
        raw_df: Raw export with the required columns as strings.

    Returns:
        DataFrame with ``timestamp`` plus the numeric price/predispatch columns
        (NaN where a cell was empty or unparseable).
    """
    out = pd.DataFrame(
        {TIMESTAMP_COLUMN: derive_timestamp(raw_df[RAW_DATE_COLUMN], raw_df[RAW_HOUR_COLUMN])}
    )
    for raw_col, col in RAW_COLUMN_RENAMES.items():
        out[col] = _to_numeric(raw_df[raw_col])
    return out


def apply_basic_integrity_fixes(df: pd.DataFrame) -> tuple[pd.DataFrame, dict[str, int]]:
    """Apply basic integrity fixes to the normalized price table.

    The function performs the following operations:

    - Sort by timestamp
    - Remove duplicate timestamps (first occurrence kept)
    - Fill missing price/predispatch values with the column median

    Args:
        df: Normalized DataFrame (output of :func:`normalize_raw_table`).

    Returns:
        Tuple of (cleaned DataFrame, dictionary with fix counts).
    """
    if df.empty:
        return df.copy(), _get_empty_fix_counters()

    counters: dict[str, int] = {}
    df = df.sort_values(TIMESTAMP_COLUMN, kind="mergesort")
    df, counters["duplicates_removed"] = _remove_duplicates(df)
    df, counters["missing_values_filled"] = fill_missing_with_median(df)

    return df.reset_index(drop=True), counters
