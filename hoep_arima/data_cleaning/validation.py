"""Validation and raw loading functions for the IESO price export."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from hoep_arima.constants import RAW_HEADER_SKIP_ROWS, REQUIRED_RAW_COLUMNS
from hoep_arima.errors import DataFormatError
from hoep_arima.utils import (
    get_logger,
    load_csv_file,
    validate_dataframe_not_empty,
    validate_required_columns,
)

logger = get_logger(__name__)


# Use the more robust version from utils
assert_not_empty = validate_dataframe_not_empty


def normalize_header(df: pd.DataFrame) -> pd.DataFrame:
    """Strip stray whitespace from column names."""
    out = df.copy()
    out.columns = [str(c).strip() for c in out.columns]
    return out


def validate_columns(raw_df: pd.DataFrame) -> None:
    """Validate that the raw export carries the date, hour, price and predispatch columns.

    Args:
        raw_df: Raw dataset DataFrame (header already parsed).

    Raises:
        DataFormatError: If one or more required columns are missing.
    """
    try:
        validate_required_columns(raw_df, REQUIRED_RAW_COLUMNS, df_name="raw price export")
    except KeyError as e:
        msg = (
            f"{e.args[0]}. Expected the header on row {RAW_HEADER_SKIP_ROWS + 1} "
            f"with columns {list(REQUIRED_RAW_COLUMNS)}; found {list(raw_df.columns)}"
        )
        raise DataFormatError(msg) from e


def load_raw_price_table(data_file: Path | str) -> pd.DataFrame:
    """Read the raw export, discarding the metadata rows above the header.

    All cells are read as strings; type coercion happens in the integrity step
    so that unparseable cells can be counted and imputed.

    Args:
        data_file: Path to the IESO CSV export.

    Returns:
        Raw DataFrame restricted to the required columns.

    Raises:
        FileNotFoundError: If the file does not exist.
        DataFormatError: If the file is empty or the header is not as expected.
    """
    path = Path(data_file)
    try:
        raw_df = load_csv_file(path, skiprows=RAW_HEADER_SKIP_ROWS, dtype=str)
    except ValueError as e:
        raise DataFormatError(str(e)) from e

    raw_df = normalize_header(raw_df)
    validate_columns(raw_df)
    raw_df = raw_df.loc[:, list(REQUIRED_RAW_COLUMNS)]
    assert_not_empty(raw_df, name="raw price export")

    logger.info("Loaded %d raw rows from %s", len(raw_df), path)
    return raw_df
