"""Data loading helpers for the visualization CLI."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from hoep_arima.constants import (
    NUMERIC_COLUMNS,
    RESULTS_TABLE_COLUMNS,
    TIMESTAMP_COLUMN,
)
from hoep_arima.utils import get_logger, load_csv_file, validate_required_columns

logger = get_logger(__name__)


def _load_timestamped_csv(data_file: Path | str, required_columns: list[str]) -> pd.DataFrame:
    path = Path(data_file)
    df = load_csv_file(path)
    validate_required_columns(df, required_columns, df_name=path.name)
    df[TIMESTAMP_COLUMN] = pd.to_datetime(df[TIMESTAMP_COLUMN])
    return df.sort_values(TIMESTAMP_COLUMN).reset_index(drop=True)


def load_price_table(data_file: Path | str) -> pd.DataFrame:
    """Load the cleaned price table written by the data_cleaning stage.

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyError: If a price or predispatch column is missing.
    """
    df = _load_timestamped_csv(data_file, [TIMESTAMP_COLUMN, *NUMERIC_COLUMNS])
    logger.info("Loaded %d price rows from %s", len(df), data_file)
    return df


def load_results_table(predictions_file: Path | str) -> pd.DataFrame:
    """Load the rolling predictions table written by the evaluation stage."""
    return _load_timestamped_csv(predictions_file, list(RESULTS_TABLE_COLUMNS))
