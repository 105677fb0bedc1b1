"""High-level orchestration of the price-table loading and cleaning steps.

Two entry points:

- ``load_price_observations``: read the raw IESO export and return one
  normalized row per hour (timestamp, realized price, predispatch h1..h3).
- ``clean_price_observations``: apply the outlier filter on the realized
  price and optionally persist the cleaned table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from hoep_arima.constants import (
    CLEANED_PRICE_FILE,
    OUTLIER_SIGMA_THRESHOLD,
    PRICE_COLUMN,
    RAW_PRICE_FILE,
    TIMESTAMP_COLUMN,
)
from hoep_arima.data_cleaning.filtering import filter_price_outliers
from hoep_arima.data_cleaning.integrity import apply_basic_integrity_fixes, normalize_raw_table
from hoep_arima.data_cleaning.validation import load_raw_price_table
from hoep_arima.utils import get_logger, log_series_summary, save_csv

logger = get_logger(__name__)


@dataclass(frozen=True)
class CleaningReport:
    """Counters collected while loading and cleaning the price table."""

    rows_loaded: int
    duplicates_removed: int
    missing_values_filled: int
    outliers_removed: int
    rows_kept: int
    counters: dict[str, int] = field(default_factory=dict)


def load_price_observations(data_file: Path | str = RAW_PRICE_FILE) -> tuple[pd.DataFrame, dict[str, int]]:
    """Load the raw export into a normalized hourly table.

    Args:
        data_file: Path to the IESO CSV export.

    Returns:
        Tuple of (DataFrame with ``timestamp``, ``hoep``, ``pred_h1..3`` sorted
        by strictly increasing timestamp, integrity fix counters).

    Raises:
        FileNotFoundError: If the file does not exist.
        DataFormatError: If the header or the date/hour columns are malformed.
    """
    raw_df = load_raw_price_table(data_file)
    normalized = normalize_raw_table(raw_df)
    fixed_df, counters = apply_basic_integrity_fixes(normalized)
    counters["rows_loaded"] = len(raw_df)

    if counters["duplicates_removed"] > 0 or counters["missing_values_filled"] > 0:
        logger.info(
            "Integrity fixes: duplicates_removed=%d, missing_values_filled=%d",
            counters["duplicates_removed"],
            counters["missing_values_filled"],
        )
    logger.info(
        "Price table spans %s to %s (%d hourly rows)",
        fixed_df[TIMESTAMP_COLUMN].iloc[0],
        fixed_df[TIMESTAMP_COLUMN].iloc[-1],
        len(fixed_df),
    )
    return fixed_df, counters


def write_cleaned_dataset(df: pd.DataFrame, output_file: Path | str = CLEANED_PRICE_FILE) -> Path:
    """Persist the cleaned price table as CSV."""
    path = save_csv(df, output_file)
    logger.info("Saved cleaned price table: %s (%d rows)", path, len(df))
    return path


def clean_price_observations(
    data_file: Path | str = RAW_PRICE_FILE,
    *,
    n_sigma: float = OUTLIER_SIGMA_THRESHOLD,
    output_file: Path | str | None = None,
) -> tuple[pd.DataFrame, CleaningReport]:
    """Load the export and remove realized-price outliers.

    Args:
        data_file: Path to the IESO CSV export.
        n_sigma: Outlier threshold in standard deviations.
        output_file: Where to save the cleaned table; nothing is written if None.

    Returns:
        Tuple of (cleaned DataFrame, CleaningReport).
    """
    logger.info("Starting price table loading and cleaning")
    loaded, counters = load_price_observations(data_file)
    cleaned, n_outliers = filter_price_outliers(loaded, PRICE_COLUMN, n_sigma)
    log_series_summary(cleaned[PRICE_COLUMN], "Cleaned HOEP", logger_instance=logger)

    if output_file is not None:
        write_cleaned_dataset(cleaned, output_file)

    report = CleaningReport(
        rows_loaded=counters["rows_loaded"],
        duplicates_removed=counters["duplicates_removed"],
        missing_values_filled=counters["missing_values_filled"],
        outliers_removed=n_outliers,
        rows_kept=len(cleaned),
        counters=dict(counters),
    )
    return cleaned, report
