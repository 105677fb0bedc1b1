"""Summary tables of the study: descriptive moments, accuracy and comparison.

Tables are plain DataFrames indexed by series/forecaster name. They are
logged and saved as CSV; neither format is a machine-readable contract.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from hoep_arima.arima.evaluation_arima import AccuracySummary
from hoep_arima.constants import (
    ACCURACY_METRICS_TABLE_FILE,
    DESCRIPTIVE_MOMENTS_FILE,
    MOMENTS_COMPARISON_TABLE_FILE,
    NUMERIC_COLUMNS,
    REALIZED_SERIES_NAME,
)
from hoep_arima.utils import compute_sample_moments, get_logger, log_table, save_csv

logger = get_logger(__name__)

MOMENT_COLUMNS: tuple[str, ...] = ("mean", "variance", "skewness", "kurtosis")
ACCURACY_COLUMNS: tuple[str, ...] = ("MAE", "RMSE", "MSE")
DISTANCE_COLUMN = "euclidean_distance"


def descriptive_moments_table(
    frame: pd.DataFrame, columns: tuple[str, ...] | list[str] = NUMERIC_COLUMNS
) -> pd.DataFrame:
    """Mean, variance, skewness and raw kurtosis of each price column.

    Args:
        frame: Cleaned price table.
        columns: Columns to describe.

    Returns:
        DataFrame indexed by column name with ``n`` and the four moments.
    """
    rows = {}
    for col in columns:
        values = frame[col].dropna()
        rows[col] = {"n": int(values.size), **compute_sample_moments(values)}
    table = pd.DataFrame.from_dict(rows, orient="index")
    table.index.name = "series"
    return table.loc[:, ["n", *MOMENT_COLUMNS]]


def accuracy_table(summary: AccuracySummary) -> pd.DataFrame:
    """MAE, RMSE and MSE per forecaster, ARMA first, then competitors in order."""
    table = pd.DataFrame.from_dict(summary.metrics, orient="index")
    table.index.name = "forecaster"
    return table.loc[:, list(ACCURACY_COLUMNS)]


def comparison_table(summary: AccuracySummary) -> pd.DataFrame:
    """Moments of realized, ARMA and 1-step competitor with distances to realized.

    The realized row has a distance of 0 to itself.
    """
    rows = {}
    for name, moments in summary.moments.items():
        distance = 0.0 if name == REALIZED_SERIES_NAME else summary.distances[name]
        rows[name] = {**moments, DISTANCE_COLUMN: distance}
    table = pd.DataFrame.from_dict(rows, orient="index")
    table.index.name = "series"
    return table.loc[:, [*MOMENT_COLUMNS, DISTANCE_COLUMN]]


def save_report_tables(
    frame: pd.DataFrame,
    summary: AccuracySummary,
    *,
    moments_file: Path | str = DESCRIPTIVE_MOMENTS_FILE,
    accuracy_file: Path | str = ACCURACY_METRICS_TABLE_FILE,
    comparison_file: Path | str = MOMENTS_COMPARISON_TABLE_FILE,
) -> dict[str, Path]:
    """Build, log and save the three report tables.

    Returns:
        Mapping of table name to written CSV path.
    """
    tables = {
        "descriptive_moments": (descriptive_moments_table(frame), moments_file),
        "accuracy_metrics": (accuracy_table(summary), accuracy_file),
        "moments_comparison": (comparison_table(summary), comparison_file),
    }
    written: dict[str, Path] = {}
    for name, (table, path) in tables.items():
        log_table(table, name.replace("_", " ").capitalize(), logger_instance=logger)
        written[name] = save_csv(table, path, index=True)
        logger.info("Saved %s table: %s", name, written[name])
    return written
