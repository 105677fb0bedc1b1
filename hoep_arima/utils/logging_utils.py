"""Logging utilities for the project.

Provides functions for logging series/table summaries and saving plots.
Used across the data, evaluation and reporting modules.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from hoep_arima.config_logging import get_logger
from hoep_arima.utils.io import ensure_output_dir

__all__ = [
    "log_series_summary",
    "log_table",
    "save_plot",
]


def _log_date_range_from_index(
    series: pd.Series, label: str, logger_instance: logging.Logger
) -> None:
    """Log date range from datetime index.

    Args:
        series: Series with datetime index.
        label: Label for logging.
        logger_instance: Logger instance to use.
    """
    if not pd.api.types.is_datetime64_any_dtype(series.index) or series.empty:
        return

    start, end = series.index.min(), series.index.max()
    if pd.isna(start) or pd.isna(end):
        return
    logger_instance.info(f"{label} period: {start:%Y-%m-%d %H:%M} → {end:%Y-%m-%d %H:%M}")


def log_series_summary(
    series: pd.Series,
    label: str,
    *,
    logger_instance: logging.Logger | None = None,
) -> None:
    """Log number of observations, date range and basic statistics of a series.

    Args:
        series: Time series, ideally with a datetime index.
        label: Label used as log prefix.
        logger_instance: Optional logger instance. If None, uses get_logger().
    """
    if logger_instance is None:
        logger_instance = get_logger(__name__)

    logger_instance.info(f"{label}: {len(series)} observations")
    _log_date_range_from_index(series, label, logger_instance)
    if series.empty:
        return
    logger_instance.info(
        f"{label} statistics - Mean: {series.mean():.4f}, "
        f"Std: {series.std():.4f}, "
        f"Min: {series.min():.4f}, "
        f"Max: {series.max():.4f}"
    )


def log_table(
    table: pd.DataFrame,
    title: str,
    *,
    float_format: str = "{:.4f}",
    logger_instance: logging.Logger | None = None,
) -> None:
    """Log a DataFrame as an aligned text table.

    Args:
        table: Table to log.
        title: Heading printed above the table.
        float_format: Format applied to float cells.
        logger_instance: Optional logger instance. If None, uses get_logger().
    """
    if logger_instance is None:
        logger_instance = get_logger(__name__)
    rendered = table.to_string(float_format=float_format.format)
    logger_instance.info("%s\n%s", title, rendered)


def save_plot(
    output_path: Path | str,
    *,
    dpi: int = 300,
    bbox_inches: str = "tight",
    close_after: bool = True,
) -> None:
    """Save the current matplotlib plot to file.

    Standardized plot saving with automatic directory creation and consistent formatting.

    Args:
        output_path: Path to save the plot.
        dpi: Resolution in dots per inch. Default is 300.
        bbox_inches: Bounding box specification. Default is 'tight'.
        close_after: If True, close the plot after saving. Default is True.
    """
    import matplotlib.pyplot as plt

    path_obj = Path(output_path)
    ensure_output_dir(path_obj)

    plt.savefig(path_obj, dpi=dpi, bbox_inches=bbox_inches)

    logger = get_logger(__name__)
    logger.info(f"Plot saved to {path_obj}")

    if close_after:
        plt.close()
