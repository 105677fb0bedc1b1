"""Utility functions for I/O, validation, metrics and logging.

This package provides modular utilities organized by functionality:
- validation: DataFrame, file, series and length validation
- io: File I/O operations (CSV, JSON)
- datetime_utils: DateTime formatting
- metrics: Residuals, sample moments and distances
- logging_utils: Logging and plotting utilities
- statsmodels_utils: statsmodels warning management
"""

from __future__ import annotations

from hoep_arima.config_logging import get_logger

# DateTime utilities
from hoep_arima.utils.datetime_utils import format_dates_to_string

# I/O utilities
from hoep_arima.utils.io import (
    ensure_output_dir,
    load_csv_file,
    load_json_data,
    save_csv,
    save_json_pretty,
)

# Logging utilities
from hoep_arima.utils.logging_utils import log_series_summary, log_table, save_plot

# Metrics utilities
from hoep_arima.utils.metrics import (
    compute_residuals,
    compute_sample_moments,
    euclidean_distance,
)

# Statsmodels utilities
from hoep_arima.utils.statsmodels_utils import suppress_statsmodels_warnings

# Validation utilities
from hoep_arima.utils.validation import (
    validate_dataframe_not_empty,
    validate_file_exists,
    validate_finite,
    validate_required_columns,
    validate_same_length,
    validate_series,
)

__all__ = [
    "get_logger",
    # Validation
    "validate_dataframe_not_empty",
    "validate_file_exists",
    "validate_finite",
    "validate_required_columns",
    "validate_same_length",
    "validate_series",
    # I/O
    "ensure_output_dir",
    "load_csv_file",
    "load_json_data",
    "save_csv",
    "save_json_pretty",
    # DateTime
    "format_dates_to_string",
    # Metrics
    "compute_residuals",
    "compute_sample_moments",
    "euclidean_distance",
    # Logging
    "log_series_summary",
    "log_table",
    "save_plot",
    # Statsmodels
    "suppress_statsmodels_warnings",
]
