"""I/O utilities for loading and saving data files.

This module provides functions for:
- Loading CSV files with a header offset
- Saving DataFrames as CSV
- JSON file operations
- File system utilities (ensure directories exist)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from hoep_arima.config_logging import get_logger
from hoep_arima.utils.validation import validate_file_exists

__all__ = [
    "ensure_output_dir",
    "load_csv_file",
    "load_json_data",
    "save_csv",
    "save_json_pretty",
]


def ensure_output_dir(path: Path) -> None:
    """Ensure parent directory exists for a given path.

    Creates parent directories if they don't exist. Useful for ensuring
    output directories exist before saving files.

    Args:
        path: File path whose parent directory should be created.
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def load_csv_file(
    csv_path: Path,
    *,
    skiprows: int = 0,
    dtype: Any = None,
) -> pd.DataFrame:
    """Load a CSV file, optionally skipping leading metadata rows.

    Args:
        csv_path: Path to CSV file.
        skiprows: Number of leading rows to discard before the header.
        dtype: Optional dtype passed to ``pd.read_csv``.

    Returns:
        DataFrame with loaded data.

    Raises:
        FileNotFoundError: If file does not exist.
        ValueError: If dataset is empty.
    """
    logger = get_logger(__name__)
    validate_file_exists(csv_path, "Dataset")

    logger.info(f"Loading dataset from {csv_path}")
    try:
        df = pd.read_csv(csv_path, skiprows=skiprows, dtype=dtype, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise ValueError(f"Dataset is empty: {csv_path}") from e
    if df.empty:
        raise ValueError(f"Dataset is empty: {csv_path}")
    return df


def save_csv(df: pd.DataFrame, output_path: Path | str, *, index: bool = False) -> Path:
    """Save a DataFrame as CSV with automatic directory creation.

    Args:
        df: DataFrame to save.
        output_path: Destination path.
        index: Whether to write the index.

    Returns:
        Path of the written file.
    """
    path_obj = Path(output_path)
    ensure_output_dir(path_obj)
    df.to_csv(path_obj, index=index, lineterminator="\n")
    return path_obj


def load_json_data(input_path: Path | str) -> Any:
    """Load JSON content from disk.

    Args:
        input_path: Path to the JSON file.

    Returns:
        Parsed JSON content.

    Raises:
        FileNotFoundError: If file does not exist.
    """
    path_obj = Path(input_path)
    validate_file_exists(path_obj, "JSON file")
    with open(path_obj) as f:
        return json.load(f)


def save_json_pretty(
    data: dict | list,
    output_path: Path | str,
    *,
    indent: int = 2,
    sort_keys: bool = False,
) -> None:
    """Save JSON with pretty formatting and automatic directory creation.

    Args:
        data: Dictionary or list to save as JSON.
        output_path: Path to save JSON file.
        indent: Indentation level for pretty printing.
        sort_keys: If True, sort dictionary keys alphabetically.

    Examples:
        Save metrics:
        >>> save_json_pretty(
        ...     {"mae": 0.123, "rmse": 0.456},
        ...     "results/metrics.json"
        ... )
    """
    path_obj = Path(output_path)
    ensure_output_dir(path_obj)

    with open(path_obj, "w") as f:
        json.dump(data, f, indent=indent, sort_keys=sort_keys)
