"""Validation utilities for DataFrames, files, series and aligned vectors.

This module provides validation functions for:
- DataFrame validation (non-empty, required columns)
- File existence validation
- Series validation
- Length alignment of forecast/actual vectors
- Finiteness of forecast/actual vectors
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sized

import numpy as np
import pandas as pd

from hoep_arima.errors import LengthMismatchError

__all__ = [
    "validate_dataframe_not_empty",
    "validate_required_columns",
    "validate_file_exists",
    "validate_series",
    "validate_same_length",
    "validate_finite",
]


def validate_file_exists(file_path: Path, file_name: str | None = None) -> None:
    """Validate that a file exists.

    Args:
        file_path: Path to the file to check.
        file_name: Optional name of the file for error message.
            If None, uses the file path.

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path.exists():
        if file_name is None:
            file_name = str(file_path)
        msg = f"{file_name} not found: {file_path}"
        raise FileNotFoundError(msg)


def validate_dataframe_not_empty(df: pd.DataFrame, name: str = "DataFrame") -> None:
    """Validate that DataFrame is not empty.

    Args:
        df: DataFrame to validate.
        name: Name of the DataFrame for error messages. Default is 'DataFrame'.

    Raises:
        ValueError: If DataFrame is empty.
    """
    if df.empty:
        msg = f"{name} DataFrame is empty"
        raise ValueError(msg)


def validate_required_columns(
    df: pd.DataFrame,
    required_columns: set[str] | list[str] | tuple[str, ...],
    df_name: str = "DataFrame",
) -> None:
    """Validate that DataFrame contains required columns.

    Args:
        df: DataFrame to validate.
        required_columns: Collection of required column names.
        df_name: Name of the DataFrame for error messages. Default is 'DataFrame'.

    Raises:
        KeyError: If any required column is missing.
    """
    required_set = set(required_columns)
    missing_columns = required_set - set(df.columns)
    if missing_columns:
        msg = f"Missing required columns in {df_name}: {sorted(missing_columns)}"
        raise KeyError(msg)


def validate_series(series: pd.Series) -> pd.Series:
    """Return a clean float Series with NaN values removed.

    Args:
        series: Input time series.

    Returns:
        Cleaned Series with NaN values removed and converted to float.

    Raises:
        ValueError: If series is None or empty after dropna.

    Examples:
        >>> series = pd.Series([1.0, 2.0, np.nan, 3.0])
        >>> len(validate_series(series))
        3
    """
    if series is None:
        raise ValueError("series is None")
    s = pd.Series(series).dropna().astype(float)
    if s.empty:
        raise ValueError("series is empty after dropna")
    return s


def validate_same_length(vectors: Mapping[str, Sized], *, context: str = "evaluation") -> int:
    """Check that every named vector has the same length.

    Args:
        vectors: Mapping of vector name to sized object.
        context: Label used in the error message.

    Returns:
        The common length.

    Raises:
        LengthMismatchError: If lengths differ or the mapping is empty.
    """
    if not vectors:
        raise LengthMismatchError(f"No vectors supplied for {context}")
    lengths = {name: len(values) for name, values in vectors.items()}
    if len(set(lengths.values())) != 1:
        detail = ", ".join(f"{name}={n}" for name, n in lengths.items())
        raise LengthMismatchError(f"Length mismatch in {context}: {detail}")
    return next(iter(lengths.values()))


def validate_finite(vectors: Mapping[str, object], *, context: str = "evaluation") -> None:
    """Check that every named vector holds only finite values.

    Args:
        vectors: Mapping of vector name to array-like.
        context: Label used in the error message.

    Raises:
        ValueError: If any vector contains NaN or infinity.
    """
    bad = {}
    for name, values in vectors.items():
        arr = np.asarray(values, dtype=float)
        n_bad = int((~np.isfinite(arr)).sum())
        if n_bad:
            bad[name] = n_bad
    if bad:
        detail = ", ".join(f"{name}={n}" for name, n in bad.items())
        raise ValueError(f"Non-finite values in {context}: {detail}")
