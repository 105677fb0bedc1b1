"""DateTime helpers shared by the loading and reporting code."""

from __future__ import annotations

import warnings

import pandas as pd

__all__ = [
    "format_dates_to_string",
]

DATE_FORMAT_DEFAULT = "%Y-%m-%d %H:%M"


def format_dates_to_string(
    dates: pd.Series | pd.DatetimeIndex | pd.Index | list,
    date_format: str | None = None,
) -> pd.Series:
    """Format dates to string with consistent format.

    Args:
        dates: Series, DatetimeIndex, or list of dates to format.
        date_format: Output format string. If None, uses ``%Y-%m-%d %H:%M``.

    Returns:
        Series of formatted date strings with the same length as input.

    Raises:
        ValueError: If dates cannot be parsed to datetime.

    Examples:
        >>> format_dates_to_string(pd.date_range("2024-01-01", periods=2, freq="h"))
        0    2024-01-01 00:00
        1    2024-01-01 01:00
        dtype: object
    """
    resolved_format = date_format if date_format is not None else DATE_FORMAT_DEFAULT
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message="Could not infer format", category=UserWarning)
        datetime_index = pd.DatetimeIndex(pd.to_datetime(dates, errors="raise"))
    return pd.Series(datetime_index.strftime(resolved_format), dtype=object)
