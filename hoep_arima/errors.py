"""Exceptions raised by the HOEP forecasting study.

Each error also derives from the builtin it specializes so that callers
handling ``ValueError``/``RuntimeError`` keep working.
"""

from __future__ import annotations


class HoepArimaError(Exception):
    """Base class for project errors."""


class DataFormatError(HoepArimaError, ValueError):
    """Raw input does not match the expected header/column shape."""


class InsufficientDataError(HoepArimaError, ValueError):
    """Not enough observations for the requested evaluation window."""


class LengthMismatchError(HoepArimaError, ValueError):
    """Forecast, realized and competitor vectors are not aligned."""


class ModelFitError(HoepArimaError, RuntimeError):
    """Order selection or fitting failed for a training window."""

    def __init__(
        self,
        message: str,
        *,
        step: int | None = None,
        train_size: int | None = None,
    ) -> None:
        self.step = step
        self.train_size = train_size
        super().__init__(message)
