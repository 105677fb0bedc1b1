"""Metrics and statistical utilities for the project.

Provides functions for computing residuals, sample moments and distances.
Used by the accuracy evaluation and the report tables.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd
from scipy import stats
from scipy.spatial import distance

from hoep_arima.constants import VARIANCE_DDOF

__all__ = [
    "compute_residuals",
    "compute_sample_moments",
    "euclidean_distance",
]


def compute_residuals(
    y_true: np.ndarray | pd.Series | Iterable[float],
    y_pred: np.ndarray | pd.Series | Iterable[float],
) -> np.ndarray:
    """Return residuals y_true - y_pred as numpy array.

    Args:
        y_true: Actual values (array or Series).
        y_pred: Predicted values (array or Series).

    Returns:
        Residuals as numpy array (y_true - y_pred).

    Examples:
        >>> compute_residuals(np.array([1.0, 2.0, 3.0]), np.array([1.0, 1.5, 3.5]))
        array([ 0. ,  0.5, -0.5])
    """
    yt = np.asarray(y_true, dtype=float)
    yp = np.asarray(y_pred, dtype=float)
    return yt - yp


def compute_sample_moments(values: np.ndarray | pd.Series | Iterable[float]) -> dict[str, float]:
    """Compute the first four sample moments of a vector.

    Conventions: variance is the unbiased sample variance (``ddof=1``);
    skewness is the biased estimator ``m3 / m2**1.5``; kurtosis is the raw
    (non-excess) ``m4 / m2**2``, so a Gaussian sample scores close to 3.

    Args:
        values: Observations. Non-finite values are ignored.

    Returns:
        Dict with ``mean``, ``variance``, ``skewness`` and ``kurtosis``.
    """
    arr = np.asarray(list(values), dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        nan = float("nan")
        return {"mean": nan, "variance": nan, "skewness": nan, "kurtosis": nan}

    variance = float(np.var(arr, ddof=VARIANCE_DDOF)) if arr.size > VARIANCE_DDOF else float("nan")
    with np.errstate(divide="ignore", invalid="ignore"):
        skewness = float(stats.skew(arr, bias=True))
        kurtosis = float(stats.kurtosis(arr, fisher=False, bias=True))
    return {
        "mean": float(np.mean(arr)),
        "variance": variance,
        "skewness": skewness,
        "kurtosis": kurtosis,
    }


def euclidean_distance(
    a: np.ndarray | pd.Series | Iterable[float],
    b: np.ndarray | pd.Series | Iterable[float],
) -> float:
    """Euclidean distance between two equally long vectors."""
    return float(distance.euclidean(np.asarray(a, dtype=float), np.asarray(b, dtype=float)))
