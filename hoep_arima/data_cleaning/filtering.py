"""Outlier filtering on the realized price series.

The filter is an iterated sigma clip: observations farther than ``n_sigma``
sample standard deviations from the mean are dropped, and the band is
recomputed on the survivors until a pass removes nothing. The output is
therefore a fixed point, and filtering it again discards zero observations.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from hoep_arima.constants import OUTLIER_SIGMA_THRESHOLD, PRICE_COLUMN
from hoep_arima.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class OutlierFilterResult:
    """Outcome of a sigma filter run."""

    kept_mask: pd.Series
    n_discarded: int
    n_passes: int
    mean: float
    std: float
    threshold: float


def _single_pass(values: pd.Series, n_sigma: float) -> tuple[pd.Series, float, float]:
    mean = float(values.mean())
    std = float(values.std(ddof=1)) if len(values) > 1 else 0.0
    if not np.isfinite(std):
        std = 0.0
    kept = (values - mean).abs() <= n_sigma * std
    return kept, mean, std


def outlier_mask(values: pd.Series, n_sigma: float = OUTLIER_SIGMA_THRESHOLD) -> OutlierFilterResult:
    """Flag observations that survive the iterated ``n_sigma`` clip.

    Args:
        values: Numeric series without missing values.
        n_sigma: Width of the acceptance band in standard deviations.

    Returns:
        OutlierFilterResult whose ``kept_mask`` (aligned on ``values.index``)
        is True for retained rows. ``mean``/``std`` describe the final band.

    Raises:
        ValueError: If ``n_sigma`` is not positive or ``values`` has NaNs.
    """
    if n_sigma <= 0:
        raise ValueError(f"n_sigma must be positive, got {n_sigma}")
    arr = values.astype(float)
    if arr.isna().any():
        raise ValueError("Outlier filter expects a series without missing values")

    kept_mask = pd.Series(True, index=arr.index)
    mean, std, n_passes = float("nan"), float("nan"), 0
    while True:
        current = arr[kept_mask]
        if current.empty:
            break
        kept, mean, std = _single_pass(current, n_sigma)
        n_passes += 1
        if kept.all():
            break
        kept_mask.loc[kept.index[~kept.to_numpy()]] = False

    return OutlierFilterResult(
        kept_mask=kept_mask,
        n_discarded=int((~kept_mask).sum()),
        n_passes=n_passes,
        mean=mean,
        std=std,
        threshold=float(n_sigma),
    )


def remove_outliers(
    values: pd.Series, n_sigma: float = OUTLIER_SIGMA_THRESHOLD
) -> tuple[pd.Series, int]:
    """Drop observations farther than ``n_sigma`` standard deviations from the mean.

    Args:
        values: Numeric series.
        n_sigma: Width of the acceptance band in standard deviations.

    Returns:
        Tuple of (filtered series, number of discarded observations).
    """
    result = outlier_mask(values, n_sigma)
    logger.info(
        "Outlier filter (%.1f sigma, %d pass(es), mean=%.4f, std=%.4f): "
        "discarded %d of %d observations",
        result.threshold,
        result.n_passes,
        result.mean,
        result.std,
        result.n_discarded,
        len(values),
    )
    return values[result.kept_mask], result.n_discarded


def filter_price_outliers(
    df: pd.DataFrame,
    column: str = PRICE_COLUMN,
    n_sigma: float = OUTLIER_SIGMA_THRESHOLD,
) -> tuple[pd.DataFrame, int]:
    """Drop whole rows whose realized price is an outlier.

    The predispatch columns of a discarded hour go with it, so the cleaned
    frame stays keyed by timestamp.

    Args:
        df: Cleaned price table.
        column: Column the filter is computed on.
        n_sigma: Width of the acceptance band in standard deviations.

    Returns:
        Tuple of (filtered DataFrame, number of discarded rows).
    """
    kept, n_discarded = remove_outliers(df[column], n_sigma)
    return df.loc[kept.index].reset_index(drop=True), n_discarded
