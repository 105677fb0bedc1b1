"""Stationarity checks for time series (ADF + KPSS) and autocorrelation summaries.

This module provides small, focused helpers to:
- run ADF and KPSS on a pandas Series
- combine results into a single verdict
- summarize ACF/PACF values used to justify an ARMA specification
- load the cleaned price table and persist a JSON report
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Literal, TypedDict
import warnings

import numpy as np
import pandas as pd
from statsmodels.tools.sm_exceptions import InterpolationWarning
from statsmodels.tsa.stattools import acf, adfuller, kpss, pacf

from hoep_arima.constants import (
    ACF_PACF_DEFAULT_LAGS,
    CLEANED_PRICE_FILE,
    PRICE_COLUMN,
    STATIONARITY_DEFAULT_ALPHA,
    STATIONARITY_REPORT_FILE,
)
from hoep_arima.utils import get_logger, save_json_pretty

from .utils import load_series_from_csv, validate_series

logger = get_logger(__name__)


class StationarityTestResult(TypedDict):
    """Typed structure for a single stationarity test result."""

    statistic: float
    p_value: float
    lags: int | None
    nobs: int | None
    critical_values: dict[str, float] | None


class AutocorrelationSummary(TypedDict):
    """ACF/PACF values from lag 1 up to ``nlags``."""

    lags: list[int]
    acf: list[float]
    pacf: list[float]
    nobs: int


@dataclass(frozen=True)
class StationarityReport:
    """Combined ADF + KPSS stationarity report."""

    stationary: bool
    alpha: float
    adf: StationarityTestResult
    kpss: StationarityTestResult
    autocorrelation: AutocorrelationSummary | None = None


def _convert_test_result(
    stat: float,
    pval: float,
    lags: int | None,
    nobs: int | None,
    crit: dict[str, float] | None,
) -> StationarityTestResult:
    """Convert raw test outputs to a StationarityTestResult mapping."""
    return {
        "statistic": float(stat),
        "p_value": float(pval),
        "lags": int(lags) if lags is not None else None,
        "nobs": int(nobs) if nobs is not None else None,
        "critical_values": (
            {str(k): float(v) for k, v in crit.items()} if crit is not None else None
        ),
    }


def adf_test(series: pd.Series, *, autolag: str = "AIC") -> StationarityTestResult:
    """Run Augmented Dickey–Fuller test.

    The number of lags is selected by ``autolag``, so the reported lag count is
    the one chosen for this series.

    Args:
        series: Input time series.
        autolag: Criterion for lag selection ("AIC", "BIC", "t-stat", or None).

    Returns:
        StationarityTestResult with statistic, p-value, lags, nobs and
        critical values.
    """
    s = validate_series(series)
    result = adfuller(s, autolag=autolag)
    # adfuller returns 5 values when autolag=None, 6 values when autolag is set
    stat, pval, lags, nobs, crit = result[0], result[1], result[2], result[3], result[4]  # type: ignore[misc]
    lags_int = int(lags) if isinstance(lags, (int, np.integer)) else None
    nobs_int = int(nobs) if isinstance(nobs, (int, np.integer)) else None
    crit_dict = {str(k): float(v) for k, v in crit.items()} if isinstance(crit, dict) else None
    return _convert_test_result(float(stat), float(pval), lags_int, nobs_int, crit_dict)


def kpss_test(
    series: pd.Series,
    *,
    regression: Literal["c", "ct"] = "c",
) -> StationarityTestResult:
    """Run KPSS test for (trend-)stationarity.

    The lag count uses the automatic Newey–West bandwidth.

    Args:
        series: Input time series.
        regression: "c" (level) or "ct" (trend).

    Returns:
        StationarityTestResult with statistic, p-value, lags, nobs and
        critical values.
    """
    s = validate_series(series)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=InterpolationWarning)
        stat, pval, lags, crit = kpss(s, regression=regression, nlags="auto")
    return _convert_test_result(stat, pval, lags, s.size, crit)


def _determine_stationarity(
    adf_res: StationarityTestResult,
    kpss_res: StationarityTestResult,
    alpha: float,
) -> bool:
    """ADF rejects a unit root and KPSS does not reject stationarity."""
    return bool(adf_res["p_value"] < alpha and kpss_res["p_value"] > alpha)


def autocorrelation_summary(
    series: pd.Series, nlags: int = ACF_PACF_DEFAULT_LAGS
) -> AutocorrelationSummary:
    """Compute ACF and PACF values for lags ``1..nlags``.

    ``nlags`` is capped below half the sample size, as PACF requires.

    Args:
        series: Input time series.
        nlags: Requested number of lags.

    Returns:
        AutocorrelationSummary (lag 0 excluded).

    Raises:
        ValueError: If the series is too short for a single lag.
    """
    s = validate_series(series)
    effective = min(int(nlags), s.size // 2 - 1)
    if effective < 1:
        raise ValueError(f"Series of {s.size} observations is too short for ACF/PACF")
    if effective < nlags:
        logger.info("ACF/PACF lags capped from %d to %d (n=%d)", nlags, effective, s.size)

    acf_values = acf(s, nlags=effective, fft=True)
    pacf_values = pacf(s, nlags=effective, method="ywm")
    return {
        "lags": list(range(1, effective + 1)),
        "acf": [float(v) for v in acf_values[1:]],
        "pacf": [float(v) for v in pacf_values[1:]],
        "nobs": int(s.size),
    }


def evaluate_stationarity(
    series: pd.Series,
    *,
    alpha: float = STATIONARITY_DEFAULT_ALPHA,
    nlags: int | None = None,
) -> StationarityReport:
    """Combine ADF and KPSS into a single verdict.

    Rule: ADF p < alpha AND KPSS p > alpha ⇒ stationary = True.

    Args:
        series: Input time series.
        alpha: Significance level (must be between 0 and 1).
        nlags: If given, also attach an ACF/PACF summary up to this lag.

    Returns:
        StationarityReport with combined verdict and test results.

    Raises:
        ValueError: If alpha is not in (0, 1).
    """
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")

    adf_res = adf_test(series)
    kpss_res = kpss_test(series)
    autocorrelation = autocorrelation_summary(series, nlags) if nlags is not None else None

    stationary = _determine_stationarity(adf_res, kpss_res, alpha)
    return StationarityReport(
        stationary=stationary,
        alpha=float(alpha),
        adf=adf_res,
        kpss=kpss_res,
        autocorrelation=autocorrelation,
    )


def run_stationarity_pipeline(
    *,
    data_file: Path | str = CLEANED_PRICE_FILE,
    column: str = PRICE_COLUMN,
    alpha: float = STATIONARITY_DEFAULT_ALPHA,
    nlags: int = ACF_PACF_DEFAULT_LAGS,
) -> StationarityReport:
    """Load the cleaned price series, run tests, return structured report.

    Args:
        data_file: Cleaned price table (CSV with a ``timestamp`` column).
        column: Column to test.
        alpha: Significance level for tests.
        nlags: Lags for the ACF/PACF summary.

    Returns:
        StationarityReport with test results and verdict.
    """
    logger.info("Running stationarity checks (ADF + KPSS) on %s::%s", data_file, column)
    series = load_series_from_csv(data_file=data_file, column=column)
    report = evaluate_stationarity(series, alpha=alpha, nlags=nlags)
    logger.info(
        "Stationary=%s (alpha=%.3f, ADF p=%.4f, KPSS p=%.4f)",
        report.stationary,
        report.alpha,
        report.adf["p_value"],
        report.kpss["p_value"],
    )
    return report


def save_stationarity_report(
    report: StationarityReport,
    out_path: Path | None = None,
) -> Path:
    """Persist report as JSON to the configured path.

    Args:
        report: StationarityReport to serialize.
        out_path: Optional override for the output path. If None,
            STATIONARITY_REPORT_FILE is used.

    Returns:
        Path to the written JSON file.
    """
    target = Path(out_path) if out_path is not None else STATIONARITY_REPORT_FILE

    save_json_pretty(asdict(report), target)
    logger.info("Saved stationarity report: %s", target)
    return target
