"""Stationarity (ADF/KPSS) and autocorrelation check utilities."""

from __future__ import annotations

from .stationarity_check import (
    AutocorrelationSummary,
    StationarityReport,
    StationarityTestResult,
    adf_test,
    autocorrelation_summary,
    evaluate_stationarity,
    kpss_test,
    run_stationarity_pipeline,
    save_stationarity_report,
)

__all__ = [
    "AutocorrelationSummary",
    "StationarityReport",
    "StationarityTestResult",
    "adf_test",
    "autocorrelation_summary",
    "evaluate_stationarity",
    "kpss_test",
    "run_stationarity_pipeline",
    "save_stationarity_report",
]
