"""Evaluation of rolling ARMA forecasts against IESO predispatch."""

from __future__ import annotations

from hoep_arima.utils.metrics import compute_residuals

from .evaluation_arima import (
    AccuracySummary,
    ResidualDiagnostics,
    build_results_table,
    calculate_metrics,
    evaluate_accuracy,
    evaluate_results_table,
    ljung_box_on_residuals,
    plot_residuals_acf_with_ljungbox,
    residual_stationarity,
    save_evaluation_results,
)

__all__ = [
    "AccuracySummary",
    "ResidualDiagnostics",
    "build_results_table",
    "calculate_metrics",
    "compute_residuals",
    "evaluate_accuracy",
    "evaluate_results_table",
    "ljung_box_on_residuals",
    "plot_residuals_acf_with_ljungbox",
    "residual_stationarity",
    "save_evaluation_results",
]
