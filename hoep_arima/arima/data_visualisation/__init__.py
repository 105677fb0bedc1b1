"""Visualizations of the HOEP series and of the rolling ARMA forecasts."""

from __future__ import annotations

from .data_loading import load_price_table, load_results_table
from .plotting import (
    plot_forecasts_vs_actual,
    plot_price_acf_pacf,
    plot_price_distribution,
    plot_price_series,
)

__all__ = [
    "load_price_table",
    "load_results_table",
    "plot_forecasts_vs_actual",
    "plot_price_acf_pacf",
    "plot_price_distribution",
    "plot_price_series",
]
