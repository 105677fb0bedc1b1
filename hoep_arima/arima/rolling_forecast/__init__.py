"""Rolling-origin ARMA forecasting."""

from __future__ import annotations

from .rolling_forecast import RollingForecastResult, StepForecast, rolling_forecast

__all__ = [
    "RollingForecastResult",
    "StepForecast",
    "rolling_forecast",
]
