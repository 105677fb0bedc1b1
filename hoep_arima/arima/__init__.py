"""ARMA forecasting package.

Import from specific subpackages, e.g.:

    from hoep_arima.arima.rolling_forecast import rolling_forecast
    from hoep_arima.arima.evaluation_arima import evaluate_accuracy

"""

from __future__ import annotations

__all__: list[str] = []
