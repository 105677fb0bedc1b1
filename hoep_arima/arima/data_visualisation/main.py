"""CLI entry point for the data_visualisation module.

Draws the pre-modeling plots from the cleaned price table and, when the
rolling predictions exist, the forecast comparison plots.
"""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable

# Add project root to Python path for direct execution
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pandas as pd

from hoep_arima.arima.data_visualisation.data_loading import load_price_table, load_results_table
from hoep_arima.arima.data_visualisation.plotting import (
    plot_forecasts_vs_actual,
    plot_price_acf_pacf,
    plot_price_distribution,
    plot_price_series,
)
from hoep_arima.arima.evaluation_arima import plot_residuals_acf_with_ljungbox
from hoep_arima.constants import (
    ARIMA_RESIDUALS_LJUNGBOX_PLOT,
    CLEANED_PRICE_FILE,
    LJUNG_BOX_LAGS,
    PREDICTIONS_VS_ACTUAL_ARIMA_PLOT,
    PRICE_ACF_PACF_PLOT,
    PRICE_COLUMN,
    PRICE_DISTRIBUTION_PLOT,
    PRICE_SERIES_PLOT,
    RESULT_RESIDUAL_COLUMN,
    ROLLING_PREDICTIONS_ARIMA_FILE,
)
from hoep_arima.utils import get_logger

logger = get_logger(__name__)


def _execute_plot(name: str, plot_fn: Callable[[], Path]) -> Path | None:
    """Run one plot; failures are logged and do not stop the others."""
    try:
        path = plot_fn()
    except (ValueError, KeyError, OSError) as e:
        logger.warning("Plot '%s' failed: %s", name, e)
        return None
    logger.info("Plot '%s' saved: %s", name, path)
    return path


def generate_pre_modeling_plots(
    frame: pd.DataFrame,
    *,
    series_file: Path = PRICE_SERIES_PLOT,
    distribution_file: Path = PRICE_DISTRIBUTION_PLOT,
    acf_pacf_file: Path = PRICE_ACF_PACF_PLOT,
) -> list[Path]:
    """Price series, distribution and ACF/PACF plots."""
    prices = frame[PRICE_COLUMN]
    plots = [
        _execute_plot("price_series", lambda: plot_price_series(frame, series_file)),
        _execute_plot(
            "price_distribution", lambda: plot_price_distribution(prices, distribution_file)
        ),
        _execute_plot("price_acf_pacf", lambda: plot_price_acf_pacf(prices, acf_pacf_file)),
    ]
    return [p for p in plots if p is not None]


def generate_performance_plots(
    results_table: pd.DataFrame,
    *,
    lags: int = LJUNG_BOX_LAGS,
    forecasts_file: Path = PREDICTIONS_VS_ACTUAL_ARIMA_PLOT,
    residuals_file: Path = ARIMA_RESIDUALS_LJUNGBOX_PLOT,
) -> list[Path]:
    """Forecast comparison and residual ACF plots."""
    plots = [
        _execute_plot(
            "forecasts_vs_actual",
            lambda: plot_forecasts_vs_actual(results_table, forecasts_file),
        ),
        _execute_plot(
            "residuals_acf_ljungbox",
            lambda: plot_residuals_acf_with_ljungbox(
                results_table[RESULT_RESIDUAL_COLUMN], lags=lags, out_path=residuals_file
            ),
        ),
    ]
    return [p for p in plots if p is not None]


def main() -> None:
    """Generate every plot available from the saved artifacts."""
    generate_pre_modeling_plots(load_price_table(CLEANED_PRICE_FILE))
    if Path(ROLLING_PREDICTIONS_ARIMA_FILE).exists():
        generate_performance_plots(load_results_table(ROLLING_PREDICTIONS_ARIMA_FILE))
    else:
        logger.info(
            "No rolling predictions at %s; skipping forecast plots", ROLLING_PREDICTIONS_ARIMA_FILE
        )


if __name__ == "__main__":
    main()
