"""CLI entry point for the rolling ARMA forecast and its accuracy evaluation."""

from __future__ import annotations

from pathlib import Path
import sys

import pandas as pd

# Add project root to Python path for direct execution.
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hoep_arima.arima.data_visualisation.data_loading import load_price_table
from hoep_arima.arima.evaluation_arima.evaluation_arima import (
    AccuracySummary,
    build_results_table,
    evaluate_results_table,
    save_evaluation_results,
)
from hoep_arima.arima.models import OrderSelector
from hoep_arima.arima.rolling_forecast import rolling_forecast
from hoep_arima.constants import (
    CLEANED_PRICE_FILE,
    EVALUATION_WINDOW_HOURS,
    FORECAST_HORIZON,
    LJUNG_BOX_LAGS,
    PRICE_COLUMN,
    TIMESTAMP_COLUMN,
)
from hoep_arima.utils import get_logger

logger = get_logger(__name__)


def run_forecast_evaluation(
    frame: pd.DataFrame,
    *,
    window: int = EVALUATION_WINDOW_HOURS,
    horizon: int = FORECAST_HORIZON,
    selector: OrderSelector | None = None,
    n_jobs: int | None = 1,
    lags: int = LJUNG_BOX_LAGS,
) -> tuple[pd.DataFrame, AccuracySummary]:
    """Forecast the last ``window`` hours of ``frame`` and score them.

    Args:
        frame: Cleaned price table (``timestamp``, ``hoep``, ``pred_h1..3``).
        window: Evaluation window length.
        horizon: Forecast horizon of each fitted model.
        selector: Order selector passed to :func:`rolling_forecast`.
        n_jobs: Worker processes for the rolling steps.
        lags: Portmanteau lag for the residual diagnostics.

    Returns:
        Tuple of (results table, accuracy summary).
    """
    prices = frame.set_index(TIMESTAMP_COLUMN)[PRICE_COLUMN]
    result = rolling_forecast(
        prices, window=window, horizon=horizon, selector=selector, n_jobs=n_jobs
    )
    table = build_results_table(frame, result)
    summary = evaluate_results_table(table, lags=lags)
    return table, summary


def main() -> None:
    """Run the rolling forecast on the cleaned table and save its evaluation."""
    try:
        frame = load_price_table(CLEANED_PRICE_FILE)
        table, summary = run_forecast_evaluation(frame)
        save_evaluation_results(table, summary)
    except Exception as exc:  # surface early during CLI use
        logger.error("ARMA evaluation failed: %s", exc, exc_info=True)
        raise


if __name__ == "__main__":
    main()
