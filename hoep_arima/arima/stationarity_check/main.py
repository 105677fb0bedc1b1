"""CLI entry point for the stationarity_check module."""

from __future__ import annotations

from pathlib import Path
import sys

# Ensure project root on path for direct execution
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hoep_arima.arima.stationarity_check.stationarity_check import (
    run_stationarity_pipeline,
    save_stationarity_report,
)
from hoep_arima.constants import (
    ACF_PACF_DEFAULT_LAGS,
    CLEANED_PRICE_FILE,
    PRICE_COLUMN,
    STATIONARITY_DEFAULT_ALPHA,
    STATIONARITY_REPORT_FILE,
)
from hoep_arima.utils import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Run ADF/KPSS and ACF/PACF on the cleaned HOEP series and save a JSON report."""
    try:
        report = run_stationarity_pipeline(
            data_file=CLEANED_PRICE_FILE,
            column=PRICE_COLUMN,
            alpha=STATIONARITY_DEFAULT_ALPHA,
            nlags=ACF_PACF_DEFAULT_LAGS,
        )
        save_stationarity_report(report, STATIONARITY_REPORT_FILE)
    except Exception as exc:  # surface early during CLI use
        logger.error("Stationarity check failed: %s", exc, exc_info=True)
        raise


if __name__ == "__main__":
    main()
