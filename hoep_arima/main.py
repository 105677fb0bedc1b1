"""Pipeline entry point: runs every stage of the HOEP study in order.

1. Data cleaning (load → integrity fixes → outlier filter)
2. Stationarity diagnostics (ADF + KPSS, ACF/PACF)
3. Pre-modeling plots
4. Rolling ARMA forecast → accuracy evaluation
5. Report tables
6. Forecast plots

Plot stages are non-critical: a failing plot is logged as a warning. Any
other failure is logged with the stage name and re-raised.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
import sys
from typing import Any, Callable, TypeVar

# Add project root to Python path for direct execution
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hoep_arima import path as P
from hoep_arima.arima.data_visualisation.main import (
    generate_performance_plots,
    generate_pre_modeling_plots,
)
from hoep_arima.arima.evaluation_arima import AccuracySummary, save_evaluation_results
from hoep_arima.arima.evaluation_arima.main import run_forecast_evaluation
from hoep_arima.arima.models import OrderSelector
from hoep_arima.arima.stationarity_check import evaluate_stationarity, save_stationarity_report
from hoep_arima.config_logging import setup_logging
from hoep_arima.constants import (
    ACF_PACF_DEFAULT_LAGS,
    EVALUATION_WINDOW_HOURS,
    FORECAST_HORIZON,
    LJUNG_BOX_LAGS,
    OUTLIER_SIGMA_THRESHOLD,
    PRICE_COLUMN,
    STATIONARITY_DEFAULT_ALPHA,
    TIMESTAMP_COLUMN,
)
from hoep_arima.data_cleaning import clean_price_observations
from hoep_arima.reporting import save_report_tables
from hoep_arima.utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ArtifactPaths:
    """Where each pipeline artifact is written."""

    cleaned_prices: Path = P.CLEANED_PRICE_FILE
    stationarity_report: Path = P.STATIONARITY_REPORT_FILE
    descriptive_moments: Path = P.DESCRIPTIVE_MOMENTS_FILE
    rolling_predictions: Path = P.ROLLING_PREDICTIONS_ARIMA_FILE
    accuracy_summary: Path = P.ACCURACY_SUMMARY_FILE
    accuracy_metrics: Path = P.ACCURACY_METRICS_TABLE_FILE
    moments_comparison: Path = P.MOMENTS_COMPARISON_TABLE_FILE
    price_series_plot: Path = P.PRICE_SERIES_PLOT
    price_distribution_plot: Path = P.PRICE_DISTRIBUTION_PLOT
    price_acf_pacf_plot: Path = P.PRICE_ACF_PACF_PLOT
    predictions_vs_actual_plot: Path = P.PREDICTIONS_VS_ACTUAL_ARIMA_PLOT
    residuals_ljungbox_plot: Path = P.ARIMA_RESIDUALS_LJUNGBOX_PLOT

    @classmethod
    def under(cls, root: Path | str) -> ArtifactPaths:
        """Same layout as the defaults, rooted at ``root`` instead of the project."""
        root = Path(root)
        defaults = cls()
        return cls(
            **{
                f.name: root / getattr(defaults, f.name).relative_to(P.PROJECT_ROOT)
                for f in fields(cls)
            }
        )


@dataclass(frozen=True)
class AnalysisResult:
    """In-memory outputs of a full pipeline run."""

    n_observations: int
    outliers_removed: int
    stationary: bool
    summary: AccuracySummary
    artifacts: dict[str, Any]


def _run_stage(name: str, fn: Callable[[], T]) -> T:
    """Run a critical stage; log its name on failure and re-raise."""
    logger.info("=" * 80)
    logger.info("STAGE: %s", name)
    logger.info("=" * 80)
    try:
        return fn()
    except Exception:
        logger.error("✗ Pipeline failed at stage '%s'", name, exc_info=True)
        raise


def _run_plot_stage(name: str, fn: Callable[[], list[Path]]) -> list[Path]:
    """Run a plot stage; failures are non-critical and only logged."""
    logger.info("STAGE: %s", name)
    try:
        return fn()
    except (ValueError, KeyError, OSError) as ex:
        logger.warning("⚠ %s failed (non-critical): %s", name, ex)
        return []


def run_analysis(
    data_file: Path | str = P.RAW_PRICE_FILE,
    *,
    paths: ArtifactPaths | None = None,
    window: int = EVALUATION_WINDOW_HOURS,
    horizon: int = FORECAST_HORIZON,
    n_sigma: float = OUTLIER_SIGMA_THRESHOLD,
    lags: int = LJUNG_BOX_LAGS,
    selector: OrderSelector | None = None,
    n_jobs: int | None = 1,
    make_plots: bool = True,
) -> AnalysisResult:
    """Run the whole study on one raw IESO export.

    Args:
        data_file: Raw HOEP/predispatch CSV.
        paths: Artifact locations; defaults to the project layout.
        window: Evaluation window length.
        horizon: Forecast horizon of each fitted model.
        n_sigma: Outlier threshold in standard deviations.
        lags: Portmanteau test lag.
        selector: ARMA order selector; defaults to the exhaustive grid search.
        n_jobs: Worker processes for the rolling forecast.
        make_plots: Whether to render the PNG plots.

    Returns:
        AnalysisResult.

    Raises:
        DataFormatError, InsufficientDataError, ModelFitError, LengthMismatchError:
            From the failing stage, after it has been logged.
    """
    paths = paths if paths is not None else ArtifactPaths()

    logger.info("=" * 80)
    logger.info("HOEP ARMA STUDY - COMPLETE PIPELINE")
    logger.info("=" * 80)

    frame, cleaning = _run_stage(
        "data_cleaning",
        lambda: clean_price_observations(
            data_file, n_sigma=n_sigma, output_file=paths.cleaned_prices
        ),
    )
    prices = frame.set_index(TIMESTAMP_COLUMN)[PRICE_COLUMN]

    def _stationarity():
        report = evaluate_stationarity(
            prices, alpha=STATIONARITY_DEFAULT_ALPHA, nlags=ACF_PACF_DEFAULT_LAGS
        )
        save_stationarity_report(report, paths.stationarity_report)
        return report

    stationarity = _run_stage("stationarity_check", _stationarity)
    logger.info("HOEP stationary=%s (alpha=%.2f)", stationarity.stationary, stationarity.alpha)

    plots: list[Path] = []
    if make_plots:
        plots += _run_plot_stage(
            "pre_modeling_plots",
            lambda: generate_pre_modeling_plots(
                frame,
                series_file=paths.price_series_plot,
                distribution_file=paths.price_distribution_plot,
                acf_pacf_file=paths.price_acf_pacf_plot,
            ),
        )

    def _evaluation():
        table, summary = run_forecast_evaluation(
            frame, window=window, horizon=horizon, selector=selector, n_jobs=n_jobs, lags=lags
        )
        save_evaluation_results(
            table, summary, paths.rolling_predictions, paths.accuracy_summary
        )
        return table, summary

    table, summary = _run_stage("rolling_forecast_evaluation", _evaluation)

    tables = _run_stage(
        "report_tables",
        lambda: save_report_tables(
            frame,
            summary,
            moments_file=paths.descriptive_moments,
            accuracy_file=paths.accuracy_metrics,
            comparison_file=paths.moments_comparison,
        ),
    )

    if make_plots:
        plots += _run_plot_stage(
            "forecast_plots",
            lambda: generate_performance_plots(
                table,
                lags=lags,
                forecasts_file=paths.predictions_vs_actual_plot,
                residuals_file=paths.residuals_ljungbox_plot,
            ),
        )

    logger.info("=" * 80)
    logger.info("✓✓✓ PIPELINE COMPLETED SUCCESSFULLY ✓✓✓")
    logger.info("=" * 80)

    return AnalysisResult(
        n_observations=len(frame),
        outliers_removed=cleaning.outliers_removed,
        stationary=stationarity.stationary,
        summary=summary,
        artifacts={
            "cleaned_prices": paths.cleaned_prices,
            "stationarity_report": paths.stationarity_report,
            "rolling_predictions": paths.rolling_predictions,
            "accuracy_summary": paths.accuracy_summary,
            "tables": tables,
            "plots": plots,
        },
    )


def main() -> None:
    """Run the pipeline with the project defaults."""
    setup_logging()
    try:
        run_analysis()
    except KeyboardInterrupt:
        logger.error("✗✗✗ PIPELINE INTERRUPTED BY USER ✗✗✗")
        sys.exit(130)  # Standard exit code for SIGINT


if __name__ == "__main__":
    main()
