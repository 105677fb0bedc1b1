"""Accuracy evaluation of rolling ARMA forecasts against IESO predispatch.

Exposed functions:
- build_results_table
- calculate_metrics
- ljung_box_on_residuals
- residual_stationarity
- evaluate_accuracy
- evaluate_results_table
- plot_residuals_acf_with_ljungbox
- save_evaluation_results
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import matplotlib

matplotlib.use("Agg")  # headless-safe
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error
from statsmodels.graphics.tsaplots import plot_acf
from statsmodels.stats.diagnostic import acorr_ljungbox

from hoep_arima.arima.rolling_forecast import RollingForecastResult
from hoep_arima.arima.stationarity_check import StationarityReport, evaluate_stationarity
from hoep_arima.constants import (
    ACCURACY_SUMMARY_FILE,
    ADF_MIN_OBSERVATIONS,
    ARIMA_RESIDUALS_LJUNGBOX_PLOT,
    ARMA_MODEL_NAME,
    EVAL_DPI,
    EVAL_FIGURE_SIZE,
    LJUNG_BOX_LAGS,
    PORTMANTEAU_MIN_OBSERVATIONS,
    PREDISPATCH_COLUMNS,
    PRICE_COLUMN,
    REALIZED_SERIES_NAME,
    RESULT_ACTUAL_COLUMN,
    RESULT_COMPETITOR_COLUMNS,
    RESULT_FORECAST_COLUMN,
    RESULT_RESIDUAL_COLUMN,
    RESULTS_TABLE_COLUMNS,
    ROLLING_PREDICTIONS_ARIMA_FILE,
    STATIONARITY_DEFAULT_ALPHA,
    TEXT_POSITION_X,
    TEXT_POSITION_Y,
    TIMESTAMP_COLUMN,
)
from hoep_arima.errors import LengthMismatchError
from hoep_arima.utils import (
    compute_residuals,
    compute_sample_moments,
    ensure_output_dir,
    euclidean_distance,
    format_dates_to_string,
    get_logger,
    save_csv,
    save_json_pretty,
    validate_finite,
    validate_required_columns,
    validate_same_length,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResidualDiagnostics:
    """Portmanteau and stationarity diagnostics of the forecast residuals."""

    lags: int
    ljung_box_stat: float
    ljung_box_pvalue: float
    box_pierce_stat: float
    box_pierce_pvalue: float
    stationarity: StationarityReport | None


@dataclass(frozen=True)
class AccuracySummary:
    """Outcome of comparing ARMA and competitor forecasts on one realized vector.

    ``metrics`` maps forecaster name to ``{"MSE", "RMSE", "MAE"}``; ``moments``
    maps series name (realized, ARMA and the 1-step competitor) to
    ``{"mean", "variance", "skewness", "kurtosis"}``; ``distances`` maps
    forecaster name to its Euclidean distance from the realized vector.
    """

    n: int
    residuals: tuple[float, ...]
    metrics: dict[str, dict[str, float]]
    diagnostics: ResidualDiagnostics
    moments: dict[str, dict[str, float]]
    distances: dict[str, float]
    one_step_competitor: str | None

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation."""
        payload = asdict(self)
        payload["residuals"] = list(self.residuals)
        return _nan_to_none(payload)


def _nan_to_none(value: Any) -> Any:
    """Replace NaN floats with None, recursively, so the result is strict JSON."""
    if isinstance(value, dict):
        return {k: _nan_to_none(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_nan_to_none(v) for v in value]
    if isinstance(value, float) and not np.isfinite(value):
        return None
    return value


def _as_array(x: Iterable[float] | pd.Series, name: str) -> np.ndarray:
    """Coerce to a 1-D float array."""
    if not isinstance(x, (np.ndarray, pd.Series, list, tuple)):
        x = list(x)
    arr = np.asarray(x, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")
    return arr


def calculate_metrics(y_true: Iterable[float], y_pred: Iterable[float]) -> dict[str, float]:
    """Compute standard regression metrics (MSE, RMSE, MAE)."""
    yt = _as_array(y_true, "y_true")
    yp = _as_array(y_pred, "y_pred")
    validate_same_length({"y_true": yt, "y_pred": yp}, context="metrics")
    validate_finite({"y_true": yt, "y_pred": yp}, context="metrics")

    mse = mean_squared_error(yt, yp)
    rmse = float(np.sqrt(mse))
    mae = mean_absolute_error(yt, yp)
    return {"MSE": float(mse), "RMSE": rmse, "MAE": float(mae)}


def _nan_portmanteau(lags: int, n: int) -> dict[str, Any]:
    nan = float("nan")
    return {
        "lags": [],
        "q_stat": [],
        "p_value": [],
        "bp_stat": [],
        "bp_pvalue": [],
        "reject_5pct": [],
        "n": n,
        "requested_lags": lags,
        "ljung_box_stat": nan,
        "ljung_box_pvalue": nan,
        "box_pierce_stat": nan,
        "box_pierce_pvalue": nan,
    }


def ljung_box_on_residuals(residuals: Iterable[float], lags: int) -> dict[str, Any]:
    """Run Ljung–Box and Box–Pierce tests on residuals for lags ``1..lags``.

    ``lags`` is capped at ``n - 1``. Residual vectors that are too short or
    have zero variance get NaN statistics and a logged warning.

    Returns:
        Dict with per-lag statistics (``q_stat``/``p_value`` for Ljung–Box,
        ``bp_stat``/``bp_pvalue`` for Box–Pierce) and the values at the last
        lag under ``ljung_box_*``/``box_pierce_*``.
    """
    if lags < 1:
        raise ValueError(f"lags must be >= 1, got {lags}")
    res = _as_array(residuals, "residuals")
    res = res[np.isfinite(res)]

    if res.size < PORTMANTEAU_MIN_OBSERVATIONS:
        logger.warning(
            "Portmanteau tests skipped: %d residual(s), at least %d required",
            res.size,
            PORTMANTEAU_MIN_OBSERVATIONS,
        )
        return _nan_portmanteau(lags, int(res.size))
    if float(np.var(res)) == 0.0:
        logger.warning("Portmanteau tests skipped: residuals have zero variance")
        return _nan_portmanteau(lags, int(res.size))

    effective = min(lags, res.size - 1)
    if effective < lags:
        logger.warning("Portmanteau lag capped from %d to %d (n=%d)", lags, effective, res.size)
    lags_list = list(range(1, effective + 1))
    lb = acorr_ljungbox(res, lags=lags_list, boxpierce=True, return_df=True)
    q_stat = lb["lb_stat"].values.tolist()
    p_value = lb["lb_pvalue"].values.tolist()
    bp_stat = lb["bp_stat"].values.tolist()
    bp_pvalue = lb["bp_pvalue"].values.tolist()
    return {
        "lags": lags_list,
        "q_stat": q_stat,
        "p_value": p_value,
        "bp_stat": bp_stat,
        "bp_pvalue": bp_pvalue,
        "reject_5pct": (lb["lb_pvalue"] < 0.05).values.tolist(),
        "n": int(res.size),
        "requested_lags": lags,
        "ljung_box_stat": float(q_stat[-1]),
        "ljung_box_pvalue": float(p_value[-1]),
        "box_pierce_stat": float(bp_stat[-1]),
        "box_pierce_pvalue": float(bp_pvalue[-1]),
    }


def residual_stationarity(
    residuals: Iterable[float], *, alpha: float = STATIONARITY_DEFAULT_ALPHA
) -> StationarityReport | None:
    """ADF + KPSS on residuals, or None (with a warning) when they are degenerate."""
    res = _as_array(residuals, "residuals")
    res = res[np.isfinite(res)]
    if res.size < ADF_MIN_OBSERVATIONS:
        logger.warning(
            "Residual stationarity tests skipped: %d residual(s), at least %d required",
            res.size,
            ADF_MIN_OBSERVATIONS,
        )
        return None
    if float(np.var(res)) == 0.0:
        logger.warning("Residual stationarity tests skipped: residuals have zero variance")
        return None
    try:
        return evaluate_stationarity(pd.Series(res), alpha=alpha)
    except (ValueError, np.linalg.LinAlgError) as e:
        logger.warning("Residual stationarity tests failed: %s. Continuing without them.", e)
        return None


def evaluate_accuracy(
    forecasts: Sequence[float] | np.ndarray | pd.Series,
    realized: Sequence[float] | np.ndarray | pd.Series,
    competitor_forecasts: Mapping[str, Sequence[float] | np.ndarray | pd.Series] | None = None,
    lags: int = LJUNG_BOX_LAGS,
) -> AccuracySummary:
    """Compare ARMA forecasts and competitor forecasts against realized values.

    Args:
        forecasts: ARMA one-step-ahead forecasts.
        realized: Realized values, aligned with ``forecasts``.
        competitor_forecasts: Ordered mapping of competitor name to forecasts
            (1-step, 2-step, 3-step); the first entry is the 1-step competitor.
        lags: Portmanteau test lag.

    Returns:
        AccuracySummary.

    Raises:
        LengthMismatchError: If any vector length differs; raised before any
            metric is computed.
        ValueError: If a competitor uses a reserved name or any vector holds
            NaN or infinity; also raised before any metric.
    """
    competitors = dict(competitor_forecasts or {})
    reserved = {ARMA_MODEL_NAME, REALIZED_SERIES_NAME} & set(competitors)
    if reserved:
        raise ValueError(f"Competitor name(s) {sorted(reserved)} are reserved")
    vectors = {ARMA_MODEL_NAME: forecasts, REALIZED_SERIES_NAME: realized, **competitors}
    n = validate_same_length(vectors, context="accuracy evaluation")
    validate_finite(vectors, context="accuracy evaluation")
    fc = _as_array(forecasts, ARMA_MODEL_NAME)
    actual = _as_array(realized, REALIZED_SERIES_NAME)
    comp_arrays = {name: _as_array(values, name) for name, values in competitors.items()}

    residuals = compute_residuals(actual, fc)

    metrics = {ARMA_MODEL_NAME: calculate_metrics(actual, fc)}
    for name, values in comp_arrays.items():
        metrics[name] = calculate_metrics(actual, values)

    lb = ljung_box_on_residuals(residuals, lags=lags)
    diagnostics = ResidualDiagnostics(
        lags=lags,
        ljung_box_stat=lb["ljung_box_stat"],
        ljung_box_pvalue=lb["ljung_box_pvalue"],
        box_pierce_stat=lb["box_pierce_stat"],
        box_pierce_pvalue=lb["box_pierce_pvalue"],
        stationarity=residual_stationarity(residuals),
    )

    one_step = next(iter(comp_arrays), None)
    moments = {
        REALIZED_SERIES_NAME: compute_sample_moments(actual),
        ARMA_MODEL_NAME: compute_sample_moments(fc),
    }
    distances = {ARMA_MODEL_NAME: euclidean_distance(actual, fc)}
    if one_step is not None:
        moments[one_step] = compute_sample_moments(comp_arrays[one_step])
        distances[one_step] = euclidean_distance(actual, comp_arrays[one_step])

    for name, m in metrics.items():
        logger.info("%s: MAE=%.4f RMSE=%.4f (n=%d)", name, m["MAE"], m["RMSE"], n)
    logger.info(
        "Residual Ljung–Box (lag=%d) p=%.4f, Box–Pierce p=%.4f",
        lags,
        diagnostics.ljung_box_pvalue,
        diagnostics.box_pierce_pvalue,
    )

    return AccuracySummary(
        n=n,
        residuals=tuple(float(r) for r in residuals),
        metrics=metrics,
        diagnostics=diagnostics,
        moments=moments,
        distances=distances,
        one_step_competitor=one_step,
    )


def build_results_table(
    frame: pd.DataFrame, forecast_result: RollingForecastResult
) -> pd.DataFrame:
    """Join forecasts with realized prices and predispatch forecasts by timestamp.

    Args:
        frame: Cleaned price table (``timestamp``, ``hoep``, ``pred_h1..3``).
        forecast_result: Rolling forecasts whose index labels are timestamps.

    Returns:
        DataFrame with columns ``timestamp, forecasted, actual, ieso_pred_h1,
        ieso_pred_h2, ieso_pred_h3, residual``, one row per forecast, in
        forecast order. ``residual = actual - forecasted``.

    Raises:
        KeyError: If ``frame`` lacks a required column.
        LengthMismatchError: If a forecast timestamp has no row in ``frame``.
    """
    validate_required_columns(
        frame, [TIMESTAMP_COLUMN, PRICE_COLUMN, *PREDISPATCH_COLUMNS], df_name="price table"
    )
    forecasts = pd.DataFrame(
        {
            TIMESTAMP_COLUMN: list(forecast_result.index),
            RESULT_FORECAST_COLUMN: list(forecast_result.forecasts),
        }
    )
    observed = frame.loc[:, [TIMESTAMP_COLUMN, PRICE_COLUMN, *PREDISPATCH_COLUMNS]].rename(
        columns={
            PRICE_COLUMN: RESULT_ACTUAL_COLUMN,
            **dict(zip(PREDISPATCH_COLUMNS, RESULT_COMPETITOR_COLUMNS)),
        }
    )
    table = forecasts.merge(
        observed, on=TIMESTAMP_COLUMN, how="left", validate="one_to_one", indicator=True
    )

    unmatched = table["_merge"] == "left_only"
    if unmatched.any():
        missing = table.loc[unmatched, TIMESTAMP_COLUMN].head(5).tolist()
        raise LengthMismatchError(
            f"{int(unmatched.sum())} forecast timestamp(s) have no realized row "
            f"(first: {missing})"
        )

    table[RESULT_RESIDUAL_COLUMN] = compute_residuals(
        table[RESULT_ACTUAL_COLUMN], table[RESULT_FORECAST_COLUMN]
    )
    return table.loc[:, list(RESULTS_TABLE_COLUMNS)]


def evaluate_results_table(table: pd.DataFrame, lags: int = LJUNG_BOX_LAGS) -> AccuracySummary:
    """Run :func:`evaluate_accuracy` on the columns of a results table."""
    validate_required_columns(table, RESULTS_TABLE_COLUMNS, df_name="results table")
    return evaluate_accuracy(
        table[RESULT_FORECAST_COLUMN],
        table[RESULT_ACTUAL_COLUMN],
        {name: table[name] for name in RESULT_COMPETITOR_COLUMNS},
        lags=lags,
    )


def plot_residuals_acf_with_ljungbox(
    residuals: Iterable[float],
    lags: int = LJUNG_BOX_LAGS,
    out_path: Path | None = None,
) -> Path:
    """Plot ACF of residuals and annotate Ljung–Box p-value."""
    res = _as_array(residuals, "residuals")
    res = res[np.isfinite(res)]
    if res.size < PORTMANTEAU_MIN_OBSERVATIONS:
        raise ValueError(f"Need at least {PORTMANTEAU_MIN_OBSERVATIONS} residuals to plot ACF")

    out_path = Path(out_path) if out_path is not None else Path(ARIMA_RESIDUALS_LJUNGBOX_PLOT)
    ensure_output_dir(out_path)

    plot_lags = min(lags, res.size - 1)
    fig = plt.figure(figsize=EVAL_FIGURE_SIZE)
    ax = fig.add_subplot(111)
    plot_acf(res, lags=plot_lags, ax=ax, zero=False)  # Exclude lag 0 (always 1.0)
    ax.set_title(f"Residuals ACF (lags={plot_lags})")

    lb = ljung_box_on_residuals(res, lags=lags)
    txt = f"Ljung–Box (lag={plot_lags}) p-value={lb['ljung_box_pvalue']:.4f}, n={lb['n']}"
    ax.text(TEXT_POSITION_X, TEXT_POSITION_Y, txt, transform=ax.transAxes, va="top")

    fig.tight_layout()
    fig.savefig(out_path, dpi=EVAL_DPI)
    plt.close(fig)
    logger.info(f"Saved residuals ACF + Ljung–Box: {out_path}")
    return out_path


def save_evaluation_results(
    table: pd.DataFrame,
    summary: AccuracySummary,
    predictions_file: Path | None = None,
    summary_file: Path | None = None,
) -> tuple[Path, Path]:
    """Persist the results table (CSV) and accuracy summary (JSON)."""
    preds_path = Path(predictions_file or ROLLING_PREDICTIONS_ARIMA_FILE)
    summary_path = Path(summary_file or ACCURACY_SUMMARY_FILE)

    out = table.copy()
    if pd.api.types.is_datetime64_any_dtype(out[TIMESTAMP_COLUMN]):
        out[TIMESTAMP_COLUMN] = format_dates_to_string(out[TIMESTAMP_COLUMN]).values
    save_csv(out, preds_path)
    save_json_pretty(summary.to_dict(), summary_path)

    logger.info(f"Saved predictions → {preds_path}")
    logger.info(f"Saved accuracy summary → {summary_path}")
    return preds_path, summary_path
