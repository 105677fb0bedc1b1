"""Expanding-window rolling ARMA forecasts over a trailing evaluation window.

For a series of length ``N`` and an evaluation window ``H``, step ``k``
(``k = 0 .. H-1``) fits a freshly selected model on ``series[0 : N-H+k]``,
forecasts ``horizon`` values and keeps only the first one. Each step owns a
private copy of its training prefix, so steps are independent and may run in
a process pool; results are always ordered by step.
"""

from __future__ import annotations

from concurrent.futures import Future, ProcessPoolExecutor
from dataclasses import dataclass
from multiprocessing import cpu_count
from typing import Any, Sequence

import numpy as np
import pandas as pd

from hoep_arima.arima.models import FittedArma, GridSearchSelector, OrderSelector
from hoep_arima.constants import (
    ARMA_MODEL_NAME,
    EVALUATION_WINDOW_HOURS,
    FORECAST_HORIZON,
    ROLLING_FORECAST_PROGRESS_INTERVAL,
    TIMESTAMP_COLUMN,
)
from hoep_arima.errors import HoepArimaError, InsufficientDataError, ModelFitError
from hoep_arima.utils import get_logger, suppress_statsmodels_warnings

logger = get_logger(__name__)


@dataclass(frozen=True)
class StepForecast:
    """One-step-ahead forecast produced by a single rolling step."""

    step: int
    train_size: int
    value: float
    order: tuple[int, int, int]
    trend: str


@dataclass(frozen=True)
class RollingForecastResult:
    """Ordered one-step-ahead forecasts for the evaluation window.

    ``forecasts[k]`` targets the observation labelled ``index[k]`` and was
    produced by a model fitted on the first ``train_sizes[k]`` observations.
    """

    forecasts: tuple[float, ...]
    index: tuple[Any, ...]
    train_sizes: tuple[int, ...]
    orders: tuple[tuple[int, int, int], ...]
    trends: tuple[str, ...]
    window: int
    horizon: int

    def __len__(self) -> int:
        return len(self.forecasts)

    def to_series(self, name: str = ARMA_MODEL_NAME) -> pd.Series:
        """Forecasts as a Series indexed by the target labels."""
        return pd.Series(list(self.forecasts), index=list(self.index), name=name, dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """Per-step details: target label, forecast, train size and order."""
        return pd.DataFrame(
            {
                TIMESTAMP_COLUMN: list(self.index),
                ARMA_MODEL_NAME: list(self.forecasts),
                "train_size": list(self.train_sizes),
                "p": [o[0] for o in self.orders],
                "q": [o[2] for o in self.orders],
                "trend": list(self.trends),
            }
        )


def _forecast_step(
    selector: OrderSelector,
    training_window: np.ndarray,
    step: int,
    horizon: int,
) -> StepForecast:
    """Select, fit and forecast on one training prefix.

    Raises:
        ModelFitError: Tagged with the step index and training size.
    """
    suppress_statsmodels_warnings()
    train_size = int(training_window.size)
    try:
        fitted: FittedArma = selector.select_and_fit(training_window)
        path = fitted.forecast(horizon)
    except (HoepArimaError, RuntimeError, ValueError, np.linalg.LinAlgError) as exc:
        raise ModelFitError(
            f"Rolling forecast failed at step {step} (training window of {train_size} "
            f"observations): {exc}",
            step=step,
            train_size=train_size,
        ) from exc

    value = float(path[0])
    if not np.isfinite(value):
        raise ModelFitError(
            f"Rolling forecast failed at step {step} (training window of {train_size} "
            "observations): non-finite forecast",
            step=step,
            train_size=train_size,
        )
    return StepForecast(
        step=step, train_size=train_size, value=value, order=fitted.order, trend=fitted.trend
    )


def _validate_arguments(n_obs: int, window: int, horizon: int, n_jobs: int | None) -> None:
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if horizon < 1:
        raise ValueError(f"horizon must be >= 1, got {horizon}")
    if n_jobs is not None and n_jobs < 1:
        raise ValueError(f"n_jobs must be >= 1 or None, got {n_jobs}")
    if n_obs <= window:
        raise InsufficientDataError(
            f"Series has {n_obs} observation(s); the evaluation window of {window} "
            "requires strictly more"
        )


def _log_progress(done: int, total: int) -> None:
    if done % ROLLING_FORECAST_PROGRESS_INTERVAL == 0 or done == total:
        logger.info("Rolling forecast progress: %d/%d", done, total)


def _run_sequential(
    selector: OrderSelector, values: np.ndarray, window: int, horizon: int
) -> list[StepForecast]:
    n_obs = values.size
    steps: list[StepForecast] = []
    for step in range(window):
        train_size = n_obs - window + step
        steps.append(_forecast_step(selector, values[:train_size].copy(), step, horizon))
        _log_progress(step + 1, window)
    return steps


def _run_parallel(
    selector: OrderSelector, values: np.ndarray, window: int, horizon: int, n_jobs: int
) -> list[StepForecast]:
    n_obs = values.size
    steps: list[StepForecast] = []
    with ProcessPoolExecutor(max_workers=n_jobs) as executor:
        futures: list[Future[StepForecast]] = [
            executor.submit(
                _forecast_step, selector, values[: n_obs - window + step].copy(), step, horizon
            )
            for step in range(window)
        ]
        try:
            for done, future in enumerate(futures, 1):
                steps.append(future.result())
                _log_progress(done, window)
        except ModelFitError:
            for future in futures:
                future.cancel()
            raise
    return steps


def rolling_forecast(
    series: pd.Series | Sequence[float] | np.ndarray,
    window: int = EVALUATION_WINDOW_HOURS,
    horizon: int = FORECAST_HORIZON,
    selector: OrderSelector | None = None,
    n_jobs: int | None = 1,
) -> RollingForecastResult:
    """One-step-ahead expanding-window forecasts for the last ``window`` observations.

    Args:
        series: Ordered realized values (length ``N``). A Series' index labels
            are carried into the result; otherwise positions are used.
        window: Evaluation window ``H``; one forecast per trailing observation.
        horizon: Steps forecast by each fitted model; only the first is kept.
        selector: Order selector; defaults to :class:`GridSearchSelector`.
        n_jobs: Worker processes. 1 runs sequentially; None uses all CPUs but one.

    Returns:
        RollingForecastResult with ``window`` forecasts aligned 1:1 with the
        last ``window`` observations.

    Raises:
        InsufficientDataError: If ``N <= window``; nothing is fitted.
        ModelFitError: If any step fails; no partial result is returned.
        ValueError: If the series holds NaN/inf or an argument is invalid.
    """
    if isinstance(series, pd.Series):
        values = series.to_numpy(dtype=float, copy=True)
        labels = list(series.index)
    else:
        values = np.array(series, dtype=float, copy=True).reshape(-1)
        labels = list(range(values.size))

    _validate_arguments(values.size, window, horizon, n_jobs)
    if not np.all(np.isfinite(values)):
        raise ValueError("Series contains NaN or infinite values")

    selector = selector if selector is not None else GridSearchSelector()
    effective_n_jobs = n_jobs if n_jobs is not None else max(1, cpu_count() - 1)

    logger.info(
        "Rolling forecast: %d observations, window=%d, horizon=%d, selector=%r, n_jobs=%d",
        values.size,
        window,
        horizon,
        selector,
        effective_n_jobs,
    )
    try:
        if effective_n_jobs == 1:
            steps = _run_sequential(selector, values, window, horizon)
        else:
            steps = _run_parallel(selector, values, window, horizon, effective_n_jobs)
    except ModelFitError as exc:
        logger.error(
            "Rolling forecast aborted at step %s (train_size=%s)", exc.step, exc.train_size
        )
        raise

    return RollingForecastResult(
        forecasts=tuple(s.value for s in steps),
        index=tuple(labels[values.size - window :]),
        train_sizes=tuple(s.train_size for s in steps),
        orders=tuple(s.order for s in steps),
        trends=tuple(s.trend for s in steps),
        window=window,
        horizon=horizon,
    )
