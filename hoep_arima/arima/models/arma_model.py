"""ARMA model fitting and automatic order selection.

An order selector turns a training window into a fitted ARMA model. The
default :class:`GridSearchSelector` is an exhaustive (non-stepwise) search
over ``(p, 0, q)`` orders and trend terms that keeps the candidate with the
lowest information criterion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence
import warnings

import numpy as np
import pandas as pd
from statsmodels.tsa.arima.model import ARIMA
from statsmodels.tsa.statespace.sarimax import SARIMAX

from hoep_arima.constants import (
    ARMA_CONSTANT_TOLERANCE,
    ARMA_DEFAULT_CRITERION,
    ARMA_DEFAULT_FIT_METHOD,
    ARMA_FIT_METHODS,
    ARMA_MAX_ORDER,
    ARMA_MAX_P,
    ARMA_MAX_Q,
    ARMA_MIN_TRAIN_SIZE,
    ARMA_SELECTION_CRITERIA,
    ARMA_TREND_CANDIDATES,
)
from hoep_arima.errors import ModelFitError
from hoep_arima.utils import get_logger

logger = get_logger(__name__)

# Type alias for fitted statsmodels results (SARIMAXResults or ARIMAResults)
FittedARMAResults = Any

TrainingWindow = np.ndarray | pd.Series | Sequence[float]


@dataclass(frozen=True)
class ArmaConstraints:
    """Bounds of the order search.

    Attributes:
        max_p: Largest AR order tried.
        max_q: Largest MA order tried.
        max_order: Largest ``p + q`` tried.
        trends: Trend terms tried (``"c"`` constant mean, ``"n"`` none).
        criterion: ``"aic"`` or ``"bic"``; lower is better.
    """

    max_p: int = ARMA_MAX_P
    max_q: int = ARMA_MAX_Q
    max_order: int = ARMA_MAX_ORDER
    trends: tuple[str, ...] = ARMA_TREND_CANDIDATES
    criterion: str = ARMA_DEFAULT_CRITERION

    def __post_init__(self) -> None:
        if self.max_p < 0 or self.max_q < 0 or self.max_order < 0:
            raise ValueError(
                f"Order bounds must be non-negative, got max_p={self.max_p}, "
                f"max_q={self.max_q}, max_order={self.max_order}"
            )
        if not self.trends:
            raise ValueError("At least one trend candidate is required")
        invalid = [t for t in self.trends if t not in ("c", "n")]
        if invalid:
            raise ValueError(f"Unsupported trend(s) {invalid}; expected 'c' or 'n'")
        if self.criterion not in ARMA_SELECTION_CRITERIA:
            raise ValueError(
                f"criterion must be one of {ARMA_SELECTION_CRITERIA}, got {self.criterion!r}"
            )

    def candidates(self) -> list[tuple[int, int, str]]:
        """Enumerate ``(p, q, trend)`` candidates in search order."""
        return [
            (p, q, trend)
            for p in range(self.max_p + 1)
            for q in range(self.max_q + 1)
            if p + q <= self.max_order
            for trend in self.trends
        ]


@dataclass(frozen=True)
class FittedArma:
    """A model fitted on exactly one training window."""

    order: tuple[int, int, int]
    trend: str
    criterion: str
    criterion_value: float
    n_obs: int
    results: FittedARMAResults = field(repr=False, compare=False)

    def forecast(self, steps: int) -> np.ndarray:
        """Forecast ``steps`` values past the end of the training window."""
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")
        return np.asarray(self.results.forecast(steps=steps), dtype=float)


class OrderSelector(Protocol):
    """Capability to pick an ARMA order for a window and fit it."""

    def select_and_fit(self, training_window: TrainingWindow) -> FittedArma:
        """Return the selected model fitted on ``training_window``.

        Raises:
            ModelFitError: If no model can be fitted on the window.
        """
        ...


def _as_training_array(training_window: TrainingWindow) -> np.ndarray:
    """Copy the window into a float array, dropping any index."""
    return np.array(training_window, dtype=float, copy=True).reshape(-1)


def check_training_window(values: np.ndarray) -> None:
    """Reject windows no ARMA model can be fitted on.

    Raises:
        ModelFitError: If the window is too short, has non-finite values or
            is constant.
    """
    if values.size < ARMA_MIN_TRAIN_SIZE:
        raise ModelFitError(
            f"Training window has {values.size} observation(s); "
            f"at least {ARMA_MIN_TRAIN_SIZE} are required",
            train_size=int(values.size),
        )
    if not np.all(np.isfinite(values)):
        raise ModelFitError(
            "Training window contains NaN or infinite values", train_size=int(values.size)
        )
    if float(np.ptp(values)) <= ARMA_CONSTANT_TOLERANCE:
        raise ModelFitError(
            f"Training window is constant (value {values[0]:.6g})", train_size=int(values.size)
        )


def fit_arma_model(
    train_values: TrainingWindow,
    order: tuple[int, int, int],
    trend: str = "c",
    method: str = ARMA_DEFAULT_FIT_METHOD,
) -> FittedARMAResults:
    """Fit a single ARMA model.

    Args:
        train_values: Training observations (index ignored).
        order: ``(p, d, q)`` order; ``d`` is expected to be 0.
        trend: ``"c"`` for a constant mean, ``"n"`` for none.
        method: ``"statespace"`` fits SARIMAX by exact Gaussian likelihood;
            ``"innovations_mle"`` and ``"hannan_rissanen"`` use the
            corresponding ``statsmodels.tsa.arima.model.ARIMA`` estimators.

    Returns:
        Fitted statsmodels results exposing ``aic``, ``bic`` and ``forecast``.

    Raises:
        ValueError: If ``method`` is unknown.
        RuntimeError: If the estimator fails.
    """
    if method not in ARMA_FIT_METHODS:
        raise ValueError(f"method must be one of {ARMA_FIT_METHODS}, got {method!r}")

    endog = _as_training_array(train_values)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore")
        try:
            if method == "statespace":
                model = SARIMAX(
                    endog,
                    order=order,
                    trend=trend,
                    seasonal_order=(0, 0, 0, 0),
                )
                # Use disp=False to suppress L-BFGS-B optimization output
                return model.fit(disp=False)
            return ARIMA(endog, order=order, trend=trend).fit(method=method)
        except Exception as e:
            msg = f"Failed to fit ARMA{order} trend={trend!r} with {method}: {e}"
            raise RuntimeError(msg) from e


class GridSearchSelector:
    """Exhaustive information-criterion search over ARMA orders (``d = 0``).

    Candidates that fail to fit, or whose criterion is not finite, are
    skipped. Ties keep the earliest candidate in :meth:`ArmaConstraints.candidates`
    order.
    """

    def __init__(
        self,
        constraints: ArmaConstraints | None = None,
        method: str = ARMA_DEFAULT_FIT_METHOD,
    ) -> None:
        if method not in ARMA_FIT_METHODS:
            raise ValueError(f"method must be one of {ARMA_FIT_METHODS}, got {method!r}")
        self.constraints = constraints if constraints is not None else ArmaConstraints()
        self.method = method

    def __repr__(self) -> str:
        return f"GridSearchSelector(constraints={self.constraints!r}, method={self.method!r})"

    def _try_candidate(
        self, values: np.ndarray, p: int, q: int, trend: str
    ) -> tuple[float, FittedARMAResults] | None:
        n_params = p + q + (1 if trend == "c" else 0) + 1  # + innovation variance
        if n_params >= values.size:
            logger.debug(
                "Skipping ARMA(%d,0,%d) trend=%s: %d parameters for %d observations",
                p, q, trend, n_params, values.size,
            )
            return None
        try:
            results = fit_arma_model(values, (p, 0, q), trend=trend, method=self.method)
        except RuntimeError as e:
            logger.debug("Candidate ARMA(%d,0,%d) trend=%s failed: %s", p, q, trend, e)
            return None

        value = float(getattr(results, self.constraints.criterion, float("nan")))
        if not np.isfinite(value):
            logger.debug(
                "Candidate ARMA(%d,0,%d) trend=%s has non-finite %s",
                p, q, trend, self.constraints.criterion,
            )
            return None
        return value, results

    def select_and_fit(self, training_window: TrainingWindow) -> FittedArma:
        """Search every candidate on the window and return the best fit.

        Args:
            training_window: Ordered training observations.

        Returns:
            FittedArma for the candidate with the lowest criterion.

        Raises:
            ModelFitError: If the window is degenerate or no candidate fits.
        """
        values = _as_training_array(training_window)
        check_training_window(values)

        best: FittedArma | None = None
        candidates = self.constraints.candidates()
        for p, q, trend in candidates:
            outcome = self._try_candidate(values, p, q, trend)
            if outcome is None:
                continue
            value, results = outcome
            if best is None or value < best.criterion_value:
                best = FittedArma(
                    order=(p, 0, q),
                    trend=trend,
                    criterion=self.constraints.criterion,
                    criterion_value=value,
                    n_obs=int(values.size),
                    results=results,
                )

        if best is None:
            raise ModelFitError(
                f"No ARMA candidate out of {len(candidates)} could be fitted "
                f"on a window of {values.size} observations",
                train_size=int(values.size),
            )

        logger.debug(
            "Selected ARMA%s trend=%s on %d observations (%s=%.3f)",
            best.order,
            best.trend,
            best.n_obs,
            best.criterion,
            best.criterion_value,
        )
        return best
