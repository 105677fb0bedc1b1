"""Statsmodels utilities for ARMA fitting.

Provides utilities for managing statsmodels-specific concerns such as warning
suppression during repeated model fitting.
"""

from __future__ import annotations

import warnings

__all__ = ["suppress_statsmodels_warnings"]


def suppress_statsmodels_warnings() -> None:
    """Suppress common statsmodels warnings for ARMA models.

    The rolling forecast fits hundreds of candidate models; statsmodels emits
    index, frequency and convergence warnings for many of them. Fit failures
    are still raised as exceptions and handled by the caller.

    Warning categories suppressed:
        - UserWarning from statsmodels module
        - No supported index available warnings
        - Date index / frequency information warnings
        - Non-invertible or non-stationary starting parameters
        - Maximum likelihood convergence warnings

    Examples:
        >>> suppress_statsmodels_warnings()
        >>> model = SARIMAX(data, order=(1, 0, 1))
        >>> results = model.fit(disp=False)
    """
    warnings.filterwarnings("ignore", category=UserWarning, module="statsmodels")
    warnings.filterwarnings("ignore", message=".*No supported index is available.*")
    warnings.filterwarnings("ignore", message=".*date index has been provided.*")
    warnings.filterwarnings("ignore", message=".*frequency information.*")
    warnings.filterwarnings("ignore", message=".*Non-invertible starting MA parameters.*")
    warnings.filterwarnings("ignore", message=".*Non-stationary starting autoregressive.*")
    warnings.filterwarnings(
        "ignore", message=".*Maximum Likelihood optimization failed to converge.*"
    )
