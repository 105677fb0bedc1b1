"""ARMA model fitting and order selection."""

from __future__ import annotations

from .arma_model import (
    ArmaConstraints,
    FittedArma,
    GridSearchSelector,
    OrderSelector,
    check_training_window,
    fit_arma_model,
)

__all__ = [
    "ArmaConstraints",
    "FittedArma",
    "GridSearchSelector",
    "OrderSelector",
    "check_training_window",
    "fit_arma_model",
]
