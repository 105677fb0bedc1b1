"""Pytest configuration and shared fixtures for the HOEP study tests."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable

# Set matplotlib to non-interactive backend for tests (no GUI required)
import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

_script_dir = Path(__file__).parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hoep_arima.arima.models import FittedArma
from hoep_arima.errors import ModelFitError

RAW_METADATA_LINES = (
    "\\Hourly Ontario Energy Price (HOEP) and Predispatch Prices",
    "\\Created at 2024-01-02 08:00:00",
    "\\For 2023",
)
RAW_HEADER = (
    "Date,Hour,HOEP,Hour 1 Predispatch,Hour 2 Predispatch,Hour 3 Predispatch,"
    "OR 10 Min Sync,OR 30 Min"
)


def _format_price(value: float) -> str:
    text = f"{value:,.2f}"
    return f'"{text}"' if "," in text else text


def write_raw_export(path: Path, rows: list[tuple[str, int, str, str, str, str]]) -> Path:
    """Write rows in the IESO layout: metadata lines, header, then data."""
    lines = list(RAW_METADATA_LINES) + [RAW_HEADER]
    for date, hour, hoep, pred1, pred2, pred3 in rows:
        lines.append(f"{date},{hour},{hoep},{pred1},{pred2},{pred3},0.00,0.00")
    path.write_text("\n".join(lines) + "\n")
    return path


def synthetic_rows(n_days: int = 10, seed: int = 7) -> list[tuple[str, int, str, str, str, str]]:
    """Hourly AR(1) prices around a daily profile with noisy predispatch columns."""
    rng = np.random.default_rng(seed)
    rows = []
    level = 0.0
    start = pd.Timestamp("2023-01-01")
    for day in range(n_days):
        date = (start + pd.Timedelta(days=day)).strftime("%Y-%m-%d")
        for hour in range(1, 25):
            level = 0.6 * level + rng.normal(0.0, 2.0)
            price = 30.0 + 5.0 * np.sin(2 * np.pi * hour / 24) + level
            preds = [price + rng.normal(0.0, 1.0 + k) for k in range(3)]
            rows.append((date, hour, _format_price(price), *(_format_price(p) for p in preds)))
    return rows


@pytest.fixture
def raw_export_factory(tmp_path: Path) -> Callable[..., Path]:
    """Build raw exports under ``tmp_path``."""

    def _factory(rows: list | None = None, name: str = "raw_export.csv") -> Path:
        return write_raw_export(tmp_path / name, rows if rows is not None else synthetic_rows())

    return _factory


@pytest.fixture
def raw_export_file(raw_export_factory: Callable[..., Path]) -> Path:
    """Ten days of hourly data with one duplicate hour, one empty cell and one spike."""
    rows = synthetic_rows()
    date, hour, _, pred1, pred2, pred3 = rows[50]
    rows[50] = (date, hour, _format_price(1000.0), pred1, pred2, pred3)
    date, hour, hoep, pred1, _, pred3 = rows[100]
    rows[100] = (date, hour, hoep, pred1, "", pred3)
    rows.insert(11, rows[10])
    return raw_export_factory(rows)


@pytest.fixture
def price_frame() -> pd.DataFrame:
    """Cleaned price table: 240 hourly rows with predispatch columns."""
    rng = np.random.default_rng(3)
    n = 240
    noise = rng.normal(0.0, 2.0, n)
    level = np.zeros(n)
    for t in range(1, n):
        level[t] = 0.6 * level[t - 1] + noise[t]
    hoep = 30.0 + level
    return pd.DataFrame(
        {
            "timestamp": pd.date_range("2023-01-01 01:00", periods=n, freq="h"),
            "hoep": hoep,
            "pred_h1": hoep + rng.normal(0.0, 1.0, n),
            "pred_h2": hoep + rng.normal(0.0, 2.0, n),
            "pred_h3": hoep + rng.normal(0.0, 3.0, n),
        }
    )


class _LastValueResults:
    """Stand-in for statsmodels results: repeats the last training value."""

    def __init__(self, last: float) -> None:
        self.last = last

    def forecast(self, steps: int) -> np.ndarray:
        return np.full(steps, self.last)


class RecordingSelector:
    """Naive selector that records every training window it receives."""

    def __init__(self, fail_at_train_size: int | None = None) -> None:
        self.windows: list[np.ndarray] = []
        self.fail_at_train_size = fail_at_train_size

    def __repr__(self) -> str:
        return "RecordingSelector()"

    def select_and_fit(self, training_window: np.ndarray) -> FittedArma:
        window = np.asarray(training_window, dtype=float)
        self.windows.append(window.copy())
        if window.size == self.fail_at_train_size:
            raise ModelFitError("no candidate fits", train_size=int(window.size))
        return FittedArma(
            order=(0, 0, 0),
            trend="n",
            criterion="aic",
            criterion_value=0.0,
            n_obs=int(window.size),
            results=_LastValueResults(float(window[-1])),
        )


@pytest.fixture
def recording_selector() -> RecordingSelector:
    """Selector forecasting the last training value and recording its windows."""
    return RecordingSelector()


@pytest.fixture
def selector_factory() -> Callable[..., RecordingSelector]:
    """Build recording selectors, optionally failing on one training size."""
    return RecordingSelector
