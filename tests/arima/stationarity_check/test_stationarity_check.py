"""Unit tests for arima.stationarity_check."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import patch

import numpy as np
import pandas as pd
import pytest

# Add project root to Python path for direct execution
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hoep_arima.arima.stationarity_check import (
    StationarityReport,
    adf_test,
    autocorrelation_summary,
    evaluate_stationarity,
    kpss_test,
    run_stationarity_pipeline,
    save_stationarity_report,
)
from hoep_arima.arima.stationarity_check.utils import load_series_from_csv


def _white_noise(n: int = 400, seed: int = 0) -> pd.Series:
    return pd.Series(np.random.default_rng(seed).normal(size=n))


def _trending_walk(n: int = 400, seed: int = 0) -> pd.Series:
    return pd.Series(np.cumsum(np.random.default_rng(seed).normal(0.5, 1.0, size=n)))


class TestIndividualTests:
    """Tests for adf_test and kpss_test."""

    def test_adf_result_shape(self) -> None:
        """ADF reports statistic, p-value, lags, nobs and critical values."""
        res = adf_test(_white_noise())
        assert set(res) == {"statistic", "p_value", "lags", "nobs", "critical_values"}
        assert res["p_value"] < 0.05
        assert set(res["critical_values"]) == {"1%", "5%", "10%"}

    def test_kpss_rejects_trend(self) -> None:
        """KPSS rejects level stationarity of a drifting walk."""
        res = kpss_test(_trending_walk())
        assert res["p_value"] < 0.05
        assert res["nobs"] == 400


class TestEvaluateStationarity:
    """Tests for evaluate_stationarity."""

    def test_drifting_walk_is_not_stationary(self) -> None:
        """A random walk with drift fails the combined rule."""
        report = evaluate_stationarity(_trending_walk())
        assert isinstance(report, StationarityReport)
        assert report.stationary is False
        assert report.autocorrelation is None

    def test_combined_rule(self) -> None:
        """Stationary requires ADF p < alpha and KPSS p > alpha."""
        base = {"lags": 1, "nobs": 100, "critical_values": None}
        adf_ok = {**base, "statistic": -5.0, "p_value": 0.001}
        kpss_ok = {**base, "statistic": 0.1, "p_value": 0.1}
        kpss_bad = {**kpss_ok, "p_value": 0.01}
        module = "hoep_arima.arima.stationarity_check.stationarity_check"
        with patch(f"{module}.adf_test", return_value=adf_ok), patch(
            f"{module}.kpss_test", return_value=kpss_ok
        ):
            assert evaluate_stationarity(_white_noise()).stationary is True
        with patch(f"{module}.adf_test", return_value=adf_ok), patch(
            f"{module}.kpss_test", return_value=kpss_bad
        ):
            assert evaluate_stationarity(_white_noise()).stationary is False

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1])
    def test_invalid_alpha(self, alpha: float) -> None:
        """alpha must lie strictly between 0 and 1."""
        with pytest.raises(ValueError, match="alpha"):
            evaluate_stationarity(_white_noise(), alpha=alpha)

    def test_with_autocorrelation(self) -> None:
        """nlags attaches an ACF/PACF summary."""
        report = evaluate_stationarity(_white_noise(), nlags=24)
        assert report.autocorrelation is not None
        assert report.autocorrelation["lags"] == list(range(1, 25))


class TestAutocorrelationSummary:
    """Tests for autocorrelation_summary."""

    def test_ar1_signature(self) -> None:
        """An AR(1) has a decaying ACF and a single PACF spike."""
        rng = np.random.default_rng(2)
        x = np.zeros(2000)
        for t in range(1, 2000):
            x[t] = 0.7 * x[t - 1] + rng.normal()
        summary = autocorrelation_summary(pd.Series(x), nlags=5)

        assert summary["acf"][0] == pytest.approx(0.7, abs=0.05)
        assert summary["acf"][1] == pytest.approx(0.49, abs=0.07)
        assert summary["pacf"][0] == pytest.approx(0.7, abs=0.05)
        assert abs(summary["pacf"][1]) < 0.1

    def test_lags_capped(self) -> None:
        """Lags are capped below half the sample size."""
        summary = autocorrelation_summary(_white_noise(n=30), nlags=48)
        assert summary["lags"][-1] == 14
        assert summary["nobs"] == 30

    def test_too_short(self) -> None:
        """Three observations cannot support a single PACF lag."""
        with pytest.raises(ValueError, match="too short"):
            autocorrelation_summary(pd.Series([1.0, 2.0, 3.0]), nlags=5)


class TestStationarityPipeline:
    """Tests for loading, running and saving."""

    def test_pipeline_and_report(self, price_frame: pd.DataFrame, tmp_path: Path) -> None:
        """The cleaned table is loaded, tested and saved as JSON."""
        data_file = tmp_path / "cleaned.csv"
        price_frame.to_csv(data_file, index=False)

        report = run_stationarity_pipeline(data_file=data_file, nlags=12)
        out = save_stationarity_report(report, tmp_path / "reports" / "stationarity.json")

        payload = json.loads(out.read_text())
        assert payload["stationary"] == report.stationary
        assert payload["alpha"] == 0.05
        assert len(payload["autocorrelation"]["acf"]) == 12

    def test_load_series_sorted(self, price_frame: pd.DataFrame, tmp_path: Path) -> None:
        """Rows are sorted by timestamp and indexed by it."""
        data_file = tmp_path / "shuffled.csv"
        price_frame.sample(frac=1.0, random_state=1).to_csv(data_file, index=False)

        series = load_series_from_csv(data_file=data_file, column="hoep")

        assert series.index.is_monotonic_increasing
        np.testing.assert_allclose(series.to_numpy(), price_frame["hoep"].to_numpy())

    def test_missing_column(self, price_frame: pd.DataFrame, tmp_path: Path) -> None:
        """Asking for an absent column is a KeyError."""
        data_file = tmp_path / "cleaned.csv"
        price_frame.to_csv(data_file, index=False)
        with pytest.raises(KeyError):
            load_series_from_csv(data_file=data_file, column="price")
