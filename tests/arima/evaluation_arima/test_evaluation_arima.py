"""Unit tests for arima.evaluation_arima."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np
import pandas as pd
import pytest

# Add project root to Python path for direct execution
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hoep_arima.arima.evaluation_arima import (
    AccuracySummary,
    build_results_table,
    calculate_metrics,
    evaluate_accuracy,
    evaluate_results_table,
    ljung_box_on_residuals,
    plot_residuals_acf_with_ljungbox,
    residual_stationarity,
    save_evaluation_results,
)
from hoep_arima.arima.evaluation_arima.main import run_forecast_evaluation
from hoep_arima.arima.rolling_forecast import RollingForecastResult
from hoep_arima.errors import LengthMismatchError


def _forecast_result(timestamps: list[pd.Timestamp], values: list[float]) -> RollingForecastResult:
    n = len(values)
    return RollingForecastResult(
        forecasts=tuple(values),
        index=tuple(timestamps),
        train_sizes=tuple(range(100, 100 + n)),
        orders=((1, 0, 0),) * n,
        trends=("c",) * n,
        window=n,
        horizon=3,
    )


class TestCalculateMetrics:
    """Tests for calculate_metrics."""

    def test_known_values(self) -> None:
        """MSE, RMSE and MAE on a hand-computed example."""
        metrics = calculate_metrics([1.0, 2.0, 3.0, 4.0], [2.0, 2.0, 1.0, 4.0])

        assert metrics["MSE"] == pytest.approx(1.25)
        assert metrics["RMSE"] == pytest.approx(np.sqrt(1.25))
        assert metrics["MAE"] == pytest.approx(0.75)

    def test_rmse_dominates_mae(self) -> None:
        """RMSE >= MAE >= 0 on arbitrary vectors."""
        rng = np.random.default_rng(0)
        for _ in range(20):
            y = rng.normal(size=50)
            yhat = y + rng.standard_t(df=3, size=50)
            metrics = calculate_metrics(y, yhat)
            assert metrics["RMSE"] >= metrics["MAE"] - 1e-12
            assert metrics["MAE"] >= 0

    def test_length_mismatch(self) -> None:
        """Vectors of different length are rejected."""
        with pytest.raises(LengthMismatchError):
            calculate_metrics([1.0, 2.0], [1.0])

    def test_non_finite_rejected(self) -> None:
        """A NaN pair is an error, not silently dropped."""
        with pytest.raises(ValueError, match="y_pred=1"):
            calculate_metrics([1.0, 50.0, 3.0], [1.0, np.nan, 3.0])


class TestLjungBox:
    """Tests for ljung_box_on_residuals."""

    def test_white_noise(self) -> None:
        """White noise does not reject at the last lag."""
        res = np.random.default_rng(1).normal(size=500)
        lb = ljung_box_on_residuals(res, lags=10)

        assert lb["lags"] == list(range(1, 11))
        assert len(lb["q_stat"]) == len(lb["bp_pvalue"]) == 10
        assert 0.0 <= lb["ljung_box_pvalue"] <= 1.0
        assert lb["ljung_box_pvalue"] > 0.01
        assert lb["ljung_box_stat"] >= lb["box_pierce_stat"]

    def test_lags_capped(self) -> None:
        """Lags above n - 1 are capped."""
        res = np.random.default_rng(2).normal(size=8)
        lb = ljung_box_on_residuals(res, lags=25)
        assert lb["lags"][-1] == 7
        assert lb["requested_lags"] == 25

    def test_autocorrelated_residuals_rejected(self) -> None:
        """A strongly autocorrelated vector rejects whiteness."""
        res = np.sin(np.linspace(0, 20 * np.pi, 400))
        lb = ljung_box_on_residuals(res, lags=5)
        assert lb["ljung_box_pvalue"] < 0.05
        assert all(lb["reject_5pct"])

    @pytest.mark.parametrize("residuals", [[0.0, 0.0, 0.0, 0.0], [1.0, 2.0]])
    def test_degenerate_residuals(self, residuals: list[float]) -> None:
        """Zero variance or too few residuals give NaN statistics."""
        lb = ljung_box_on_residuals(residuals, lags=25)
        assert np.isnan(lb["ljung_box_pvalue"])
        assert np.isnan(lb["box_pierce_stat"])
        assert lb["lags"] == []

    def test_invalid_lags(self) -> None:
        """At least one lag is required."""
        with pytest.raises(ValueError):
            ljung_box_on_residuals([1.0, 2.0, 3.0], lags=0)


class TestResidualStationarity:
    """Tests for residual_stationarity."""

    def test_short_residuals_skipped(self) -> None:
        """Too few residuals skip the tests."""
        assert residual_stationarity([1.0, -1.0, 0.5]) is None

    def test_zero_variance_skipped(self) -> None:
        """Constant residuals skip the tests."""
        assert residual_stationarity(np.zeros(100)) is None

    def test_white_noise_residuals(self) -> None:
        """White noise residuals reject a unit root."""
        report = residual_stationarity(np.random.default_rng(3).normal(size=300))
        assert report is not None
        assert report.adf["p_value"] < 0.05


class TestEvaluateAccuracy:
    """Tests for evaluate_accuracy."""

    def test_perfect_forecast(self) -> None:
        """Exact forecasts score zero and leave zero residuals."""
        summary = evaluate_accuracy([11.0, 13.0, 9.0], [11.0, 13.0, 9.0])

        assert summary.n == 3
        assert summary.metrics["arma"]["MAE"] == 0.0
        assert summary.metrics["arma"]["RMSE"] == 0.0
        assert summary.residuals == (0.0, 0.0, 0.0)
        assert np.isnan(summary.diagnostics.ljung_box_pvalue)
        assert summary.diagnostics.stationarity is None
        assert summary.distances["arma"] == 0.0
        assert summary.one_step_competitor is None

    @patch("hoep_arima.arima.evaluation_arima.evaluation_arima.calculate_metrics")
    def test_mismatched_competitor_rejected_before_metrics(self, mock_metrics: MagicMock) -> None:
        """A competitor of the wrong length fails before anything is scored."""
        with pytest.raises(LengthMismatchError, match="ieso_pred_h1=2"):
            evaluate_accuracy(
                [10.0, 12.0, 11.0],
                [10.0, 12.0, 11.0],
                {"ieso_pred_h1": [10.0, 12.0]},
            )
        mock_metrics.assert_not_called()

    def test_competitors_scored_in_order(self) -> None:
        """Every competitor gets metrics; only the first gets moments and distance."""
        rng = np.random.default_rng(5)
        actual = rng.normal(30.0, 3.0, 60)
        competitors = {
            "ieso_pred_h1": actual + 1.0,
            "ieso_pred_h2": actual + 2.0,
            "ieso_pred_h3": actual - 3.0,
        }

        noise = rng.normal(0.0, 1.0, 60)

        summary = evaluate_accuracy(actual + noise, actual, competitors, lags=5)

        assert list(summary.metrics) == ["arma", "ieso_pred_h1", "ieso_pred_h2", "ieso_pred_h3"]
        assert summary.metrics["ieso_pred_h2"]["MAE"] == pytest.approx(2.0)
        assert summary.metrics["ieso_pred_h3"]["RMSE"] == pytest.approx(3.0)
        assert summary.one_step_competitor == "ieso_pred_h1"
        assert set(summary.moments) == {"realized", "arma", "ieso_pred_h1"}
        assert summary.distances["ieso_pred_h1"] == pytest.approx(np.sqrt(60.0))
        assert summary.distances["arma"] == pytest.approx(np.sqrt(np.sum(noise**2)))
        assert summary.moments["arma"]["mean"] == pytest.approx((actual + noise).mean())
        np.testing.assert_allclose(summary.residuals, -noise, atol=1e-9)

    def test_to_dict_is_json_serializable(self) -> None:
        """The summary can be written as JSON."""
        summary = evaluate_accuracy([1.0, 2.0, 3.0], [1.5, 2.0, 2.5], {"ieso_pred_h1": [1, 2, 3]})
        payload = json.loads(json.dumps(summary.to_dict()))
        assert payload["n"] == 3
        assert payload["residuals"] == [0.5, 0.0, -0.5]

    def test_degenerate_diagnostics_serialize_as_null(self) -> None:
        """NaN diagnostics become null, so the JSON is strict."""
        summary = evaluate_accuracy([11.0, 13.0, 9.0], [11.0, 13.0, 9.0])
        text = json.dumps(summary.to_dict(), allow_nan=False)

        def _reject(token: str) -> None:
            raise ValueError(f"non-standard JSON constant {token}")

        payload = json.loads(text, parse_constant=_reject)
        assert payload["diagnostics"]["ljung_box_pvalue"] is None
        assert payload["diagnostics"]["stationarity"] is None
        assert payload["metrics"]["arma"]["MAE"] == 0.0

    @pytest.mark.parametrize("bad", [np.nan, np.inf])
    @patch("hoep_arima.arima.evaluation_arima.evaluation_arima.calculate_metrics")
    def test_non_finite_forecast_rejected_before_metrics(
        self, mock_metrics: MagicMock, bad: float
    ) -> None:
        """A non-finite ARMA forecast fails before any forecaster is scored."""
        with pytest.raises(ValueError, match="arma=1"):
            evaluate_accuracy([1.0, bad, 3.0], [1.0, 50.0, 3.0], {"h1": [1.0, 2.0, 3.0]}, lags=1)
        mock_metrics.assert_not_called()

    @pytest.mark.parametrize("vectors", [
        ([1.0, 2.0, 3.0], [1.0, np.nan, 3.0], {"h1": [1.0, 2.0, 3.0]}),
        ([1.0, 2.0, 3.0], [1.0, 2.0, 3.0], {"h1": [1.0, np.nan, 3.0]}),
    ])
    def test_non_finite_realized_or_competitor_rejected(self, vectors: tuple) -> None:
        """NaN in the realized vector or a competitor is rejected too."""
        forecasts, realized, competitors = vectors
        with pytest.raises(ValueError, match="Non-finite"):
            evaluate_accuracy(forecasts, realized, competitors, lags=1)

    @pytest.mark.parametrize("name", ["arma", "realized"])
    def test_reserved_competitor_name_rejected(self, name: str) -> None:
        """A competitor cannot shadow the ARMA or realized vector."""
        with pytest.raises(ValueError, match="reserved"):
            evaluate_accuracy([1.0, 2.0, 3.0], [1.0, 2.0, 3.0], {name: [9.0, 9.0]})


class TestBuildResultsTable:
    """Tests for build_results_table."""

    def test_join_by_timestamp(self, price_frame: pd.DataFrame) -> None:
        """Rows are matched on timestamp even when the frame is shuffled."""
        targets = list(price_frame["timestamp"].iloc[-3:])
        result = _forecast_result(targets, [30.0, 31.0, 32.0])
        shuffled = price_frame.sample(frac=1.0, random_state=0)

        table = build_results_table(shuffled, result)

        assert list(table.columns) == [
            "timestamp",
            "forecasted",
            "actual",
            "ieso_pred_h1",
            "ieso_pred_h2",
            "ieso_pred_h3",
            "residual",
        ]
        assert table["timestamp"].tolist() == targets
        np.testing.assert_allclose(table["actual"], price_frame["hoep"].iloc[-3:])
        np.testing.assert_allclose(table["ieso_pred_h2"], price_frame["pred_h2"].iloc[-3:])
        np.testing.assert_allclose(table["residual"], table["actual"] - table["forecasted"])

    def test_missing_timestamp(self, price_frame: pd.DataFrame) -> None:
        """A forecast without a realized row is a length mismatch."""
        result = _forecast_result([pd.Timestamp("2030-01-01 01:00")], [30.0])
        with pytest.raises(LengthMismatchError, match="no realized row"):
            build_results_table(price_frame, result)

    def test_missing_column(self, price_frame: pd.DataFrame) -> None:
        """The price table must carry the predispatch columns."""
        result = _forecast_result(list(price_frame["timestamp"].iloc[-1:]), [30.0])
        with pytest.raises(KeyError):
            build_results_table(price_frame.drop(columns=["pred_h3"]), result)


class TestRunForecastEvaluation:
    """Tests for run_forecast_evaluation."""

    def test_end_to_end_with_recording_selector(
        self, price_frame: pd.DataFrame, recording_selector
    ) -> None:
        """Forecasts, table and summary line up on the evaluation window."""
        table, summary = run_forecast_evaluation(
            price_frame, window=24, selector=recording_selector, lags=5
        )

        assert len(table) == summary.n == 24
        assert table["timestamp"].tolist() == price_frame["timestamp"].iloc[-24:].tolist()
        # Naive forecast: the previous realized price
        np.testing.assert_allclose(
            table["forecasted"], price_frame["hoep"].iloc[-25:-1].to_numpy()
        )
        assert list(summary.metrics) == ["arma", "ieso_pred_h1", "ieso_pred_h2", "ieso_pred_h3"]

    def test_evaluate_results_table(self, price_frame: pd.DataFrame) -> None:
        """Scoring a saved table gives the same summary shape."""
        targets = list(price_frame["timestamp"].iloc[-30:])
        table = build_results_table(price_frame, _forecast_result(targets, [30.0] * 30))

        summary = evaluate_results_table(table, lags=5)

        assert isinstance(summary, AccuracySummary)
        assert summary.n == 30
        assert summary.diagnostics.lags == 5


class TestPersistence:
    """Tests for saving and plotting."""

    def test_save_evaluation_results(self, price_frame: pd.DataFrame, tmp_path: Path) -> None:
        """The table is saved as CSV and the summary as JSON."""
        targets = list(price_frame["timestamp"].iloc[-10:])
        table = build_results_table(price_frame, _forecast_result(targets, [30.0] * 10))
        summary = evaluate_results_table(table, lags=3)

        preds_path, summary_path = save_evaluation_results(
            table, summary, tmp_path / "preds.csv", tmp_path / "summary.json"
        )

        saved = pd.read_csv(preds_path)
        assert len(saved) == 10
        assert saved["timestamp"].iloc[0] == targets[0].strftime("%Y-%m-%d %H:%M")
        payload = json.loads(summary_path.read_text())
        assert payload["metrics"]["arma"]["MAE"] == pytest.approx(summary.metrics["arma"]["MAE"])

    def test_plot_residuals(self, tmp_path: Path) -> None:
        """The residual ACF plot is written."""
        res = np.random.default_rng(6).normal(size=50)
        out = plot_residuals_acf_with_ljungbox(res, lags=10, out_path=tmp_path / "acf.png")
        assert out.exists()

    def test_plot_residuals_too_short(self, tmp_path: Path) -> None:
        """Fewer than three residuals cannot be plotted."""
        with pytest.raises(ValueError):
            plot_residuals_acf_with_ljungbox([1.0, 2.0], out_path=tmp_path / "acf.png")
