"""Unit tests for utils.metrics."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# Add project root to Python path for direct execution
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hoep_arima.utils.metrics import (
    compute_residuals,
    compute_sample_moments,
    euclidean_distance,
)


class TestComputeResiduals:
    """Tests for compute_residuals."""

    def test_residuals_are_actual_minus_forecast(self) -> None:
        """Residuals follow the actual - forecast convention."""
        res = compute_residuals([10.0, 12.0, 11.0], pd.Series([9.0, 12.5, 11.0]))
        np.testing.assert_allclose(res, [1.0, -0.5, 0.0])


class TestComputeSampleMoments:
    """Tests for compute_sample_moments."""

    def test_symmetric_sample(self) -> None:
        """Unbiased variance, zero skew and raw kurtosis of 1..4."""
        moments = compute_sample_moments([1.0, 2.0, 3.0, 4.0])

        assert moments["mean"] == pytest.approx(2.5)
        assert moments["variance"] == pytest.approx(5.0 / 3.0)
        assert moments["skewness"] == pytest.approx(0.0, abs=1e-12)
        # m4 / m2**2 = 2.5625 / 1.5625
        assert moments["kurtosis"] == pytest.approx(1.64)

    def test_right_skewed_sample(self) -> None:
        """A long right tail gives positive skewness."""
        moments = compute_sample_moments([1.0, 2.0, 2.0, 3.0, 20.0])
        assert moments["skewness"] > 0

    def test_gaussian_kurtosis_is_near_three(self) -> None:
        """Kurtosis is reported on the raw (non-excess) scale."""
        rng = np.random.default_rng(0)
        moments = compute_sample_moments(rng.normal(size=20_000))
        assert moments["kurtosis"] == pytest.approx(3.0, abs=0.15)

    def test_non_finite_values_are_ignored(self) -> None:
        """NaN and inf do not contaminate the moments."""
        moments = compute_sample_moments([1.0, np.nan, 3.0, np.inf])
        assert moments["mean"] == pytest.approx(2.0)
        assert moments["variance"] == pytest.approx(2.0)

    def test_empty_input_returns_nan(self) -> None:
        """No finite value means every moment is NaN."""
        moments = compute_sample_moments([])
        assert all(np.isnan(v) for v in moments.values())

    def test_single_value_has_nan_variance(self) -> None:
        """Unbiased variance needs at least two observations."""
        moments = compute_sample_moments([5.0])
        assert moments["mean"] == 5.0
        assert np.isnan(moments["variance"])


class TestEuclideanDistance:
    """Tests for euclidean_distance."""

    def test_distance(self) -> None:
        """3-4-5 triangle."""
        assert euclidean_distance([0.0, 0.0], [3.0, 4.0]) == pytest.approx(5.0)

    def test_distance_to_itself_is_zero(self) -> None:
        """Identical vectors are at distance zero."""
        values = np.array([1.5, 2.5, -3.0])
        assert euclidean_distance(values, values) == 0.0
