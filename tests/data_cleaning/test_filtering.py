"""Unit tests for data_cleaning.filtering (iterated sigma clip)."""

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

from hoep_arima.data_cleaning.filtering import (
    filter_price_outliers,
    outlier_mask,
    remove_outliers,
)


def _spiky_series(seed: int = 11) -> pd.Series:
    rng = np.random.default_rng(seed)
    values = rng.normal(30.0, 5.0, 500)
    values[[10, 200, 350]] = [400.0, -250.0, 180.0]
    return pd.Series(values)


class TestOutlierMask:
    """Tests for outlier_mask."""

    def test_spikes_are_flagged(self) -> None:
        """Injected spikes are outside the band."""
        result = outlier_mask(_spiky_series(), 3.0)

        assert not result.kept_mask[[10, 200, 350]].any()
        assert result.n_discarded >= 3
        assert result.n_passes >= 2
        assert result.threshold == 3.0

    def test_final_band_contains_survivors(self) -> None:
        """Every kept value lies within n_sigma of the final mean."""
        values = _spiky_series()
        result = outlier_mask(values, 3.0)
        kept = values[result.kept_mask]
        assert ((kept - result.mean).abs() <= 3.0 * result.std).all()

    def test_constant_series_keeps_everything(self) -> None:
        """Zero spread discards nothing."""
        result = outlier_mask(pd.Series([5.0] * 10), 3.0)
        assert result.n_discarded == 0

    @pytest.mark.parametrize("n_sigma", [0.0, -1.0])
    def test_non_positive_threshold(self, n_sigma: float) -> None:
        """The band width must be positive."""
        with pytest.raises(ValueError, match="positive"):
            outlier_mask(pd.Series([1.0, 2.0]), n_sigma)

    def test_missing_values_rejected(self) -> None:
        """NaN must be imputed before filtering."""
        with pytest.raises(ValueError, match="missing"):
            outlier_mask(pd.Series([1.0, np.nan]), 3.0)


class TestRemoveOutliers:
    """Tests for remove_outliers."""

    def test_filter_is_idempotent(self) -> None:
        """Filtering an already filtered series discards nothing."""
        once, n_first = remove_outliers(_spiky_series(), 3.0)
        twice, n_second = remove_outliers(once, 3.0)

        assert n_first >= 3
        assert n_second == 0
        pd.testing.assert_series_equal(once, twice)

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_idempotent_on_heavy_tails(self, seed: int) -> None:
        """Idempotence also holds on heavy-tailed samples."""
        values = pd.Series(np.random.default_rng(seed).standard_t(df=2, size=400))
        once, _ = remove_outliers(values, 2.0)
        _, n_again = remove_outliers(once, 2.0)
        assert n_again == 0

    def test_keeps_original_index(self) -> None:
        """Surviving observations keep their labels and order."""
        values = pd.Series([1.0, 2.0, 1.5, 100.0, 1.2, 1.8, 2.2, 1.1, 0.9, 1.4, 1.6, 1.3])
        filtered, n = remove_outliers(values, 2.0)
        assert n == 1
        assert 3 not in filtered.index
        assert filtered.index.is_monotonic_increasing


class TestFilterPriceOutliers:
    """Tests for filter_price_outliers."""

    def test_drops_whole_rows(self) -> None:
        """The predispatch columns of an outlier hour go with it."""
        rng = np.random.default_rng(5)
        hoep = rng.normal(30.0, 2.0, 100)
        hoep[42] = 500.0
        df = pd.DataFrame(
            {
                "timestamp": pd.date_range("2023-01-01 01:00", periods=100, freq="h"),
                "hoep": hoep,
                "pred_h1": np.arange(100, dtype=float),
            }
        )

        filtered, n = filter_price_outliers(df, "hoep", 3.0)

        assert n >= 1
        assert 42.0 not in filtered["pred_h1"].tolist()
        assert pd.Timestamp("2023-01-02 19:00") not in filtered["timestamp"].tolist()
        assert filtered.index.tolist() == list(range(len(filtered)))
        assert len(filtered) == 100 - n
