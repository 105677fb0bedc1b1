"""Loading and cleaning of the IESO HOEP/predispatch export."""

from __future__ import annotations

from hoep_arima.data_cleaning.data_cleaning import (
    CleaningReport,
    clean_price_observations,
    load_price_observations,
    write_cleaned_dataset,
)
from hoep_arima.data_cleaning.filtering import filter_price_outliers, remove_outliers

__all__ = [
    "CleaningReport",
    "clean_price_observations",
    "filter_price_outliers",
    "load_price_observations",
    "remove_outliers",
    "write_cleaned_dataset",
]
