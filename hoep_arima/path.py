"""File and directory paths for the HOEP forecasting study."""

from __future__ import annotations

from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# ============================================================================
# BASE DIRECTORIES
# ============================================================================

DATA_DIR = PROJECT_ROOT / "data"
RESULTS_DIR = PROJECT_ROOT / "results"
PLOTS_DIR = PROJECT_ROOT / "plots"

# ============================================================================
# DATA PIPELINE - File paths
# ============================================================================

# Raw IESO export (HOEP + predispatch), one calendar year
RAW_PRICE_FILE = DATA_DIR / "PUB_PriceHOEPPredispOR.csv"
CLEANED_PRICE_FILE = DATA_DIR / "hoep_cleaned.csv"

# ============================================================================
# RESULTS DIRECTORIES
# ============================================================================

DATA_RESULTS_DIR = RESULTS_DIR / "data"
STATIONARITY_REPORT_FILE = DATA_RESULTS_DIR / "stationarity_report.json"
DESCRIPTIVE_MOMENTS_FILE = DATA_RESULTS_DIR / "descriptive_moments.csv"

ARIMA_RESULTS_DIR = RESULTS_DIR / "arima"
ARIMA_EVALUATION_DIR = ARIMA_RESULTS_DIR / "evaluation"

ROLLING_PREDICTIONS_ARIMA_FILE = ARIMA_EVALUATION_DIR / "rolling_predictions.csv"
ACCURACY_SUMMARY_FILE = ARIMA_EVALUATION_DIR / "accuracy_summary.json"
ACCURACY_METRICS_TABLE_FILE = ARIMA_EVALUATION_DIR / "accuracy_metrics.csv"
MOMENTS_COMPARISON_TABLE_FILE = ARIMA_EVALUATION_DIR / "moments_comparison.csv"

# ============================================================================
# PLOTS DIRECTORIES
# ============================================================================

DATA_PLOTS_DIR = PLOTS_DIR / "data"
PRICE_SERIES_PLOT = DATA_PLOTS_DIR / "hoep_series.png"
PRICE_DISTRIBUTION_PLOT = DATA_PLOTS_DIR / "hoep_distribution.png"
PRICE_ACF_PACF_PLOT = DATA_PLOTS_DIR / "hoep_acf_pacf.png"

ARIMA_PLOTS_DIR = PLOTS_DIR / "arima"
ARIMA_EVALUATION_PLOTS_DIR = ARIMA_PLOTS_DIR / "evaluation"
PREDICTIONS_VS_ACTUAL_ARIMA_PLOT = ARIMA_EVALUATION_PLOTS_DIR / "predictions_vs_actual.png"
ARIMA_RESIDUALS_LJUNGBOX_PLOT = ARIMA_EVALUATION_PLOTS_DIR / "ljungbox_residuals.png"
