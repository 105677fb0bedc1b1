"""Constants for the HOEP forecasting study."""

from __future__ import annotations

# Re-export paths from path.py so callers can import everything from one place
from hoep_arima.path import (  # noqa: F401
    ACCURACY_METRICS_TABLE_FILE,
    ACCURACY_SUMMARY_FILE,
    ARIMA_EVALUATION_DIR,
    ARIMA_EVALUATION_PLOTS_DIR,
    ARIMA_PLOTS_DIR,
    ARIMA_RESIDUALS_LJUNGBOX_PLOT,
    ARIMA_RESULTS_DIR,
    CLEANED_PRICE_FILE,
    DATA_DIR,
    DATA_PLOTS_DIR,
    DATA_RESULTS_DIR,
    DESCRIPTIVE_MOMENTS_FILE,
    MOMENTS_COMPARISON_TABLE_FILE,
    PLOTS_DIR,
    PREDICTIONS_VS_ACTUAL_ARIMA_PLOT,
    PRICE_ACF_PACF_PLOT,
    PRICE_DISTRIBUTION_PLOT,
    PRICE_SERIES_PLOT,
    PROJECT_ROOT,
    RAW_PRICE_FILE,
    RESULTS_DIR,
    ROLLING_PREDICTIONS_ARIMA_FILE,
    STATIONARITY_REPORT_FILE,
)

# ============================================================================
# RAW INPUT FORMAT
# ============================================================================

# The IESO export starts with three rows of metadata before the real header
RAW_HEADER_SKIP_ROWS: int = 3

RAW_DATE_COLUMN: str = "Date"
RAW_HOUR_COLUMN: str = "Hour"
RAW_PRICE_COLUMN: str = "HOEP"
RAW_PREDISPATCH_COLUMNS: tuple[str, str, str] = (
    "Hour 1 Predispatch",
    "Hour 2 Predispatch",
    "Hour 3 Predispatch",
)
REQUIRED_RAW_COLUMNS: tuple[str, ...] = (
    RAW_DATE_COLUMN,
    RAW_HOUR_COLUMN,
    RAW_PRICE_COLUMN,
    *RAW_PREDISPATCH_COLUMNS,
)

# Normalized column names
TIMESTAMP_COLUMN: str = "timestamp"
PRICE_COLUMN: str = "hoep"
PREDISPATCH_COLUMNS: tuple[str, str, str] = ("pred_h1", "pred_h2", "pred_h3")
NUMERIC_COLUMNS: tuple[str, ...] = (PRICE_COLUMN, *PREDISPATCH_COLUMNS)

RAW_COLUMN_RENAMES: dict[str, str] = {
    RAW_PRICE_COLUMN: PRICE_COLUMN,
    **dict(zip(RAW_PREDISPATCH_COLUMNS, PREDISPATCH_COLUMNS)),
}

# IESO hours are numbered 1..24 and label the hour ending
HOUR_MIN: int = 1
HOUR_MAX: int = 24

# ============================================================================
# RESULTS TABLE
# ============================================================================

RESULT_FORECAST_COLUMN: str = "forecasted"
RESULT_ACTUAL_COLUMN: str = "actual"
RESULT_RESIDUAL_COLUMN: str = "residual"
RESULT_COMPETITOR_COLUMNS: tuple[str, str, str] = (
    "ieso_pred_h1",
    "ieso_pred_h2",
    "ieso_pred_h3",
)
RESULTS_TABLE_COLUMNS: tuple[str, ...] = (
    TIMESTAMP_COLUMN,
    RESULT_FORECAST_COLUMN,
    RESULT_ACTUAL_COLUMN,
    *RESULT_COMPETITOR_COLUMNS,
    RESULT_RESIDUAL_COLUMN,
)
ARMA_MODEL_NAME: str = "arma"
REALIZED_SERIES_NAME: str = "realized"

# ============================================================================
# ANALYSIS PARAMETERS
# ============================================================================

EVALUATION_WINDOW_HOURS: int = 24 * 7  # One week of hourly forecasts
FORECAST_HORIZON: int = 3  # Only the one-step-ahead value is kept
OUTLIER_SIGMA_THRESHOLD: float = 3.0
LJUNG_BOX_LAGS: int = 25
ROLLING_FORECAST_PROGRESS_INTERVAL: int = 24

# ARMA order search (exhaustive, d fixed at 0)
ARMA_MAX_P: int = 5
ARMA_MAX_Q: int = 5
ARMA_MAX_ORDER: int = 5  # p + q bound of a non-stepwise automatic search
ARMA_TREND_CANDIDATES: tuple[str, ...] = ("c", "n")
ARMA_SELECTION_CRITERIA: tuple[str, ...] = ("aic", "bic")
ARMA_DEFAULT_CRITERION: str = "aic"
ARMA_FIT_METHODS: tuple[str, ...] = ("statespace", "innovations_mle", "hannan_rissanen")
ARMA_DEFAULT_FIT_METHOD: str = "statespace"
ARMA_MIN_TRAIN_SIZE: int = 5
ARMA_CONSTANT_TOLERANCE: float = 1e-12

# ============================================================================
# DIAGNOSTICS
# ============================================================================

STATIONARITY_DEFAULT_ALPHA: float = 0.05
ADF_MIN_OBSERVATIONS: int = 20
ACF_PACF_DEFAULT_LAGS: int = 48
PORTMANTEAU_MIN_OBSERVATIONS: int = 3
VARIANCE_DDOF: int = 1

# ============================================================================
# LOGGING
# ============================================================================

LOG_LEVEL: str = "INFO"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
# Third-party loggers that flood DEBUG/INFO output during repeated fits and plots
NOISY_LOGGERS: tuple[str, ...] = ("matplotlib", "PIL")

# ============================================================================
# PLOTTING
# ============================================================================

EVAL_FIGURE_SIZE: tuple[int, int] = (10, 4)
EVAL_DPI: int = 150
TEXT_POSITION_X: float = 0.02
TEXT_POSITION_Y: float = 0.95
FIGURE_SIZE_SERIES: tuple[int, int] = (14, 5)
FIGURE_SIZE_ACF_PACF: tuple[int, int] = (14, 8)
FIGURE_SIZE_DISTRIBUTION: tuple[int, int] = (10, 6)
DISTRIBUTION_HISTOGRAM_BINS: int = 60
LINEWIDTH_DEFAULT: float = 1.0
LINEWIDTH_THIN: float = 0.6
PLOT_ALPHA_DEFAULT: float = 0.8
PLOT_ALPHA_LIGHT: float = 0.3
FONTSIZE_TITLE: int = 14
FONTSIZE_LABEL: int = 12
COLOR_ACTUAL: str = "black"
COLOR_ARMA: str = "#2E86AB"
COLOR_COMPETITORS: tuple[str, str, str] = ("#A23B72", "#F18F01", "#6A994E")
FONTSIZE_SUBTITLE: int = 12
FONTSIZE_AXIS: int = 10
ACF_PACF_MIN_LAGS: int = 1
COLOR_NORMAL_FIT: str = "#A23B72"
COLOR_HISTOGRAM: str = "#2E86AB"
TEXTBOX_STYLE_DEFAULT: dict[str, object] = {"boxstyle": "round", "facecolor": "wheat", "alpha": 0.8}
