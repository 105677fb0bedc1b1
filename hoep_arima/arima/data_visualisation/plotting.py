"""HOEP visualizations: price series, distribution, ACF/PACF and forecasts.

Every function takes in-memory data, writes one PNG and returns its path.
"""

from __future__ import annotations

from pathlib import Path

from matplotlib.axes import Axes
import numpy as np
import pandas as pd
from statsmodels.graphics.tsaplots import plot_acf, plot_pacf

from hoep_arima.constants import (
    ACF_PACF_DEFAULT_LAGS,
    ACF_PACF_MIN_LAGS,
    COLOR_ACTUAL,
    COLOR_ARMA,
    COLOR_COMPETITORS,
    COLOR_HISTOGRAM,
    COLOR_NORMAL_FIT,
    DISTRIBUTION_HISTOGRAM_BINS,
    FIGURE_SIZE_ACF_PACF,
    FIGURE_SIZE_DISTRIBUTION,
    FIGURE_SIZE_SERIES,
    FONTSIZE_AXIS,
    FONTSIZE_LABEL,
    FONTSIZE_SUBTITLE,
    FONTSIZE_TITLE,
    LINEWIDTH_DEFAULT,
    LINEWIDTH_THIN,
    PLOT_ALPHA_DEFAULT,
    PLOT_ALPHA_LIGHT,
    PREDICTIONS_VS_ACTUAL_ARIMA_PLOT,
    PREDISPATCH_COLUMNS,
    PRICE_ACF_PACF_PLOT,
    PRICE_COLUMN,
    PRICE_DISTRIBUTION_PLOT,
    PRICE_SERIES_PLOT,
    RESULT_ACTUAL_COLUMN,
    RESULT_COMPETITOR_COLUMNS,
    RESULT_FORECAST_COLUMN,
    TEXTBOX_STYLE_DEFAULT,
    TIMESTAMP_COLUMN,
)
from hoep_arima.utils import compute_sample_moments, get_logger, validate_required_columns
from hoep_arima.visualization import (
    add_grid,
    add_legend,
    add_metrics_textbox,
    create_standard_figure,
    format_date_axis,
    plot_histogram_with_normal_overlay,
    save_figure,
)

logger = get_logger(__name__)


def plot_price_series(
    frame: pd.DataFrame,
    output_file: Path | str = PRICE_SERIES_PLOT,
) -> Path:
    """Plot realized HOEP with the 1-hour predispatch forecast over time.

    Args:
        frame: Price table with ``timestamp``, ``hoep`` and ``pred_h1``.
        output_file: Path to save the plot.

    Returns:
        Path to the saved plot.
    """
    validate_required_columns(
        frame, [TIMESTAMP_COLUMN, PRICE_COLUMN, PREDISPATCH_COLUMNS[0]], df_name="price table"
    )
    fig, ax = create_standard_figure(figsize=FIGURE_SIZE_SERIES)
    ax.plot(
        frame[TIMESTAMP_COLUMN],
        frame[PRICE_COLUMN],
        color=COLOR_ACTUAL,
        linewidth=LINEWIDTH_THIN,
        label="HOEP",
    )
    ax.plot(
        frame[TIMESTAMP_COLUMN],
        frame[PREDISPATCH_COLUMNS[0]],
        color=COLOR_COMPETITORS[0],
        linewidth=LINEWIDTH_THIN,
        alpha=PLOT_ALPHA_DEFAULT,
        label="Hour 1 predispatch",
    )
    ax.set_title("Hourly Ontario Energy Price", fontsize=FONTSIZE_TITLE, fontweight="bold")
    ax.set_xlabel("Timestamp", fontsize=FONTSIZE_LABEL)
    ax.set_ylabel("$/MWh", fontsize=FONTSIZE_LABEL)
    format_date_axis(ax)
    add_grid(ax, alpha=PLOT_ALPHA_LIGHT)
    add_legend(ax, loc="upper right")
    fig.tight_layout()
    return save_figure(fig, output_file)


def plot_price_distribution(
    prices: pd.Series,
    output_file: Path | str = PRICE_DISTRIBUTION_PLOT,
    bins: int = DISTRIBUTION_HISTOGRAM_BINS,
) -> Path:
    """Plot a price histogram with a fitted normal overlay and moment annotations.

    Raises:
        ValueError: If ``prices`` has no finite value.
    """
    values = prices.dropna()
    if values.empty:
        raise ValueError("No valid prices to plot")

    fig, ax = create_standard_figure(figsize=FIGURE_SIZE_DISTRIBUTION)
    plot_histogram_with_normal_overlay(
        ax, values, bins=bins, hist_color=COLOR_HISTOGRAM, fit_color=COLOR_NORMAL_FIT
    )

    moments = compute_sample_moments(values)
    stats_text = (
        f"N = {len(values):,}\n"
        f"Mean = {moments['mean']:.4f}\n"
        f"Variance = {moments['variance']:.4f}\n"
        f"Skewness = {moments['skewness']:.4f}\n"
        f"Kurtosis = {moments['kurtosis']:.4f}"
    )
    ax.text(
        0.98,
        0.98,
        stats_text,
        transform=ax.transAxes,
        fontsize=10,
        ha="right",
        va="top",
        bbox=TEXTBOX_STYLE_DEFAULT,
    )
    ax.set_title("Distribution of HOEP", fontsize=FONTSIZE_TITLE, fontweight="bold")
    ax.set_xlabel("$/MWh", fontsize=FONTSIZE_LABEL)
    ax.set_ylabel("Density", fontsize=FONTSIZE_LABEL)
    add_legend(ax, loc="upper left")
    add_grid(ax, alpha=PLOT_ALPHA_LIGHT)
    fig.tight_layout()
    return save_figure(fig, output_file)


def _validate_and_adjust_lags(series: pd.Series, lags: int) -> int:
    """Validate lags and cap them below half the sample size (PACF limit)."""
    if lags <= 0:
        msg = f"lags must be positive, got {lags}"
        raise ValueError(msg)

    max_lags = len(series) // 2 - 1
    if max_lags < ACF_PACF_MIN_LAGS:
        raise ValueError(f"Series of {len(series)} observations is too short for ACF/PACF")
    if lags > max_lags:
        logger.warning(f"Series length ({len(series)}) too short for {lags} lags. Using {max_lags}")
        lags = max_lags
    return lags


def _setup_correlogram_axis(ax: Axes, title: str, ylabel: str) -> None:
    ax.set_title(title, fontsize=FONTSIZE_SUBTITLE, fontweight="bold")
    ax.set_xlabel("Lag (hours)", fontsize=FONTSIZE_AXIS)
    ax.set_ylabel(ylabel, fontsize=FONTSIZE_AXIS)
    ax.grid(alpha=PLOT_ALPHA_LIGHT, linestyle="--")


def plot_price_acf_pacf(
    prices: pd.Series,
    output_file: Path | str = PRICE_ACF_PACF_PLOT,
    lags: int = ACF_PACF_DEFAULT_LAGS,
) -> Path:
    """Plot autocorrelation (ACF) and partial autocorrelation (PACF) of prices."""
    values = prices.dropna().astype(float).reset_index(drop=True)
    lags = _validate_and_adjust_lags(values, lags)

    fig, axes = create_standard_figure(n_rows=2, n_cols=1, figsize=FIGURE_SIZE_ACF_PACF)
    plot_acf(values, lags=lags, ax=axes[0], zero=False, alpha=0.05)
    _setup_correlogram_axis(axes[0], "Autocorrelation function (ACF)", "Autocorrelation")
    plot_pacf(values, lags=lags, ax=axes[1], method="ywm", zero=False, alpha=0.05)
    _setup_correlogram_axis(
        axes[1], "Partial autocorrelation function (PACF)", "Partial autocorrelation"
    )
    fig.tight_layout()
    return save_figure(fig, output_file)


def plot_forecasts_vs_actual(
    results_table: pd.DataFrame,
    output_file: Path | str = PREDICTIONS_VS_ACTUAL_ARIMA_PLOT,
) -> Path:
    """Plot ARMA and predispatch forecasts against realized HOEP for the window.

    Args:
        results_table: Table with ``timestamp``, ``forecasted``, ``actual`` and
            ``ieso_pred_h1..3``.
        output_file: Path to save the plot.

    Returns:
        Path to the saved plot.
    """
    validate_required_columns(
        results_table,
        [TIMESTAMP_COLUMN, RESULT_FORECAST_COLUMN, RESULT_ACTUAL_COLUMN, *RESULT_COMPETITOR_COLUMNS],
        df_name="results table",
    )
    df = results_table.sort_values(TIMESTAMP_COLUMN)
    x = pd.to_datetime(df[TIMESTAMP_COLUMN])

    fig, ax = create_standard_figure(figsize=FIGURE_SIZE_SERIES)
    ax.plot(
        x,
        df[RESULT_ACTUAL_COLUMN],
        color=COLOR_ACTUAL,
        linewidth=LINEWIDTH_DEFAULT * 1.5,
        label="Realized HOEP",
    )
    ax.plot(
        x,
        df[RESULT_FORECAST_COLUMN],
        color=COLOR_ARMA,
        linewidth=LINEWIDTH_DEFAULT,
        marker="o",
        markersize=2,
        label="ARMA one-step",
    )
    for horizon, (column, color) in enumerate(zip(RESULT_COMPETITOR_COLUMNS, COLOR_COMPETITORS), 1):
        ax.plot(
            x,
            df[column],
            color=color,
            linewidth=LINEWIDTH_THIN,
            alpha=PLOT_ALPHA_DEFAULT,
            linestyle="--",
            label=f"IESO predispatch h{horizon}",
        )

    errors = df[RESULT_ACTUAL_COLUMN].to_numpy(float) - df[RESULT_FORECAST_COLUMN].to_numpy(float)
    add_metrics_textbox(
        ax,
        {
            "ARMA MAE": float(np.mean(np.abs(errors))),
            "ARMA RMSE": float(np.sqrt(np.mean(errors**2))),
        },
        precision=3,
    )
    ax.set_title(
        "ARMA and predispatch forecasts vs realized HOEP",
        fontsize=FONTSIZE_TITLE,
        fontweight="bold",
    )
    ax.set_xlabel("Timestamp", fontsize=FONTSIZE_LABEL)
    ax.set_ylabel("$/MWh", fontsize=FONTSIZE_LABEL)
    format_date_axis(ax)
    add_grid(ax, alpha=PLOT_ALPHA_LIGHT)
    add_legend(ax, loc="upper right")
    fig.tight_layout()
    return save_figure(fig, output_file)
