"""Common plotting utilities shared by the data and forecast visualizations.

This module provides reusable plotting functions so that every plot module
creates, decorates and saves figures the same way.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, cast

import matplotlib

matplotlib.use("Agg")  # headless-safe
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy import stats

from hoep_arima.utils import get_logger, save_plot

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

logger = get_logger(__name__)
_DATE_AXIS_ROTATION = 45
_PLOT_DPI = 300
_TEXTBOX_STYLE_DEFAULT = {"boxstyle": "round", "facecolor": "wheat", "alpha": 0.8}


# ============================================================================
# Figure Creation and Saving
# ============================================================================


def create_standard_figure(
    n_rows: int = 1,
    n_cols: int = 1,
    figsize: tuple[float, float] | None = None,
) -> tuple[Figure, Any]:
    """Create standard matplotlib figure with pyplot backend.

    Args:
        n_rows: Number of subplot rows.
        n_cols: Number of subplot columns.
        figsize: Figure size. If None, uses matplotlib defaults.

    Returns:
        Tuple of (figure, axes).
    """
    if figsize is not None:
        fig, axes = plt.subplots(n_rows, n_cols, figsize=figsize)
    else:
        fig, axes = plt.subplots(n_rows, n_cols)
    return fig, axes


def save_figure(
    fig: Figure | None = None,
    output_path: str | Path | None = None,
    *,
    dpi: int = _PLOT_DPI,
    bbox_inches: str = "tight",
    close_after: bool = True,
) -> Path:
    """Save matplotlib figure to file with consistent settings.

    Args:
        fig: Figure to save. If None, uses plt.gcf().
        output_path: Output file path.
        dpi: Dots per inch for rasterized output.
        bbox_inches: Bounding box setting ('tight' or None).
        close_after: Close figure after saving.

    Returns:
        Path of the written file.
    """
    if output_path is None:
        msg = "output_path is required"
        raise ValueError(msg)

    output_path = Path(output_path)
    if fig is not None:
        plt.figure(fig.number)
    save_plot(output_path, dpi=dpi, bbox_inches=bbox_inches, close_after=close_after)
    return output_path


# ============================================================================
# Date Axis Formatting
# ============================================================================


def format_date_axis(
    ax: Axes,
    *,
    major_locator: mdates.DateLocator | None = None,
    major_formatter: mdates.DateFormatter | None = None,
    rotation: float = _DATE_AXIS_ROTATION,
    ha: str = "right",
) -> None:
    """Format x-axis for dates with standard settings.

    Args:
        ax: Matplotlib axes to format.
        major_locator: Major tick locator. If None, uses AutoDateLocator.
        major_formatter: Major tick formatter. If None, uses "%Y-%m-%d".
        rotation: Label rotation angle in degrees.
        ha: Horizontal alignment ('left', 'center', 'right').
    """
    if major_locator is None:
        major_locator = mdates.AutoDateLocator()
    if major_formatter is None:
        major_formatter = mdates.DateFormatter("%Y-%m-%d")

    ax.xaxis.set_major_locator(major_locator)
    ax.xaxis.set_major_formatter(major_formatter)
    for label in ax.xaxis.get_majorticklabels():
        label.set_rotation(rotation)
        label.set_horizontalalignment(cast(Literal["left", "center", "right"], ha))


# ============================================================================
# Data Preparation
# ============================================================================


def clean_array(arr: np.ndarray | pd.Series, *, remove_nan: bool = True) -> np.ndarray:
    """Clean array by removing NaN/Inf values.

    Args:
        arr: Input array.
        remove_nan: Remove NaN and Inf values.

    Returns:
        Cleaned array.
    """
    arr_clean = np.asarray(arr, dtype=float)
    if remove_nan:
        arr_clean = arr_clean[np.isfinite(arr_clean)]
    return arr_clean


# ============================================================================
# Common Plot Elements
# ============================================================================


def add_grid(ax: Axes, *, alpha: float = 0.3, linestyle: str = "--", **kwargs: Any) -> None:
    """Add grid to axes with standard settings."""
    ax.grid(True, alpha=alpha, linestyle=linestyle, **kwargs)


def add_legend(
    ax: Axes,
    *,
    loc: str = "best",
    framealpha: float = 0.9,
    fontsize: int | str = 9,
    **kwargs: Any,
) -> None:
    """Add legend to axes with standard settings."""
    ax.legend(loc=loc, framealpha=framealpha, fontsize=fontsize, **kwargs)


def add_metrics_textbox(
    ax: Axes,
    metrics: dict[str, float],
    *,
    position: tuple[float, float] = (0.02, 0.98),
    precision: int = 4,
    style: dict | None = None,
) -> None:
    """Add metrics dictionary as formatted text box.

    Args:
        ax: Matplotlib axes to add text box to.
        metrics: Dictionary of metric names to values.
        position: Text box position in axes coordinates (x, y).
        precision: Number of decimal places for formatting.
        style: Text box style dict. If None, uses the default wheat box.
    """
    if not metrics:
        return

    text = "\n".join(f"{key}: {value:.{precision}f}" for key, value in metrics.items())
    ax.text(
        position[0],
        position[1],
        text,
        transform=ax.transAxes,
        fontsize=10,
        ha="left",
        va="top",
        bbox=style if style is not None else _TEXTBOX_STYLE_DEFAULT,
    )


# ============================================================================
# Statistical Plot Components
# ============================================================================


def plot_histogram_with_normal_overlay(
    ax: Axes,
    data: np.ndarray | pd.Series,
    *,
    bins: int = 50,
    show_mean_line: bool = True,
    hist_color: str = "#2E86AB",
    fit_color: str = "#A23B72",
) -> tuple[float, float]:
    """Plot a density histogram with a normal curve fitted by mean and std.

    Args:
        ax: Matplotlib axes to plot on.
        data: Data to plot (array or Series).
        bins: Number of histogram bins.
        show_mean_line: Whether to add vertical line at mean.
        hist_color: Color for histogram bars.
        fit_color: Color for the normal curve.

    Returns:
        Tuple of (mean, std) of the data; std uses ``ddof=1``.
    """
    data_clean = clean_array(data)

    if len(data_clean) == 0:
        logger.warning("No valid data for histogram")
        return (0.0, 0.0)

    mean = float(np.mean(data_clean))
    std = float(np.std(data_clean, ddof=1)) if data_clean.size > 1 else 0.0

    ax.hist(
        data_clean,
        bins=bins,
        density=True,
        alpha=0.7,
        color=hist_color,
        edgecolor="black",
        linewidth=0.5,
    )

    if std > 0:
        x_range = np.linspace(data_clean.min(), data_clean.max(), 500)
        ax.plot(
            x_range,
            stats.norm.pdf(x_range, mean, std),
            color=fit_color,
            linewidth=2.5,
            label=f"Normal fit (μ={mean:.2f}, σ={std:.2f})",
        )

    if show_mean_line:
        ax.axvline(mean, color="red", linestyle="--", linewidth=1.5, alpha=0.8)

    return mean, std
