"""Visualization utilities package.

Provides common plotting utilities shared by the data and forecast plots.
"""

from __future__ import annotations

from .plotting_utils import (
    add_grid,
    add_legend,
    add_metrics_textbox,
    clean_array,
    create_standard_figure,
    format_date_axis,
    plot_histogram_with_normal_overlay,
    save_figure,
)

__all__ = [
    "add_grid",
    "add_legend",
    "add_metrics_textbox",
    "clean_array",
    "create_standard_figure",
    "format_date_axis",
    "plot_histogram_with_normal_overlay",
    "save_figure",
]
