"""Report tables."""

from __future__ import annotations

from .tables import (
    accuracy_table,
    comparison_table,
    descriptive_moments_table,
    save_report_tables,
)

__all__ = [
    "accuracy_table",
    "comparison_table",
    "descriptive_moments_table",
    "save_report_tables",
]
