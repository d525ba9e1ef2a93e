"""Data models."""

from .series import (
    ChartRow,
    CpiData,
    DerivedMetrics,
    LoadState,
    LoadStatus,
    Series,
    SeriesPoint,
    month_label,
    series_to_frame,
    series_values,
)

__all__ = [
    "ChartRow",
    "CpiData",
    "DerivedMetrics",
    "LoadState",
    "LoadStatus",
    "Series",
    "SeriesPoint",
    "month_label",
    "series_to_frame",
    "series_values",
]
