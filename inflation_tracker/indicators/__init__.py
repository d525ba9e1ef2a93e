"""Inflation indicator calculations."""

from inflation_tracker.indicators.alignment import align_series, build_chart_rows, chart_frame
from inflation_tracker.indicators.calculator import derive_metrics, pct_change_mom, pct_change_yoy
from inflation_tracker.indicators.release import Countdown, release_countdown

__all__ = [
    "Countdown",
    "align_series",
    "build_chart_rows",
    "chart_frame",
    "derive_metrics",
    "pct_change_mom",
    "pct_change_yoy",
    "release_countdown",
]
