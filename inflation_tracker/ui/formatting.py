"""Display helpers. Absent values render as a neutral placeholder."""

import math
from datetime import date

from inflation_tracker.indicators.release import Countdown


PLACEHOLDER = "–"


def _absent(x: float | None) -> bool:
    return x is None or (isinstance(x, float) and math.isnan(x))


def format_pct(x: float | None) -> str:
    return PLACEHOLDER if _absent(x) else f"{x:.1f}%"


def format_level(x: float | None) -> str:
    return PLACEHOLDER if _absent(x) else f"{x:.2f}"


def format_month(d: date | None) -> str:
    """e.g. August 2025"""
    return PLACEHOLDER if d is None else d.strftime("%B %Y")


def format_countdown(c: Countdown) -> str:
    return f"{c.days:02d}d {c.hours:02d}h {c.minutes:02d}m {c.seconds:02d}s"
