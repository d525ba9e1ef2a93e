"""Percentage-change indicators from monthly index levels."""

from collections.abc import Sequence

import numpy as np

from inflation_tracker.models import CpiData, DerivedMetrics, series_values


YOY_LAG = 12  # latest vs 12 months earlier
MOM_LAG = 1


def _pct_change(values: Sequence[float], lag: int) -> float | None:
    """
    Percentage change between the last value and the one `lag` positions back.

    Returns None with too few values, a zero base or a non-finite result.
    No gap filling: positions are compared, not calendar months.
    """
    if values is None or len(values) < lag + 1:
        return None

    latest = float(values[-1])
    base = float(values[-(lag + 1)])
    if base == 0 or not np.isfinite(base) or not np.isfinite(latest):
        return None

    change = (latest - base) / base * 100
    return float(change) if np.isfinite(change) else None


def pct_change_yoy(values: Sequence[float]) -> float | None:
    """Year-over-year % change. Needs at least 13 monthly values."""
    return _pct_change(values, YOY_LAG)


def pct_change_mom(values: Sequence[float]) -> float | None:
    """Month-over-month % change. Needs at least 2 monthly values."""
    return _pct_change(values, MOM_LAG)


def derive_metrics(data: CpiData) -> DerivedMetrics:
    """
    Headline and core figures for the dashboard.

    YoY headline uses the NSA series, MoM headline the SA series; core uses
    its SA series for both.
    """
    headline_nsa = series_values(data.headline_nsa)
    headline_sa = series_values(data.headline_sa)
    core = series_values(data.core_sa)

    return DerivedMetrics(
        headline_yoy=pct_change_yoy(headline_nsa),
        headline_mom=pct_change_mom(headline_sa),
        core_yoy=pct_change_yoy(core),
        core_mom=pct_change_mom(core),
        last_date=data.headline_nsa[-1].date if data.headline_nsa else None,
    )
