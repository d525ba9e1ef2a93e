"""Parse BLS timeseries payloads into monthly series."""

import logging
from typing import Any

import numpy as np
import pandas as pd

from inflation_tracker.models import Series, SeriesPoint


logger = logging.getLogger(__name__)

# Annual average row, not a month
ANNUAL_AVERAGE_PERIOD = "M13"

MONTHLY_PERIOD = r"M(0[1-9]|1[0-2])"


def _extract_rows(payload: Any) -> list[dict]:
    """Return Results.series[0].data, raising on any shape mismatch."""
    rows = payload["Results"]["series"][0]["data"]
    if not isinstance(rows, list):
        raise TypeError(f"expected a list of observations, got {type(rows).__name__}")
    for row in rows:
        if not isinstance(row, dict):
            raise TypeError(f"expected observation objects, got {type(row).__name__}")
    return rows


def _parse_rows(rows: list[dict]) -> Series:
    df = pd.DataFrame(rows, columns=["year", "period", "value"])
    if df.empty:
        return ()

    period = df["period"].astype(str)
    df = df[period != ANNUAL_AVERAGE_PERIOD]
    period = period[period != ANNUAL_AVERAGE_PERIOD]
    if df.empty:
        return ()

    if not period.str.fullmatch(MONTHLY_PERIOD).all():
        bad = sorted(set(period[~period.str.fullmatch(MONTHLY_PERIOD)]))
        raise ValueError(f"unexpected period codes: {bad}")

    year = pd.to_numeric(df["year"], errors="raise")
    if year.isna().any() or (year % 1 != 0).any():
        raise ValueError("missing or non-integer year")

    value = pd.to_numeric(df["value"], errors="raise").astype(float)
    if not np.isfinite(value.to_numpy()).all():
        raise ValueError("missing or non-finite value")

    dates = pd.to_datetime(
        pd.DataFrame(
            {
                "year": year.astype(int).to_numpy(),
                "month": period.str[1:].astype(int).to_numpy(),
                "day": 1,
            }
        )
    )

    frame = pd.DataFrame({"date": dates.to_numpy(), "value": value.to_numpy()})
    # BLS lists the newest revision first, keep that one
    frame = frame.drop_duplicates(subset="date", keep="first")
    frame = frame.sort_values("date", kind="stable")

    return tuple(
        SeriesPoint(date=ts.date(), value=float(val))
        for ts, val in zip(frame["date"], frame["value"])
    )


def parse_bls_series(payload: Any) -> Series:
    """
    Convert a BLS API response for one series into a sorted monthly series.

    The annual average period (M13) is skipped. Any other shape problem
    (missing array, unknown period code, unparsable year or value) yields an
    empty series instead of raising, so one malformed series cannot abort a
    whole load cycle. An empty series means "no data", not zero.

    Args:
        payload: Decoded JSON from the timeseries endpoint

    Returns:
        Tuple of SeriesPoint, oldest first, one per month
    """
    try:
        rows = _extract_rows(payload)
        return _parse_rows(rows)
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Could not parse BLS payload: {e!r}")
        return ()


def bls_messages(payload: Any) -> list[str]:
    """Messages BLS attaches to a response (rate limits, invalid series...)."""
    if not isinstance(payload, dict):
        return []
    messages = payload.get("message") or []
    if isinstance(messages, str):
        return [messages]
    return [str(m) for m in messages if m]
