"""Merge independently fetched series into chart rows."""

from collections.abc import Mapping

import pandas as pd

from inflation_tracker.config import ALIGNMENT_MODES
from inflation_tracker.models import ChartRow, CpiData, Series, month_label, series_to_frame


# Column names of the dashboard table, reference first
CHART_COLUMNS = {
    "Headline_NSA": "headline_nsa",
    "Headline_SA": "headline_sa",
    "Core_SA": "core_sa",
}
REFERENCE_COLUMN = "Headline_NSA"


def _by_position(reference: Series, other: Series) -> list[float | None]:
    return [other[i].value if i < len(other) else None for i in range(len(reference))]


def _by_date(reference: Series, other: Series) -> list[float | None]:
    index = series_to_frame(reference).index
    aligned = series_to_frame(other)["value"].reindex(index)
    return [None if pd.isna(v) else float(v) for v in aligned]


def align_series(
    series: Mapping[str, Series], reference: str, by: str = "position"
) -> list[ChartRow]:
    """
    Build one ChartRow per point of the reference series.

    With by="position" the other series contribute the value at the same
    index as the reference point, regardless of its date. Series of
    different lengths or with gaps the reference lacks are paired wrongly;
    by="date" matches calendar months instead.

    Args:
        series: Name -> series, in column order
        reference: Name of the series whose months key the rows
        by: "position" or "date"

    Returns:
        Rows oldest first; values missing from a series are None
    """
    if by not in ALIGNMENT_MODES:
        raise ValueError(f"Unknown alignment: {by}")
    if reference not in series:
        raise ValueError(f"Reference series {reference!r} not provided")

    ref = series[reference]
    align = _by_position if by == "position" else _by_date

    columns: dict[str, list[float | None]] = {}
    for name, other in series.items():
        if name == reference:
            columns[name] = [p.value for p in ref]
        else:
            columns[name] = align(ref, other)

    return [
        ChartRow(
            month_label=month_label(point.date),
            values={name: values[i] for name, values in columns.items()},
        )
        for i, point in enumerate(ref)
    ]


def build_chart_rows(data: CpiData, by: str = "position") -> list[ChartRow]:
    """Dashboard table keyed by the headline NSA months."""
    series = {column: getattr(data, attr) for column, attr in CHART_COLUMNS.items()}
    return align_series(series, REFERENCE_COLUMN, by=by)


def chart_frame(rows: list[ChartRow]) -> pd.DataFrame:
    """Chart rows as a DataFrame indexed by month label."""
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame([row.to_dict() for row in rows]).set_index("date")
