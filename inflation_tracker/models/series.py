"""Data models for CPI series and load state."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType

import pandas as pd


@dataclass(frozen=True, order=True)
class SeriesPoint:
    """Single monthly observation. Points order by date."""

    date: date
    value: float


# Oldest first, strictly increasing months
Series = tuple[SeriesPoint, ...]


def series_values(series: Series) -> list[float]:
    """Index levels of a series, oldest first."""
    return [point.value for point in series]


def series_to_frame(series: Series) -> pd.DataFrame:
    """
    Convert a series to a DataFrame.

    Returns:
        DataFrame with DatetimeIndex named "date" and a "value" column
    """
    if not series:
        return pd.DataFrame(columns=["value"], index=pd.DatetimeIndex([], name="date"))

    df = pd.DataFrame(
        {"value": [p.value for p in series]},
        index=pd.DatetimeIndex([pd.Timestamp(p.date) for p in series], name="date"),
    )
    return df


def month_label(d: date) -> str:
    """Format a date as YYYY-MM."""
    return f"{d.year:04d}-{d.month:02d}"


@dataclass(frozen=True)
class CpiData:
    """The three parsed series of one load cycle."""

    headline_nsa: Series
    headline_sa: Series
    core_sa: Series
    start_year: int


@dataclass(frozen=True)
class DerivedMetrics:
    """Headline and core percentage changes. None means not computable."""

    headline_yoy: float | None
    headline_mom: float | None
    core_yoy: float | None
    core_mom: float | None
    last_date: date | None


@dataclass(frozen=True)
class ChartRow:
    """One month of the unified chart table. Values are read-only."""

    month_label: str
    values: Mapping[str, float | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __hash__(self) -> int:
        return hash((self.month_label, tuple(self.values.items())))

    def to_dict(self) -> dict:
        return {"date": self.month_label, **self.values}


class LoadStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class LoadState:
    """
    Observable state of the loader.

    Exactly one of loading, error or data applies; epoch identifies the
    load cycle that produced the state.
    """

    status: LoadStatus
    epoch: int = 0
    error: str | None = None
    data: CpiData | None = None

    @classmethod
    def idle(cls) -> "LoadState":
        return cls(status=LoadStatus.IDLE)

    @classmethod
    def loading(cls, epoch: int) -> "LoadState":
        return cls(status=LoadStatus.LOADING, epoch=epoch)

    @classmethod
    def failed(cls, epoch: int, message: str) -> "LoadState":
        return cls(status=LoadStatus.ERROR, epoch=epoch, error=message)

    @classmethod
    def ready(cls, epoch: int, data: CpiData) -> "LoadState":
        return cls(status=LoadStatus.READY, epoch=epoch, data=data)

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is LoadStatus.ERROR

    @property
    def is_ready(self) -> bool:
        return self.status is LoadStatus.READY
