"""Offline BLS payload builders for tests."""

from inflation_tracker.config import Settings


def bls_row(year: int, month: int | str, value) -> dict:
    period = month if isinstance(month, str) else f"M{month:02d}"
    return {
        "year": str(year),
        "period": period,
        "periodName": "",
        "value": value if isinstance(value, str) else f"{value}",
        "footnotes": [{}],
    }


def monthly_rows(start_year: int, start_month: int, values: list[float]) -> list[dict]:
    """Rows for consecutive months, newest first as BLS returns them."""
    rows = []
    year, month = start_year, start_month
    for value in values:
        rows.append(bls_row(year, month, value))
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return list(reversed(rows))


def bls_payload(rows: list[dict], series_id: str = "CUUR0000SA0") -> dict:
    return {
        "status": "REQUEST_SUCCEEDED",
        "responseTime": 120,
        "message": [],
        "Results": {"series": [{"seriesID": series_id, "data": rows}]},
    }


def make_settings(**overrides) -> Settings:
    values = {
        "bls_api_key": "",
        "base_url": "https://bls.test/timeseries/data",
        "start_year": 2020,
        "timeout": 5.0,
        "next_release": "2025-09-11T08:30:00-04:00",
        "alignment": "position",
        "cycle_timeout": None,
    }
    values.update(overrides)
    return Settings(**values)
