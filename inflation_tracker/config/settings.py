"""Configuration settings for the tracker."""

from dataclasses import dataclass, field
from datetime import date
import os

from dotenv import load_dotenv


load_dotenv()


# BLS CPI-U series (All Urban Consumers, U.S. city average)
SERIES: dict[str, str] = {
    "HEADLINE_NSA": "CUUR0000SA0",  # Not seasonally adjusted, used for YoY
    "HEADLINE_SA": "CUSR0000SA0",  # Seasonally adjusted, used for MoM
    "CORE_SA": "CUSR0000SA0L1E",  # Seasonally adjusted, less food & energy
}

SERIES_TITLES: dict[str, str] = {
    "HEADLINE_NSA": "Headline CPI (NSA)",
    "HEADLINE_SA": "Headline CPI (SA)",
    "CORE_SA": "Core CPI (SA)",
}

BLS_BASE_URL = "https://api.bls.gov/publicAPI/v2/timeseries/data"

# Next scheduled CPI release, 8:30 AM ET (bls.gov/cpi)
DEFAULT_NEXT_RELEASE = "2025-09-11T08:30:00-04:00"

# First year of CPI-U history published by BLS
EARLIEST_START_YEAR = 1913

ALIGNMENT_MODES = ("position", "date")


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


@dataclass
class Settings:
    """Application settings."""

    bls_api_key: str = field(default_factory=lambda: os.getenv("BLS_API_KEY", ""))
    base_url: str = field(
        default_factory=lambda: os.getenv("BLS_BASE_URL", BLS_BASE_URL).rstrip("/")
    )
    start_year: int = field(
        default_factory=lambda: int(os.getenv("CPI_START_YEAR", "2015"))
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv("BLS_TIMEOUT", "30.0"))
    )
    next_release: str = field(
        default_factory=lambda: os.getenv("CPI_NEXT_RELEASE", DEFAULT_NEXT_RELEASE)
    )
    alignment: str = field(
        default_factory=lambda: os.getenv("CPI_ALIGNMENT", "position")
    )
    cycle_timeout: float | None = field(
        default_factory=lambda: _optional_float("CPI_CYCLE_TIMEOUT")
    )

    def validate(self) -> None:
        """Validate settings."""
        from inflation_tracker.indicators.release import parse_release_time

        validate_start_year(self.start_year)
        try:
            parse_release_time(self.next_release)
        except ValueError as e:
            raise ValueError(f"CPI_NEXT_RELEASE: {e}") from e
        if self.timeout <= 0:
            raise ValueError(f"BLS_TIMEOUT must be positive, got {self.timeout}")
        if self.cycle_timeout is not None and self.cycle_timeout <= 0:
            raise ValueError(
                f"CPI_CYCLE_TIMEOUT must be positive, got {self.cycle_timeout}"
            )
        if self.alignment not in ALIGNMENT_MODES:
            raise ValueError(
                f"CPI_ALIGNMENT must be one of {', '.join(ALIGNMENT_MODES)}, "
                f"got {self.alignment!r}"
            )

    def has_api_key(self) -> bool:
        """Check if a BLS registration key is configured."""
        return bool(self.bls_api_key)


def validate_start_year(year: int) -> None:
    """Raise ValueError unless year is within the published CPI history."""
    current = date.today().year
    if not EARLIEST_START_YEAR <= year <= current:
        raise ValueError(
            f"Start year must be between {EARLIEST_START_YEAR} and {current}, got {year}"
        )
