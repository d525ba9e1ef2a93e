"""Configuration."""

from .settings import (
    ALIGNMENT_MODES,
    BLS_BASE_URL,
    SERIES,
    SERIES_TITLES,
    Settings,
    validate_start_year,
)

__all__ = [
    "ALIGNMENT_MODES",
    "BLS_BASE_URL",
    "SERIES",
    "SERIES_TITLES",
    "Settings",
    "validate_start_year",
]
