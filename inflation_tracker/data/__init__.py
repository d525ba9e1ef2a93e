"""Data fetching, parsing and load orchestration."""

from .bls_fetcher import BlsFetcher, FetchError
from .loader import CpiLoader
from .parser import parse_bls_series

__all__ = ["BlsFetcher", "CpiLoader", "FetchError", "parse_bls_series"]
