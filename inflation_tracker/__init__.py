"""U.S. CPI inflation tracker built on the BLS Public API."""

__version__ = "0.1.0"
