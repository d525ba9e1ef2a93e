"""BLS Public API fetcher."""

import logging
import threading

import httpx

from inflation_tracker.config import Settings
from inflation_tracker.data.parser import bls_messages


logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A series could not be retrieved (non-success status or network fault)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BlsFetcher:
    """Fetches raw timeseries JSON from the BLS Public API."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._transport = transport
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client, shared by concurrent fetches."""
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(
                    timeout=self.settings.timeout, transport=self._transport
                )
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "BlsFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __call__(self, series_id: str, start_year: int) -> dict:
        return self.fetch_series(series_id, start_year)

    def fetch_series(self, series_id: str, start_year: int) -> dict:
        """
        Fetch one series starting at the given year.

        Args:
            series_id: BLS series ID
            start_year: First year of observations to request

        Returns:
            Decoded JSON response

        Raises:
            FetchError: on a non-success status, a network fault or a
                body that is not JSON
        """
        params: dict[str, str | int] = {"startyear": start_year}
        if self.settings.has_api_key():
            params["registrationkey"] = self.settings.bls_api_key

        logger.info(f"Fetching {series_id} from {start_year}...")
        try:
            response = self.client.get(
                f"{self.settings.base_url}/{series_id}", params=params
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"HTTP error fetching {series_id}: {status}")
            raise FetchError(f"BLS fetch failed ({status})", status_code=status) from e
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {series_id}: {e}")
            raise FetchError(f"BLS fetch failed ({e})") from e

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(f"BLS returned invalid JSON for {series_id}") from e

        for message in bls_messages(data):
            logger.warning(f"  BLS: {message}")

        return data
