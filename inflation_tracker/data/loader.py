"""Load cycles: fetch all CPI series concurrently and publish one load state."""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait

from inflation_tracker.config import SERIES, Settings, validate_start_year
from inflation_tracker.data.bls_fetcher import BlsFetcher
from inflation_tracker.data.parser import parse_bls_series
from inflation_tracker.indicators.alignment import build_chart_rows
from inflation_tracker.indicators.calculator import derive_metrics
from inflation_tracker.models import ChartRow, CpiData, DerivedMetrics, LoadState, Series


logger = logging.getLogger(__name__)

FetchFn = Callable[[str, int], dict]
Listener = Callable[[LoadState], None]

# Order of the fan-out; CpiData field names in lower case
SERIES_KEYS = ("HEADLINE_NSA", "HEADLINE_SA", "CORE_SA")

SUPERSEDED = "Load cycle superseded"

# How often a running cycle checks whether a newer one replaced it
POLL_INTERVAL = 0.1


class CpiLoader:
    """
    Owns the single observable LoadState.

    Every trigger (start year change or reload) begins a new load cycle with
    a fresh epoch and publishes Loading. The cycle fetches the three series
    concurrently and publishes Ready only if all of them were fetched, Error
    otherwise. A cycle's result is committed only while its epoch is still
    the current one, so a superseded cycle can never overwrite newer state.

    Cycles run one at a time on a background worker. Listeners are called
    in commit order and never receive a state older than one they were
    already sent; they must not block waiting on another load.
    """

    def __init__(
        self,
        fetch: FetchFn | None = None,
        start_year: int | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._owns_fetcher = fetch is None
        self._fetch: FetchFn = fetch or BlsFetcher(self.settings)

        self._start_year = self.settings.start_year if start_year is None else start_year
        validate_start_year(self._start_year)

        self._lock = threading.Lock()
        # Held across commit and delivery so listeners see states in order
        self._delivery = threading.RLock()
        self._epoch = 0
        self._state = LoadState.idle()
        self._future: Future | None = None
        self._listeners: list[Listener] = []
        self._closed = False
        self._cycles = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cpi-cycle")

    def close(self) -> None:
        """Stop background cycles and close the fetcher if we created it."""
        with self._delivery:
            with self._lock:
                self._closed = True
            self._cycles.shutdown(wait=False, cancel_futures=True)
        if self._owns_fetcher and isinstance(self._fetch, BlsFetcher):
            self._fetch.close()

    def __enter__(self) -> "CpiLoader":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # =========================================================================
    # Consumer surface
    # =========================================================================

    @property
    def state(self) -> LoadState:
        with self._lock:
            return self._state

    @property
    def start_year(self) -> int:
        with self._lock:
            return self._start_year

    @property
    def metrics(self) -> DerivedMetrics | None:
        """Derived metrics of the current Ready state, else None."""
        state = self.state
        return derive_metrics(state.data) if state.is_ready else None

    @property
    def chart_rows(self) -> list[ChartRow]:
        """Chart table of the current Ready state, else empty."""
        state = self.state
        if not state.is_ready:
            return []
        return build_chart_rows(state.data, by=self.settings.alignment)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener with every committed state.

        Ready and Error states are delivered from the cycle's worker thread.

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def set_start_year(self, year: int) -> Future:
        """
        Load from a new start year.

        Unchanged year while a cycle for it is loading or ready is a no-op
        that returns that cycle's future.
        """
        validate_start_year(year)
        with self._lock:
            if (
                year == self._start_year
                and self._future is not None
                and (self._state.is_loading or self._state.is_ready)
            ):
                return self._future
        return self._begin(year)

    def reload(self) -> Future:
        """Start a new cycle for the current start year."""
        return self._begin(self.start_year)

    def load(self, start_year: int | None = None) -> LoadState:
        """
        Run a cycle and block until it settles.

        Returns the state this cycle produced. If another trigger superseded
        it meanwhile, that state was never committed: it is the "Load cycle
        superseded" error and `state` belongs to the newer cycle.
        """
        if start_year is not None and start_year != self.start_year:
            return self.set_start_year(start_year).result()
        return self.reload().result()

    # =========================================================================
    # Cycle
    # =========================================================================

    def _begin(self, start_year: int) -> Future:
        with self._delivery:
            with self._lock:
                if self._closed:
                    raise RuntimeError("CpiLoader is closed")
                self._epoch += 1
                epoch = self._epoch
                self._start_year = start_year
                self._state = LoadState.loading(epoch)
                self._future = None

            # A queued earlier cycle still runs and resolves as superseded
            future = self._cycles.submit(self._run_cycle, epoch, start_year)
            with self._lock:
                if self._epoch == epoch:
                    self._future = future

            self._notify(LoadState.loading(epoch))
        return future

    def _is_current(self, epoch: int) -> bool:
        with self._lock:
            return epoch == self._epoch

    def _run_cycle(self, epoch: int, start_year: int) -> LoadState:
        if not self._is_current(epoch):
            logger.debug(f"Skipping superseded cycle {epoch}")
            return LoadState.failed(epoch, SUPERSEDED)

        logger.info(f"Loading CPI series from {start_year} (cycle {epoch})")
        state = self._collect(epoch, start_year)
        self._commit(state)
        return state

    def _fetch_and_parse(self, series_id: str, start_year: int) -> Series:
        payload = self._fetch(series_id, start_year)
        series = parse_bls_series(payload)
        if not series:
            logger.warning(f"  {series_id}: no usable observations")
        else:
            logger.info(f"  {series_id}: {len(series)} observations")
        return series

    def _collect(self, epoch: int, start_year: int) -> LoadState:
        """Fan out one fetch per series and join them, all or nothing."""
        timeout = self.settings.cycle_timeout
        pool = ThreadPoolExecutor(
            max_workers=len(SERIES_KEYS), thread_name_prefix=f"cpi-fetch-{epoch}"
        )
        try:
            futures = {
                key: pool.submit(self._fetch_and_parse, SERIES[key], start_year)
                for key in SERIES_KEYS
            }
            pending = set(futures.values())
            waited = 0.0
            while pending:
                step = POLL_INTERVAL if timeout is None else min(POLL_INTERVAL, max(timeout - waited, 0.0))
                done, pending = wait(pending, timeout=step, return_when=FIRST_EXCEPTION)
                waited += step
                if any(f.exception() is not None for f in done):
                    break
                if not self._is_current(epoch):
                    logger.debug(f"Cycle {epoch} superseded while fetching")
                    return LoadState.failed(epoch, SUPERSEDED)
                if pending and timeout is not None and waited >= timeout:
                    break

            for key, future in futures.items():
                if future.done() and future.exception() is not None:
                    error = future.exception()
                    message = str(error) or type(error).__name__
                    logger.error(f"Load cycle {epoch} failed on {SERIES[key]}: {message}")
                    return LoadState.failed(epoch, message)

            if pending:
                logger.error(f"Load cycle {epoch} timed out after {timeout}s")
                return LoadState.failed(epoch, f"BLS fetch timed out after {timeout}s")

            parsed = {key.lower(): future.result() for key, future in futures.items()}
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        return LoadState.ready(epoch, CpiData(start_year=start_year, **parsed))

    def _commit(self, state: LoadState) -> bool:
        with self._delivery:
            with self._lock:
                if state.epoch != self._epoch:
                    logger.debug(f"Discarding result of superseded cycle {state.epoch}")
                    return False
                self._state = state
            self._notify(state)
        return True

    def _notify(self, state: LoadState) -> None:
        """Deliver state to each listener while it is still the current epoch."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            # A listener may itself trigger a newer cycle
            if not self._is_current(state.epoch):
                logger.debug(f"Stopped delivering stale state of cycle {state.epoch}")
                return
            try:
                listener(state)
            except Exception as e:
                logger.error(f"Load state listener failed: {e}")


def main() -> None:
    """CLI entry point: load once and print the headline figures."""
    import argparse
    import json
    import sys

    from inflation_tracker.config import ALIGNMENT_MODES, SERIES_TITLES
    from inflation_tracker.indicators.alignment import chart_frame
    from inflation_tracker.indicators.release import release_countdown
    from inflation_tracker.ui.formatting import (
        format_countdown,
        format_month,
        format_pct,
    )

    parser = argparse.ArgumentParser(description="U.S. CPI inflation tracker (BLS data)")
    parser.add_argument("--start-year", type=int, help="First year of data to fetch")
    parser.add_argument(
        "--align",
        choices=ALIGNMENT_MODES,
        help="Match chart rows by position (default) or calendar month",
    )
    parser.add_argument(
        "--output", type=str, help="Write chart rows to this file (.csv, otherwise JSON)"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        settings = Settings()
        if args.start_year is not None:
            settings.start_year = args.start_year
        if args.align:
            settings.alignment = args.align
        settings.validate()

        with CpiLoader(settings=settings) as loader:
            state = loader.load()
            if state.is_error:
                print(f"Failed to load BLS data: {state.error}")
                sys.exit(1)

            metrics = loader.metrics
            rows = loader.chart_rows

        print("\nU.S. Inflation Tracker")
        print("-" * 40)
        for label, value, key in (
            ("YoY", metrics.headline_yoy, "HEADLINE_NSA"),
            ("MoM", metrics.headline_mom, "HEADLINE_SA"),
            ("YoY", metrics.core_yoy, "CORE_SA"),
            ("MoM", metrics.core_mom, "CORE_SA"),
        ):
            print(f"  {SERIES_TITLES[key]:20} {label} {format_pct(value):>8}")
        print(f"\nLatest month: {format_month(metrics.last_date)}")
        countdown = release_countdown(settings.next_release)
        print(f"Next release: {settings.next_release} ({format_countdown(countdown)})")

        if args.output:
            if args.output.endswith(".csv"):
                chart_frame(rows).to_csv(args.output)
            else:
                with open(args.output, "w") as f:
                    json.dump([row.to_dict() for row in rows], f, indent=2)
            print(f"Saved {len(rows)} months to {args.output}")

    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
