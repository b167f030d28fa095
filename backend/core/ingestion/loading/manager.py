# loading/manager.py
"""
Data loading manager: cache, loading states and resilient fetching.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, NamedTuple, Optional, Tuple

from ..csv_parser import parse_csv, ParseOptions, ParseResult
from .errors import TransportError, ExhaustedRetriesError
from .fetcher import CsvFetcher
from .models import LoadingResult, LoadingState
from .state_store import LoadingStateStore, Listener, Subscription

logger = logging.getLogger(__name__)

RowParser = Callable[[ParseResult], Any]

CACHE_HIT_WARNING = "Data loaded from cache"


class DataLoadingManager:
    """
    Owns the data cache and the loading state store of one application.

    Concurrent ``load`` calls for the same cache key share a single
    in-flight operation.
    """

    def __init__(
        self,
        fetcher: Optional[CsvFetcher] = None,
        base_url: str = "",
        default_retries: int = 3,
        default_timeout_ms: int = 30000,
        backoff_ms: int = 1000,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        self.fetcher = fetcher or CsvFetcher(base_url=base_url)
        self.states = LoadingStateStore()
        self.default_retries = default_retries
        self.default_timeout_ms = default_timeout_ms
        self.backoff_ms = backoff_ms
        self._sleep = sleep
        self._cache: Dict[str, Any] = {}
        self._in_flight: Dict[str, "_InFlight"] = {}
        # Bumped by clear_all_caches / clear_cache so late loads are not kept
        self._generation = 0
        self._epochs: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_loading_state(self, source: str) -> LoadingState:
        return self.states.get_state(source)

    def subscribe(self, source: str, listener: Listener) -> Subscription:
        return self.states.subscribe(source, listener)

    def get_all_loading_states(self) -> Dict[str, LoadingState]:
        return self.states.get_all_states()

    def is_data_loaded(self, source: str) -> bool:
        state = self.states.get_state(source)
        return state.is_loaded and not state.error

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def get_cached_data(self, cache_key: str) -> Optional[Any]:
        return self._cache.get(cache_key)

    def clear_cache(self, source: str, cache_key: Optional[str] = None) -> None:
        """Drop the cached data of ``source`` and reset it to idle."""
        cache_key = cache_key or source
        self._cache.pop(cache_key, None)
        self._epochs[cache_key] = self._epochs.get(cache_key, 0) + 1
        # A running load keeps going for its callers but no longer counts as shared
        self._in_flight.pop(cache_key, None)
        self.states.reset(source)
        logger.info(f"Cache cleared for {source}")

    def clear_all_caches(self) -> None:
        self._cache.clear()
        self._generation += 1
        self._in_flight.clear()
        self.states.clear()
        logger.info("All data caches cleared")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(
        self,
        source: str,
        url: str,
        row_parser: RowParser,
        skip_header_lines: int = 0,
        cache_key: Optional[str] = None,
        retries: Optional[int] = None,
        timeout_ms: Optional[int] = None,
        empty_factory: Callable[[], Any] = dict
    ) -> LoadingResult:
        """
        Load a CSV data source.

        Serves from cache when possible, otherwise fetches with up to
        ``retries`` attempts and linear backoff, parses, hands the parse
        result to ``row_parser`` and caches what it returns. Never raises
        for load failures: check ``errors`` on the result.

        Args:
            source: Data source name, key of the loading state
            url: CSV location (relative to the fetcher base URL or absolute)
            row_parser: Builds the dataset from the ParseResult
            skip_header_lines: Lines before the header row
            cache_key: Cache entry name, defaults to ``source``
            retries: Maximum attempts
            timeout_ms: Deadline per attempt
            empty_factory: Builds the data returned when the load fails

        Returns:
            LoadingResult
        """
        cache_key = cache_key or source

        if cache_key in self._cache:
            logger.debug(f"Serving {source} from cache ({cache_key})")
            self.states.set_state(
                source, is_loading=False, is_loaded=True, error=None,
                last_updated=datetime.now()
            )
            return LoadingResult(data=self._cache[cache_key], warnings=[CACHE_HIT_WARNING])

        joined = self._in_flight.get(cache_key)
        if joined is None:
            in_flight = asyncio.ensure_future(self._load_with_retries(
                source, url, row_parser, skip_header_lines, cache_key,
                self.default_retries if retries is None else retries,
                self.default_timeout_ms if timeout_ms is None else timeout_ms,
                empty_factory, self._token(cache_key)
            ))
            self._in_flight[cache_key] = _InFlight(source, in_flight)
            in_flight.add_done_callback(lambda done: self._forget_in_flight(cache_key, done))
            # One caller giving up must not cancel the shared operation
            return await asyncio.shield(in_flight)

        if joined.source == source:
            return await asyncio.shield(joined.future)

        # Another source shares the cache key: track its state alongside
        logger.info(f"Joining in-flight load of {cache_key} (started by {joined.source}) for {source}")
        token = self._token(cache_key)
        self.states.set_state(
            source, is_loading=True, is_loaded=False, error=None, last_updated=None
        )
        result = await asyncio.shield(joined.future)

        if self._token(cache_key) == token:
            origin = self.states.get_state(joined.source)
            self.states.set_state(
                source, is_loading=False, is_loaded=origin.is_loaded,
                error=origin.error, last_updated=origin.last_updated
            )
        return result

    def _token(self, cache_key: str) -> Tuple[int, int]:
        """Changes whenever the cache entry is cleared."""
        return self._generation, self._epochs.get(cache_key, 0)

    def _forget_in_flight(self, cache_key: str, done: asyncio.Future) -> None:
        entry = self._in_flight.get(cache_key)
        if entry is not None and entry.future is done:
            del self._in_flight[cache_key]

    def _settle(self, source: str, cache_key: str, token: Tuple[int, int], **changes) -> None:
        """Final state update, dropped when the cache was cleared meanwhile."""
        if self._token(cache_key) != token:
            logger.info(f"Cache for {cache_key} cleared while {source} was loading, result not kept")
            return
        self.states.set_state(source, is_loading=False, **changes)

    async def _load_with_retries(
        self,
        source: str,
        url: str,
        row_parser: RowParser,
        skip_header_lines: int,
        cache_key: str,
        retries: int,
        timeout_ms: int,
        empty_factory: Callable[[], Any],
        token: Tuple[int, int]
    ) -> LoadingResult:
        self.states.set_state(
            source, is_loading=True, is_loaded=False, error=None, last_updated=None
        )

        try:
            return await self._attempt_all(
                source, url, row_parser, skip_header_lines, cache_key,
                retries, timeout_ms, empty_factory, token
            )
        except Exception as e:
            message = f"Failed to load {source}: {type(e).__name__}: {e}"
            logger.error(message, exc_info=True)
            self._settle(source, cache_key, token, is_loaded=False, error=str(e), last_updated=None)
            return LoadingResult(data=empty_factory(), errors=[message])

    async def _attempt_all(
        self,
        source: str,
        url: str,
        row_parser: RowParser,
        skip_header_lines: int,
        cache_key: str,
        retries: int,
        timeout_ms: int,
        empty_factory: Callable[[], Any],
        token: Tuple[int, int]
    ) -> LoadingResult:
        attempts = max(1, retries)
        last_error = ""

        for attempt in range(1, attempts + 1):
            logger.info(f"Loading {source} (attempt {attempt}/{attempts})...")

            try:
                text = await self.fetcher.fetch_text(url, timeout_ms)
            except TransportError as e:
                last_error = str(e)
                if attempt == attempts:
                    logger.error(f"Error loading {source} (attempt {attempt}/{attempts}): {last_error}")
                    break
                logger.warning(f"Error loading {source} (attempt {attempt}/{attempts}): {last_error}")
                await self._sleep(self.backoff_ms * attempt / 1000)
                continue

            return self._complete(
                source, text, row_parser, skip_header_lines, cache_key, empty_factory, token
            )

        exhausted = ExhaustedRetriesError(source, attempts, last_error)
        self._settle(source, cache_key, token, is_loaded=False, error=last_error, last_updated=None)
        return LoadingResult(data=empty_factory(), errors=[str(exhausted)])

    def _complete(
        self,
        source: str,
        text: str,
        row_parser: RowParser,
        skip_header_lines: int,
        cache_key: str,
        empty_factory: Callable[[], Any],
        token: Tuple[int, int]
    ) -> LoadingResult:
        """Parse fetched text, build the dataset and cache it."""
        errors = []
        warnings = []

        parse_result = parse_csv(text, ParseOptions(
            skip_header_lines=skip_header_lines,
            skip_empty_lines=True,
            trim_fields=True
        ))

        if parse_result.errors:
            errors.extend(parse_result.errors)
            warnings.append(f"CSV parsing completed with {len(parse_result.errors)} errors")
            logger.warning(f"{source}: CSV parsing completed with {len(parse_result.errors)} errors")

        try:
            data = row_parser(parse_result)
        except Exception as e:
            message = f"Failed to process {source}: {e}"
            logger.error(message, exc_info=True)
            self._settle(source, cache_key, token, is_loaded=False, error=str(e), last_updated=None)
            return LoadingResult(data=empty_factory(), errors=errors + [message], warnings=warnings)

        if self._token(cache_key) == token:
            self._cache[cache_key] = data
        self._settle(source, cache_key, token, is_loaded=True, error=None, last_updated=datetime.now())
        logger.info(f"{source} loaded successfully ({len(parse_result.rows)} rows)")

        return LoadingResult(data=data, errors=errors, warnings=warnings)

    async def aclose(self) -> None:
        await self.fetcher.aclose()


class _InFlight(NamedTuple):
    source: str
    future: asyncio.Future
