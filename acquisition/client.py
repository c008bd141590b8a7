# =============================================================================
# FOREX JOURNAL FEEDS - ACQUISITION CLIENT
# =============================================================================
#
# The only entry point callers use. Wraps CacheStore, QuotaGovernor and
# FallbackPolicy around a single injected upstream function.
#
# FETCH POLICY:
#   1. Fresh cache entry (and no forced refresh) -> return it
#      (no quota consumed, no upstream call)
#   2. Quota left -> call upstream
#      a. success -> cache it, return it
#      b. failure -> degraded: cached entry (fresh or stale) or fallback
#      Every attempt consumes one quota unit, success or failure.
#   3. Quota exhausted -> degraded: cached entry or fallback
#
# NEVER RAISES:
# No upstream condition (timeout, malformed payload, 4xx/5xx) escapes
# fetch(). The `degraded` flag is the only signal to callers. Only an
# invalid ttl_ms argument raises (ConfigurationError), before any state change.
#
# CONCURRENCY:
# One lock per client guards cache and quota. It is taken for the
# read/decide step and for the write step, NEVER across the upstream call.
# Concurrent fetches for the same key share one in-flight upstream call.
#
# =============================================================================

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional

from .cache_store import CacheStore
from .config import FeedConfig
from .exceptions import ConfigurationError
from .fallback_policy import FallbackPolicy
from .quota_governor import QuotaGovernor

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================


class FetchOutcome(Enum):
    """
    Where a fetch result came from.

    CACHE_HIT: Fresh cache entry, no upstream call.
    UPSTREAM: Fresh upstream result.
    STALE_CACHE: Degraded - last cached entry (quota exhausted or upstream failed).
    FALLBACK: Degraded - static placeholder, nothing cached for the key.
    """
    CACHE_HIT = "CACHE_HIT"
    UPSTREAM = "UPSTREAM"
    STALE_CACHE = "STALE_CACHE"
    FALLBACK = "FALLBACK"


@dataclass(frozen=True)
class FetchResult:
    """
    Result of AcquisitionClient.fetch().

    Unpacks as a pair:
        payload, degraded = client.fetch(key)
    """
    payload: Any
    degraded: bool
    outcome: FetchOutcome

    def __iter__(self) -> Iterator[Any]:
        yield self.payload
        yield self.degraded

    @property
    def is_fallback(self) -> bool:
        return self.outcome == FetchOutcome.FALLBACK


@dataclass
class UsageStats:
    """Snapshot of a client's quota and cache usage."""
    name: str
    daily_call_count: int
    max_daily_calls: int
    remaining_calls: int
    cache_size: int
    last_reset_date: date
    cache_hits: int
    upstream_failures: int
    degraded_responses: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "name": self.name,
            "daily_call_count": self.daily_call_count,
            "max_daily_calls": self.max_daily_calls,
            "remaining_calls": self.remaining_calls,
            "cache_size": self.cache_size,
            "last_reset_date": self.last_reset_date.isoformat(),
            "cache_hits": self.cache_hits,
            "upstream_failures": self.upstream_failures,
            "degraded_responses": self.degraded_responses,
        }


# =============================================================================
# ACQUISITION CLIENT
# =============================================================================


class AcquisitionClient:
    """
    Quota-governed, TTL-cached wrapper around one upstream data source.

    Each logical source (calendar, signals) gets its OWN instance, so caches
    and quota budgets are never shared.
    """

    def __init__(
        self,
        upstream: Callable[[Any], Any],
        config: FeedConfig,
        clock: Optional[Callable[[], float]] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the client.

        Args:
            upstream: upstream(params) -> payload; raises on failure
            config: Validated feed configuration
            clock: Epoch-seconds clock for cache expiry (default time.time)
            today: Local-date provider for quota rollover (default date.today)
        """
        self._upstream = upstream
        self._config = config
        self._name = config.name

        self._lock = threading.Lock()
        self._cache = CacheStore(clock=clock)
        self._quota = QuotaGovernor(config.max_calls_per_day, today=today, name=self._name)
        self._fallback = FallbackPolicy(config.fallback_payload, name=self._name)
        self._inflight: Dict[str, Future] = {}

        self._cache_hits = 0
        self._upstream_failures = 0
        self._degraded_responses = 0

        logger.info(
            f"AcquisitionClient initialized | name={self._name} | "
            f"ttl_ms={config.ttl_ms} | max_calls_per_day={config.max_calls_per_day}"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> FeedConfig:
        return self._config

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def fetch(
        self,
        key: str,
        ttl_ms: Optional[int] = None,
        force_refresh: bool = False,
        params: Any = None,
    ) -> FetchResult:
        """
        Fetch data for a logical key.

        Args:
            key: Cache key, namespaced by source (e.g. "calendar:today")
            ttl_ms: Lifetime of a fresh result (default: configured ttl_ms)
            force_refresh: Skip the cache read and go upstream if quota allows
            params: Passed to upstream (default: the key itself)

        Returns:
            FetchResult; degraded=True when the payload is stale or placeholder

        Raises:
            ConfigurationError: ttl_ms is not a non-negative integer
                (checked before any cache, quota or upstream access)
        """
        if ttl_ms is None:
            ttl_ms = self._config.ttl_ms
        elif isinstance(ttl_ms, bool) or not isinstance(ttl_ms, int) or ttl_ms < 0:
            raise ConfigurationError(
                f"ttl_ms must be a non-negative integer, got {ttl_ms!r}", source=self._name
            )

        with self._lock:
            if not force_refresh:
                entry = self._cache.get(key)
                if entry is not None and self._cache.is_fresh(entry):
                    self._cache_hits += 1
                    logger.debug(f"{self._name}: cache hit for {key}")
                    return FetchResult(entry.payload, False, FetchOutcome.CACHE_HIT)

            pending = self._inflight.get(key)
            if pending is None:
                if not self._quota.can_call():
                    logger.warning(
                        f"{self._name}: daily call limit reached "
                        f"({self._quota.max_calls_per_day}), serving cached data for {key}"
                    )
                    return self._degraded_locked(key)

                # Reserve the unit now: the attempt counts whether it succeeds or not
                self._quota.record_call()
                pending = Future()
                self._inflight[key] = pending
                is_leader = True
            else:
                is_leader = False

        if not is_leader:
            logger.debug(f"{self._name}: joining in-flight fetch for {key}")
            return pending.result()

        result: Optional[FetchResult] = None
        try:
            result = self._refresh(key, ttl_ms, key if params is None else params)
        finally:
            with self._lock:
                self._inflight.pop(key, None)
                if result is None:
                    result = self._degraded_locked(key)
            pending.set_result(result)
        return result

    def clear_cache(self) -> None:
        """Drop every cached entry. Quota is untouched."""
        with self._lock:
            self._cache.clear()
        logger.info(f"{self._name}: cache cleared")

    def usage_stats(self) -> UsageStats:
        with self._lock:
            # Same day view for count, remaining and date, also after midnight
            call_count, reset_date = self._quota.snapshot()
            max_calls = self._quota.max_calls_per_day
            return UsageStats(
                name=self._name,
                daily_call_count=call_count,
                max_daily_calls=max_calls,
                remaining_calls=max(0, max_calls - call_count),
                cache_size=len(self._cache),
                last_reset_date=reset_date,
                cache_hits=self._cache_hits,
                upstream_failures=self._upstream_failures,
                degraded_responses=self._degraded_responses,
            )

    # -------------------------------------------------------------------------
    # INTERNALS
    # -------------------------------------------------------------------------

    def _refresh(self, key: str, ttl_ms: int, params: Any) -> FetchResult:
        logger.info(f"{self._name}: fetching {key} from upstream")
        try:
            payload = self._upstream(params)
        except Exception as e:
            with self._lock:
                self._upstream_failures += 1
                logger.warning(
                    f"{self._name}: upstream request failed for {key}: "
                    f"{type(e).__name__}: {e}"
                )
                return self._degraded_locked(key)

        with self._lock:
            self._cache.put(key, payload, ttl_ms)
        return FetchResult(payload, False, FetchOutcome.UPSTREAM)

    def _degraded_locked(self, key: str) -> FetchResult:
        """Most recent cache entry regardless of freshness, else fallback. Lock held."""
        self._degraded_responses += 1
        entry = self._cache.get(key)
        if entry is not None:
            return FetchResult(entry.payload, True, FetchOutcome.STALE_CACHE)
        logger.warning(f"{self._name}: no cached data for {key}, using fallback")
        return FetchResult(self._fallback.fallback(key), True, FetchOutcome.FALLBACK)
