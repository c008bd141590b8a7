# =============================================================================
# FOREX JOURNAL FEEDS - SIGNAL SERVICE
# =============================================================================
#
# Trading signal widgets call get_signal(event).
#
# The signal feed has its OWN AcquisitionClient: cache, TTL and daily quota
# are independent of the calendar feed.
#
# Cache keys: "signal:<event id>:<actual>:<forecast>"
#   A new actual figure is a new key, so a release invalidates the signal.
#
# FALLBACK:
# The acquisition layer's fallback is static. When it is served, this
# service swaps in the rule-based signal for the event (still degraded).
#
# =============================================================================

import logging
import threading
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Optional

from acquisition import AcquisitionClient, FeedConfig, FetchResult, UsageStats
from calendar_feed.models import EconomicEvent
from shared.config_loader import SignalSettings, get_feeds_config
from shared.enums import DataSource

from .generator import MockSignalGenerator
from .models import build_fallback_signal
from .rules import basic_signal

logger = logging.getLogger(__name__)


def signal_key(event: EconomicEvent) -> str:
    return f"signal:{event.id}:{event.actual}:{event.forecast}"


class SignalService:
    """Trading signals per economic event, with caching, quota and fallback."""

    def __init__(
        self,
        settings: Optional[SignalSettings] = None,
        upstream: Optional[Callable[[Any], Any]] = None,
        clock: Optional[Callable[[], float]] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.settings = settings or get_feeds_config().signals
        feed_config = FeedConfig(
            name=DataSource.SIGNALS.value,
            ttl_ms=self.settings.ttl_ms,
            max_calls_per_day=self.settings.max_calls_per_day,
            fallback_payload=build_fallback_signal(),
        )
        self._client = AcquisitionClient(
            upstream=upstream or MockSignalGenerator(),
            config=feed_config,
            clock=clock,
            today=today,
        )

    @property
    def client(self) -> AcquisitionClient:
        return self._client

    def get_signal(self, event: EconomicEvent, force_refresh: bool = False) -> FetchResult:
        """
        Trading signal for an economic event.

        Returns:
            FetchResult with a TradingSignal as payload
        """
        result = self._client.fetch(signal_key(event), force_refresh=force_refresh, params=event)
        if result.is_fallback:
            logger.info(f"No signal available for {event.id}, using rule-based signal")
            return replace(result, payload=basic_signal(event))
        return result

    def usage_stats(self) -> UsageStats:
        return self._client.usage_stats()

    def clear_cache(self) -> None:
        self._client.clear_cache()


# =============================================================================
# MODULE-LEVEL SERVICE
# =============================================================================

_signal_service: Optional[SignalService] = None
_service_lock = threading.Lock()


def get_signal_service() -> SignalService:
    """Get the global signal service instance."""
    global _signal_service
    with _service_lock:
        if _signal_service is None:
            _signal_service = SignalService()
        return _signal_service


def reset_signal_service() -> None:
    """Drop the global instance. For testing and config reloads."""
    global _signal_service
    with _service_lock:
        _signal_service = None
