# =============================================================================
# FOREX JOURNAL FEEDS - CALENDAR SERVICE
# =============================================================================
#
# Entry point for the calendar page and widgets.
#
# DATA FLOW:
#   UI -> CalendarService.get_calendar(timeframe)
#      -> AcquisitionClient("calendar")     cache / quota / fallback
#      -> ForexCalendarSource | DemoCalendarSource
#
# Cache keys: "calendar:<timeframe>"
#
# =============================================================================

import logging
import threading
from datetime import date, datetime
from typing import Any, Callable, List, Optional

from acquisition import AcquisitionClient, FeedConfig, FetchResult, UsageStats
from shared.config_loader import CalendarSettings, get_feeds_config
from shared.enums import DataSource, Timeframe

from .demo_source import DemoCalendarSource
from .http_source import CalendarQuery, ForexCalendarSource
from .models import NewsArticle, build_fallback_events, build_placeholder_news

logger = logging.getLogger(__name__)

KEY_PREFIX = "calendar:"


def calendar_key(timeframe: str) -> str:
    return f"{KEY_PREFIX}{timeframe}"


def build_calendar_upstream(settings: CalendarSettings) -> Callable[[Any], Any]:
    """Pick the upstream implementation named in the settings."""
    if settings.upstream == "http":
        return ForexCalendarSource(
            base_url=settings.base_url,
            endpoint=settings.endpoint,
            timeout=settings.timeout_seconds,
        )
    return DemoCalendarSource()


class CalendarService:
    """Economic calendar access with caching, daily quota and fallback."""

    def __init__(
        self,
        settings: Optional[CalendarSettings] = None,
        upstream: Optional[Callable[[Any], Any]] = None,
        clock: Optional[Callable[[], float]] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Args:
            settings: Calendar settings (default: from config/feeds.yaml)
            upstream: Override for the upstream callable
            clock: Epoch-seconds clock for cache expiry
            today: Local-date provider for quota rollover
        """
        self.settings = settings or get_feeds_config().calendar
        feed_config = FeedConfig(
            name=DataSource.CALENDAR.value,
            ttl_ms=self.settings.ttl_ms,
            max_calls_per_day=self.settings.max_calls_per_day,
            fallback_payload=build_fallback_events(),
        )
        self._client = AcquisitionClient(
            upstream=upstream or build_calendar_upstream(self.settings),
            config=feed_config,
            clock=clock,
            today=today,
        )

    @property
    def client(self) -> AcquisitionClient:
        return self._client

    def get_calendar(self, timeframe: str = "all", clear_cache: bool = False) -> FetchResult:
        """
        Economic calendar events for a timeframe.

        Args:
            timeframe: all, today, yesterday, tomorrow or week
            clear_cache: Drop all cached calendars and force an upstream refresh

        Returns:
            FetchResult with a list of EconomicEvent as payload
        """
        timeframe = Timeframe.parse(timeframe).value
        if clear_cache:
            self._client.clear_cache()
            logger.info("Cache cleared for fresh data fetch")

        result = self._client.fetch(
            calendar_key(timeframe),
            force_refresh=clear_cache,
            params=CalendarQuery(timeframe=timeframe, clear_cache=clear_cache),
        )
        if result.degraded:
            logger.info(f"Calendar '{timeframe}' served degraded ({result.outcome.value})")
        return result

    def get_forex_news(self) -> List[NewsArticle]:
        """News panel content. The calendar upstream provides no news API."""
        return build_placeholder_news(datetime.now())

    def usage_stats(self) -> UsageStats:
        return self._client.usage_stats()

    def clear_cache(self) -> None:
        self._client.clear_cache()


# =============================================================================
# MODULE-LEVEL SERVICE
# =============================================================================

_calendar_service: Optional[CalendarService] = None
_service_lock = threading.Lock()


def get_calendar_service() -> CalendarService:
    """Get the global calendar service instance."""
    global _calendar_service
    with _service_lock:
        if _calendar_service is None:
            _calendar_service = CalendarService()
        return _calendar_service


def reset_calendar_service() -> None:
    """Drop the global instance. For testing and config reloads."""
    global _calendar_service
    with _service_lock:
        _calendar_service = None
