# =============================================================================
# FOREX JOURNAL FEEDS - ECONOMIC CALENDAR
# Module: calendar_feed/__init__.py
# Purpose: Economic calendar events for the journal's news and calendar views
# =============================================================================
#
# READ-ONLY: fetches and filters calendar data, never writes upstream.
#
# Upstreams:
# - ForexCalendarSource  the journal's /api/forex-factory route (requests)
# - DemoCalendarSource   offline generator with the same output shape
#
# =============================================================================

from .models import EconomicEvent, NewsArticle, build_fallback_events
from .timeframe import filter_by_timeframe, time_until
from .http_source import CalendarQuery, ForexCalendarSource
from .demo_source import DemoCalendarSource
from .service import CalendarService, get_calendar_service, reset_calendar_service

__all__ = [
    "EconomicEvent",
    "NewsArticle",
    "build_fallback_events",
    "filter_by_timeframe",
    "time_until",
    "CalendarQuery",
    "ForexCalendarSource",
    "DemoCalendarSource",
    "CalendarService",
    "get_calendar_service",
    "reset_calendar_service",
]
