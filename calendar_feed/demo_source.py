# =============================================================================
# FOREX JOURNAL FEEDS - DEMO CALENDAR UPSTREAM
# =============================================================================
#
# Offline generator of realistic economic calendar data (Forex Factory
# style). Used when no calendar API is reachable, and in tests.
#
# GENERATION:
# - Every day from 60 days back to 90 days ahead
# - Weekdays: 2-6 events, weekends: 1-2 events
# - Event times between 07:00 and 17:30, on the hour or half hour
# - Past events carry an actual figure and an impact; future ones are pending
# - Two "breaking news" events within the last six hours
#
# Seed the random generator for reproducible output.
#
# =============================================================================

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional

from shared.enums import Importance, Impact

from .http_source import CalendarQuery
from .models import EconomicEvent
from .timeframe import filter_by_timeframe, time_until

logger = logging.getLogger(__name__)

DAYS_BACK = 60
DAYS_AHEAD = 90


@dataclass(frozen=True)
class EventTemplate:
    title: str
    country: str
    currency: str
    importance: Importance
    description: str
    category: str
    unit: str
    frequency: str


EVENT_TEMPLATES: List[EventTemplate] = [
    EventTemplate("US Non-Farm Payrolls", "United States", "USD", Importance.HIGH,
                  "Monthly change in the number of employed people during the previous month",
                  "employment", "thousands", "monthly"),
    EventTemplate("US Unemployment Rate", "United States", "USD", Importance.HIGH,
                  "Percentage of the total work force that is unemployed",
                  "employment", "percentage", "monthly"),
    EventTemplate("US Consumer Price Index", "United States", "USD", Importance.HIGH,
                  "Monthly change in the price of goods and services purchased by consumers",
                  "inflation", "percentage", "monthly"),
    EventTemplate("Eurozone Manufacturing PMI", "European Union", "EUR", Importance.MEDIUM,
                  "Level of a diffusion index based on surveyed purchasing managers",
                  "manufacturing", "index", "monthly"),
    EventTemplate("UK GDP Growth Rate", "United Kingdom", "GBP", Importance.HIGH,
                  "Quarterly change in the inflation-adjusted value of all goods and services",
                  "gdp", "percentage", "quarterly"),
    EventTemplate("Fed Interest Rate Decision", "United States", "USD", Importance.HIGH,
                  "Federal Reserve interest rate decision",
                  "central-bank", "percentage", "irregular"),
    EventTemplate("ECB Interest Rate Decision", "European Union", "EUR", Importance.HIGH,
                  "European Central Bank interest rate decision",
                  "central-bank", "percentage", "irregular"),
    EventTemplate("US Initial Jobless Claims", "United States", "USD", Importance.MEDIUM,
                  "Number of individuals filing for unemployment benefits for the first time",
                  "employment", "thousands", "weekly"),
    EventTemplate("German Manufacturing PMI", "Germany", "EUR", Importance.MEDIUM,
                  "Level of a diffusion index based on surveyed purchasing managers",
                  "manufacturing", "index", "monthly"),
    EventTemplate("Japanese Core CPI", "Japan", "JPY", Importance.MEDIUM,
                  "Change in the price of goods and services purchased by consumers, excluding food and energy",
                  "inflation", "percentage", "monthly"),
]

BREAKING_NEWS_TEMPLATES = [
    ("Flash: US Dollar Strengthens on Fed Comments", "United States", "USD", Importance.HIGH,
     "central-bank", "Breaking: Federal Reserve officials signal potential policy changes"),
    ("Breaking: ECB Emergency Meeting Called", "European Union", "EUR", Importance.HIGH,
     "central-bank", "European Central Bank calls emergency meeting amid market volatility"),
    ("Market Alert: Geopolitical Tensions Impact Safe Havens", "Global", "JPY", Importance.MEDIUM,
     "other", "Global market tensions driving flows to safe-haven currencies"),
]


class DemoCalendarSource:
    """
    Demo upstream for the calendar feed.

    Callable as upstream(query) -> List[EconomicEvent], like ForexCalendarSource.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        now: Optional[Callable[[], datetime]] = None,
        breaking_news_count: int = 2,
    ):
        self._rng = rng or random.Random()
        self._now = now or datetime.now
        self.breaking_news_count = breaking_news_count

    def __call__(self, query: Any) -> List[EconomicEvent]:
        if not isinstance(query, CalendarQuery):
            query = CalendarQuery(timeframe=str(query))
        now = self._now()
        events = self.generate(now)
        filtered = filter_by_timeframe(events, query.timeframe, now=now)
        logger.info(
            f"Generated {len(events)} demo events, {len(filtered)} in timeframe '{query.timeframe}'"
        )
        return filtered

    def generate(self, now: datetime) -> List[EconomicEvent]:
        """All demo events for the window around now, sorted by time."""
        events: List[EconomicEvent] = []
        for day_offset in range(-DAYS_BACK, DAYS_AHEAD + 1):
            day = now + timedelta(days=day_offset)
            is_weekend = day.weekday() >= 5
            events.extend(self._events_for_day(day, day_offset, is_weekend, now))

        events.extend(self._breaking_news(now))
        events.sort(key=lambda e: e.time)
        return events

    # -------------------------------------------------------------------------
    # GENERATION
    # -------------------------------------------------------------------------

    def _events_for_day(
        self, day: datetime, day_offset: int, is_weekend: bool, now: datetime
    ) -> List[EconomicEvent]:
        rng = self._rng
        count = rng.randint(1, 2) if is_weekend else rng.randint(2, 6)

        events = []
        for i in range(count):
            template = rng.choice(EVENT_TEMPLATES)
            event_time = day.replace(
                hour=rng.randint(7, 17),
                minute=0 if rng.random() < 0.5 else 30,
                second=0,
                microsecond=0,
            )
            is_past_or_today = day_offset <= 0

            events.append(EconomicEvent(
                id=f"event_{day.date().isoformat()}_{i}_{rng.getrandbits(32):08x}",
                title=template.title,
                country=template.country,
                currency=template.currency,
                time=event_time,
                importance=template.importance,
                forecast=self._forecast(template, day_offset),
                previous=self._figure(template),
                actual=self._figure(template, actual=True) if is_past_or_today else "",
                description=template.description,
                category=template.category,
                impact=self._impact() if is_past_or_today else Impact.PENDING,
                source="Forex Factory",
                unit=template.unit,
                frequency=template.frequency,
                volatility=template.importance,
                is_live=day_offset == 0 and abs((event_time - now).total_seconds()) < 3600,
                time_until=time_until(event_time, now),
            ))
        return events

    def _breaking_news(self, now: datetime) -> List[EconomicEvent]:
        events = []
        for i in range(self.breaking_news_count):
            title, country, currency, importance, category, description = self._rng.choice(
                BREAKING_NEWS_TEMPLATES
            )
            event_time = now - timedelta(hours=self._rng.randint(0, 5))
            events.append(EconomicEvent(
                id=f"breaking_{int(now.timestamp() * 1000)}_{i}",
                title=title,
                country=country,
                currency=currency,
                time=event_time,
                importance=importance,
                actual="Breaking",
                description=description,
                category=category,
                impact=Impact.POSITIVE,
                source="Market Flash",
                frequency="irregular",
                volatility=Importance.HIGH,
                is_live=True,
                time_until=time_until(event_time, now),
            ))
        return events

    def _forecast(self, template: EventTemplate, day_offset: int) -> str:
        # Only old events lose their forecast
        if day_offset < -1:
            return ""
        return self._figure(template)

    def _figure(self, template: EventTemplate, actual: bool = False) -> str:
        rng = self._rng
        category = template.category
        if category == "employment":
            if template.unit == "thousands":
                low, span = (130, 120) if actual else (150, 100)
                return f"{rng.randrange(low, low + span)}K"
            return f"{rng.uniform(3, 5):.1f}%"
        if category == "inflation":
            return f"{rng.uniform(2, 4):.1f}%"
        if category == "manufacturing":
            return f"{rng.uniform(45, 55):.1f}"
        if category == "gdp":
            return f"{rng.uniform(1, 3):.1f}%"
        if category == "central-bank":
            return f"{rng.uniform(4, 6):.2f}%"
        return f"{rng.uniform(1, 6):.1f}%"

    def _impact(self) -> Impact:
        roll = self._rng.random()
        if roll < 0.3:
            return Impact.POSITIVE
        if roll < 0.6:
            return Impact.NEGATIVE
        return Impact.NEUTRAL
