# =============================================================================
# UNIT TESTS - CALENDAR TIMEFRAMES AND EVENT PARSING
# =============================================================================

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from calendar_feed.models import EconomicEvent, parse_event_time
from calendar_feed.timeframe import filter_by_timeframe, time_until
from shared.enums import Importance, Impact, Timeframe

NOW = datetime(2024, 3, 14, 12, 0)


def make_event(event_id: str, when: datetime) -> EconomicEvent:
    return EconomicEvent(
        id=event_id,
        title="US Consumer Price Index",
        country="United States",
        currency="USD",
        time=when,
        importance=Importance.HIGH,
        description="",
        category="inflation",
        impact=Impact.PENDING,
        source="Forex Factory",
        frequency="monthly",
        volatility=Importance.HIGH,
    )


@pytest.fixture
def events():
    return [
        make_event("yesterday", datetime(2024, 3, 13, 8, 30)),
        make_event("today-early", datetime(2024, 3, 14, 0, 0)),
        make_event("today-late", datetime(2024, 3, 14, 23, 59)),
        make_event("tomorrow", datetime(2024, 3, 15, 9, 0)),
        make_event("next-week", datetime(2024, 3, 21, 0, 0)),
        make_event("far", datetime(2024, 4, 30, 9, 0)),
    ]


class TestFilterByTimeframe:

    def test_today(self, events):
        ids = [e.id for e in filter_by_timeframe(events, "today", now=NOW)]
        assert ids == ["today-early", "today-late"]

    def test_yesterday(self, events):
        ids = [e.id for e in filter_by_timeframe(events, "yesterday", now=NOW)]
        assert ids == ["yesterday"]

    def test_tomorrow(self, events):
        ids = [e.id for e in filter_by_timeframe(events, Timeframe.TOMORROW, now=NOW)]
        assert ids == ["tomorrow"]

    def test_week_includes_midnight_seven_days_out(self, events):
        ids = [e.id for e in filter_by_timeframe(events, "week", now=NOW)]
        assert ids == ["today-early", "today-late", "tomorrow", "next-week"]

    @pytest.mark.parametrize("timeframe", ["all", "month", "", "ALL"])
    def test_unknown_means_all(self, events, timeframe):
        assert len(filter_by_timeframe(events, timeframe, now=NOW)) == len(events)

    def test_does_not_mutate_input(self, events):
        result = filter_by_timeframe(events, "all", now=NOW)
        result.clear()
        assert len(events) == 6


class TestTimeUntil:

    def test_past(self):
        assert time_until(NOW - timedelta(seconds=1), now=NOW) == "Past"

    def test_days_and_hours(self):
        assert time_until(NOW + timedelta(days=2, hours=3, minutes=5), now=NOW) == "2d 3h"

    def test_hours_and_minutes(self):
        assert time_until(NOW + timedelta(hours=4, minutes=15), now=NOW) == "4h 15m"

    def test_minutes(self):
        assert time_until(NOW + timedelta(minutes=12, seconds=30), now=NOW) == "12m"

    def test_now_is_zero_minutes(self):
        assert time_until(NOW, now=NOW) == "0m"


class TestEventParsing:

    def test_utc_timestamp_converted_to_local_naive(self):
        parsed = parse_event_time("2024-03-14T12:30:00.000Z")
        expected = datetime(2024, 3, 14, 12, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert parsed == expected
        assert parsed.tzinfo is None

    def test_naive_timestamp_kept(self):
        assert parse_event_time("2024-03-14T08:30:00") == datetime(2024, 3, 14, 8, 30)

    @pytest.mark.parametrize("value", [None, "", "next tuesday", 1710419400])
    def test_invalid_time_rejected(self, value):
        with pytest.raises(ValueError):
            parse_event_time(value)

    def test_from_dict_with_upstream_field_names(self):
        event = EconomicEvent.from_dict({
            "id": "event_2024-03-14_0_abc",
            "title": "UK GDP Growth Rate",
            "country": "United Kingdom",
            "currency": "GBP",
            "time": "2024-03-14T07:00:00",
            "importance": "high",
            "forecast": "1.2%",
            "previous": "0.9%",
            "actual": "",
            "description": "Quarterly change",
            "category": "gdp",
            "impact": "pending",
            "source": "Forex Factory",
            "frequency": "quarterly",
            "volatility": "high",
            "isLive": True,
            "timeUntil": "2h 0m",
        })

        assert event.importance == Importance.HIGH
        assert event.impact == Impact.PENDING
        assert event.is_live is True
        assert event.has_actual is False
        assert event.to_dict()["time"] == "2024-03-14T07:00:00"

    def test_from_dict_missing_fields(self):
        with pytest.raises(ValueError) as exc_info:
            EconomicEvent.from_dict({"id": "x", "title": "t"})
        assert "currency" in str(exc_info.value)
        assert "time" in str(exc_info.value)

    def test_from_dict_bad_enum(self):
        with pytest.raises(ValueError):
            EconomicEvent.from_dict({
                "id": "x", "title": "t", "currency": "USD",
                "time": "2024-03-14T07:00:00", "importance": "extreme",
            })
