# =============================================================================
# FOREX JOURNAL FEEDS - CALENDAR HTTP SOURCE TESTS
# =============================================================================
#
# Tests for the requests-based calendar upstream and its error mapping.
# The HTTP session is mocked; no network access.
#
# Test categories:
# 1. Request shape (URL, params, timeout)
# 2. Envelope validation -> MalformedResponseError
# 3. Transport failures -> TransientUpstreamError
# 4. Through the AcquisitionClient: failures become degraded results
#
# =============================================================================

import sys
from pathlib import Path
from unittest.mock import MagicMock, Mock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from acquisition import FetchOutcome, MalformedResponseError, TransientUpstreamError
from calendar_feed.http_source import CalendarQuery, ForexCalendarSource
from calendar_feed.service import CalendarService
from shared.config_loader import CalendarSettings

EVENT_JSON = {
    "id": "event_2024-03-14_0_k2j9",
    "title": "US Consumer Price Index",
    "country": "United States",
    "currency": "USD",
    "time": "2024-03-14T12:30:00.000Z",
    "importance": "high",
    "forecast": "3.1%",
    "previous": "3.2%",
    "actual": "3.4%",
    "description": "Monthly change in the price of goods and services purchased by consumers",
    "category": "inflation",
    "impact": "negative",
    "source": "Forex Factory",
    "unit": "percentage",
    "frequency": "monthly",
    "volatility": "high",
    "isLive": False,
    "timeUntil": "Past",
}


def make_response(body=None, status=200, json_error=False):
    response = Mock()
    response.status_code = status
    if status >= 400:
        error = requests.exceptions.HTTPError(f"{status} Error")
        error.response = response
        response.raise_for_status.side_effect = error
    else:
        response.raise_for_status.return_value = None
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


def make_source(response=None, side_effect=None):
    session = MagicMock(spec=requests.Session)
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = response
    source = ForexCalendarSource(
        base_url="http://journal.local:3000/",
        endpoint="/api/forex-factory",
        timeout=4.0,
        session=session,
    )
    return source, session


# =============================================================================
# REQUEST SHAPE
# =============================================================================


class TestRequest:

    def test_url_params_and_timeout(self):
        source, session = make_source(make_response({"success": True, "data": []}))

        source(CalendarQuery(timeframe="today"))

        args, kwargs = session.get.call_args
        assert args[0] == "http://journal.local:3000/api/forex-factory"
        assert kwargs["params"] == {"timeframe": "today"}
        assert kwargs["timeout"] == 4.0

    def test_clear_cache_flag_forwarded(self):
        source, session = make_source(make_response({"success": True, "data": []}))

        source(CalendarQuery(timeframe="week", clear_cache=True))

        assert session.get.call_args[1]["params"] == {"timeframe": "week", "clearCache": "true"}

    def test_plain_string_query(self):
        source, session = make_source(make_response({"success": True, "data": []}))
        source("tomorrow")
        assert session.get.call_args[1]["params"] == {"timeframe": "tomorrow"}

    def test_events_parsed(self):
        source, _ = make_source(make_response({"success": True, "data": [EVENT_JSON], "cached": False}))

        events = source(CalendarQuery())

        assert len(events) == 1
        assert events[0].id == EVENT_JSON["id"]
        assert events[0].actual == "3.4%"
        assert events[0].time.tzinfo is None


# =============================================================================
# ERROR MAPPING
# =============================================================================


class TestErrorMapping:

    @pytest.mark.parametrize("status", [404, 429, 500, 503])
    def test_http_errors_are_transient(self, status):
        source, _ = make_source(make_response(status=status))
        with pytest.raises(TransientUpstreamError) as exc_info:
            source(CalendarQuery())
        assert exc_info.value.status_code == status

    def test_timeout_is_transient(self):
        source, _ = make_source(side_effect=requests.exceptions.Timeout("read timed out"))
        with pytest.raises(TransientUpstreamError) as exc_info:
            source(CalendarQuery())
        assert "timeout" in str(exc_info.value)

    def test_connection_error_is_transient(self):
        source, _ = make_source(side_effect=requests.exceptions.ConnectionError("refused"))
        with pytest.raises(TransientUpstreamError):
            source(CalendarQuery())

    def test_non_json_is_malformed(self):
        source, _ = make_source(make_response(json_error=True))
        with pytest.raises(MalformedResponseError):
            source(CalendarQuery())

    @pytest.mark.parametrize("body", [
        [],
        {"success": False, "data": [], "error": "Failed to generate economic data"},
        {"success": True, "data": {"events": []}},
        {"success": True},
        {"success": True, "data": [{"id": "x"}]},
    ])
    def test_bad_envelopes_are_malformed(self, body):
        source, _ = make_source(make_response(body))
        with pytest.raises(MalformedResponseError):
            source(CalendarQuery())

    def test_upstream_error_message_kept(self):
        body = {"success": False, "data": [], "error": "Failed to generate economic data"}
        source, _ = make_source(make_response(body))
        with pytest.raises(MalformedResponseError) as exc_info:
            source(CalendarQuery())
        assert "Failed to generate economic data" in str(exc_info.value)


# =============================================================================
# THROUGH THE SERVICE
# =============================================================================


class TestServiceWithHttpSource:

    def test_http_failure_degrades_to_fallback(self, clock, day):
        source, _ = make_source(side_effect=requests.exceptions.ConnectionError("refused"))
        service = CalendarService(settings=CalendarSettings(), upstream=source, clock=clock, today=day)

        result = service.get_calendar("today")

        assert result.degraded is True
        assert result.outcome == FetchOutcome.FALLBACK
        assert result.payload[0].is_placeholder
        assert service.usage_stats().upstream_failures == 1

    def test_http_failure_after_success_serves_stale(self, clock, day):
        ok = make_response({"success": True, "data": [EVENT_JSON]})
        source, session = make_source(ok)
        service = CalendarService(settings=CalendarSettings(ttl_ms=1000), upstream=source, clock=clock, today=day)
        service.get_calendar("all")

        session.get.return_value = make_response(status=502)
        clock.advance_ms(2000)
        result = service.get_calendar("all")

        assert result.degraded is True
        assert result.outcome == FetchOutcome.STALE_CACHE
        assert result.payload[0].id == EVENT_JSON["id"]
