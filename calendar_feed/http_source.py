# =============================================================================
# FOREX JOURNAL FEEDS - CALENDAR HTTP UPSTREAM
# =============================================================================
#
# Fetches economic calendar events from the journal's calendar API route.
#
# API REFERENCE:
#   GET {base_url}/api/forex-factory?timeframe=<all|today|...>[&clearCache=true]
#
#   200 -> {"success": true,  "data": [event, ...], "cached": bool, ...}
#          {"success": false, "data": [...], "error": "..."}
#
# ERROR MAPPING:
# - Connection error, timeout, non-2xx   -> TransientUpstreamError
# - Non-JSON body, success=false,
#   non-list data, unparsable event       -> MalformedResponseError
#
# No retries here: the AcquisitionClient decides what happens on failure.
#
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from acquisition.exceptions import MalformedResponseError, TransientUpstreamError

from .models import EconomicEvent

logger = logging.getLogger(__name__)

SOURCE_NAME = "calendar"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class CalendarQuery:
    """Upstream parameters for one calendar request."""
    timeframe: str = "all"
    clear_cache: bool = False

    def to_params(self) -> Dict[str, str]:
        params = {"timeframe": self.timeframe}
        if self.clear_cache:
            params["clearCache"] = "true"
        return params


class ForexCalendarSource:
    """
    HTTP upstream for the calendar feed.

    Callable as upstream(query) -> List[EconomicEvent].
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str = "/api/forex-factory",
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Scheme and host of the journal app
            endpoint: Calendar route path
            timeout: Request timeout in seconds
            session: Optional requests session (shared connection pool)
        """
        self.url = f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        self.timeout = timeout
        self._session = session or requests.Session()

    def __call__(self, query: Any) -> List[EconomicEvent]:
        if not isinstance(query, CalendarQuery):
            query = CalendarQuery(timeframe=str(query))
        return self.fetch_events(query)

    def fetch_events(self, query: CalendarQuery) -> List[EconomicEvent]:
        """
        Fetch and parse calendar events.

        Raises:
            TransientUpstreamError: Network failure, timeout or HTTP error
            MalformedResponseError: Response body failed validation
        """
        logger.info(
            f"Fetching calendar data for timeframe: {query.timeframe}"
            f"{' (cache cleared)' if query.clear_cache else ''}"
        )

        try:
            resp = self._session.get(
                self.url,
                params=query.to_params(),
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise TransientUpstreamError(f"timeout after {self.timeout}s", source=SOURCE_NAME) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransientUpstreamError(
                f"API request failed: {status}", source=SOURCE_NAME, status_code=status
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransientUpstreamError(f"request failed: {e}", source=SOURCE_NAME) from e

        try:
            body = resp.json()
        except ValueError as e:
            raise MalformedResponseError("response is not valid JSON", source=SOURCE_NAME) from e

        events = self._parse_envelope(body)
        logger.info(f"Fetched {len(events)} events from calendar API")
        return events

    @staticmethod
    def _parse_envelope(body: Any) -> List[EconomicEvent]:
        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"unexpected response format: {type(body).__name__}", source=SOURCE_NAME
            )

        if not body.get("success"):
            raise MalformedResponseError(
                body.get("error") or "API request failed", source=SOURCE_NAME
            )

        data = body.get("data")
        if not isinstance(data, list):
            raise MalformedResponseError(
                f"'data' must be a list, got {type(data).__name__}", source=SOURCE_NAME
            )

        events = []
        for index, raw in enumerate(data):
            try:
                events.append(EconomicEvent.from_dict(raw))
            except (ValueError, TypeError) as e:
                raise MalformedResponseError(
                    f"event #{index} is invalid: {e}", source=SOURCE_NAME
                ) from e
        return events
