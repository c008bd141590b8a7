# =============================================================================
# FOREX JOURNAL FEEDS - TIMEFRAME FILTERING
# =============================================================================
#
# Calendar windows are LOCAL calendar days:
#   today / yesterday / tomorrow  -> events on that date
#   week                          -> today 00:00 through today+7d 00:00
#   anything else                 -> all events
#
# =============================================================================

from datetime import datetime, timedelta
from typing import List, Optional, Union

from shared.enums import Timeframe

from .models import EconomicEvent


def filter_by_timeframe(
    events: List[EconomicEvent],
    timeframe: Union[str, Timeframe],
    now: Optional[datetime] = None,
) -> List[EconomicEvent]:
    """
    Keep the events that fall inside a calendar window.

    Args:
        events: Events with naive local times
        timeframe: Timeframe or raw string ("today", "week", ...)
        now: Reference time (default: datetime.now())

    Returns:
        Filtered list, original order preserved
    """
    if not isinstance(timeframe, Timeframe):
        timeframe = Timeframe.parse(timeframe)

    now = now or datetime.now()
    today = now.date()

    if timeframe == Timeframe.TODAY:
        return [e for e in events if e.time.date() == today]
    if timeframe == Timeframe.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return [e for e in events if e.time.date() == yesterday]
    if timeframe == Timeframe.TOMORROW:
        tomorrow = today + timedelta(days=1)
        return [e for e in events if e.time.date() == tomorrow]
    if timeframe == Timeframe.WEEK:
        start = datetime(today.year, today.month, today.day)
        end = start + timedelta(days=7)
        return [e for e in events if start <= e.time <= end]
    return list(events)


def time_until(event_time: datetime, now: Optional[datetime] = None) -> str:
    """Countdown label: "Past", "2d 3h", "4h 15m" or "12m"."""
    now = now or datetime.now()
    diff = (event_time - now).total_seconds()

    if diff < 0:
        return "Past"

    days = int(diff // 86400)
    hours = int((diff % 86400) // 3600)
    minutes = int((diff % 3600) // 60)

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
