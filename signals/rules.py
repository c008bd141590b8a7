# =============================================================================
# FOREX JOURNAL FEEDS - RULE-BASED SIGNALS
# =============================================================================
#
# Event-aware signal used when the signal feed has nothing better.
#
# RULE:
#   actual > forecast -> BUY for employment/gdp, SELL otherwise
#   actual < forecast -> SELL for employment/gdp, BUY otherwise
#   equal, missing or unparsable -> HOLD
#
# =============================================================================

import re
from typing import Any, Optional

from calendar_feed.models import EconomicEvent
from shared.enums import Importance, RiskLevel, SignalDirection

from .models import TradingSignal

_NON_NUMERIC = re.compile(r"[^\d.\-]")

GROWTH_CATEGORIES = ("employment", "gdp")


def parse_figure(value: Any) -> Optional[float]:
    """Number inside a release figure ("215K" -> 215.0, "3.4%" -> 3.4)."""
    if value is None or value == "":
        return None
    try:
        return float(_NON_NUMERIC.sub("", str(value)))
    except ValueError:
        return None


def determine_basic_signal(event: EconomicEvent) -> SignalDirection:
    actual = parse_figure(event.actual)
    forecast = parse_figure(event.forecast)
    if actual is None or forecast is None:
        return SignalDirection.HOLD

    growth = event.category in GROWTH_CATEGORIES
    if actual > forecast:
        return SignalDirection.BUY if growth else SignalDirection.SELL
    if actual < forecast:
        return SignalDirection.SELL if growth else SignalDirection.BUY
    return SignalDirection.HOLD


def basic_signal(event: EconomicEvent) -> TradingSignal:
    """Rule-based signal for an event, flagged as a placeholder."""
    direction = determine_basic_signal(event) if event.has_actual else SignalDirection.HOLD

    if event.importance == Importance.HIGH:
        strength = 7
    elif event.importance == Importance.MEDIUM:
        strength = 5
    else:
        strength = 3

    data_note = (
        "Actual data available for analysis." if event.has_actual
        else "Awaiting actual data release."
    )
    return TradingSignal(
        symbol=event.currency,
        direction=direction,
        strength=strength,
        price=0.0,
        confidence=60,
        reasoning=(
            f"Basic analysis: {event.importance.value} impact {event.category} event "
            f"for {event.currency}. {data_note}"
        ),
        timeframe="1-2 hours",
        risk_level=RiskLevel.HIGH if event.importance == Importance.HIGH else RiskLevel.MEDIUM,
        is_placeholder=True,
    )
