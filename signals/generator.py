# =============================================================================
# FOREX JOURNAL FEEDS - DEMO SIGNAL UPSTREAM
# =============================================================================
#
# Simulated "AI" trading signals for economic events.
#
# This stands in for a model-backed signal API: it produces the same JSON
# text such an API would answer with, then parses it through the same
# validation path. Signals are for DEMONSTRATION only.
#
# RESPONSE SHAPE (JSON object, possibly surrounded by prose):
#   {"direction": "bullish|bearish|neutral" | "signal": "BUY|SELL|HOLD",
#    "strength": 1-10, "confidence": 0-100, "reasoning": "...",
#    "targetPrice": "EUR/USD: 1.0842", "stopLoss": "...", "timeframe": "...",
#    "riskLevel": "low|medium|high", "affectedPairs": [...], ...}
#
# =============================================================================

import json
import logging
import random
import re
from typing import Any, Dict, Optional

from acquisition.exceptions import MalformedResponseError
from calendar_feed.models import EconomicEvent
from shared.enums import Importance, RiskLevel, SignalDirection

from .models import TradingSignal
from .rules import parse_figure

logger = logging.getLogger(__name__)

SOURCE_NAME = "signals"

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

DIRECTIONS = ("bullish", "bearish", "neutral")
RISK_LEVELS = ("low", "medium", "high")
TIMEFRAMES = ("30 minutes", "1-2 hours", "2-4 hours", "4-8 hours")


def _clamp(value: Any, low: int, high: int, default: int) -> int:
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        number = default
    return min(max(number, low), high)


def _direction_from(parsed: Dict[str, Any]) -> SignalDirection:
    signal = str(parsed.get("signal") or "").upper()
    if signal in ("BUY", "SELL"):
        return SignalDirection(signal)

    direction = str(parsed.get("direction") or "").lower()
    if direction == "bullish":
        return SignalDirection.BUY
    if direction == "bearish":
        return SignalDirection.SELL
    return SignalDirection.HOLD


def _risk_from(value: Any) -> RiskLevel:
    value = str(value or "").lower()
    if value == "low":
        return RiskLevel.LOW
    if value == "medium":
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def parse_signal_response(response: str, event: EconomicEvent) -> TradingSignal:
    """
    Parse a signal response into a TradingSignal.

    Raises:
        MalformedResponseError: No JSON object in the text, or invalid JSON
    """
    match = _JSON_OBJECT.search(response or "")
    if not match:
        raise MalformedResponseError("no JSON found in response", source=SOURCE_NAME)

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"invalid JSON in response: {e}", source=SOURCE_NAME) from e

    if not isinstance(parsed, dict):
        raise MalformedResponseError("response JSON is not an object", source=SOURCE_NAME)

    target_price = parse_figure(parsed.get("targetPrice"))
    stop_loss = parse_figure(parsed.get("stopLoss"))

    return TradingSignal(
        symbol=event.currency,
        direction=_direction_from(parsed),
        strength=_clamp(parsed.get("strength"), 1, 10, 5),
        price=target_price or 0.0,
        confidence=_clamp(parsed.get("confidence"), 0, 100, 50),
        reasoning=parsed.get("reasoning") or "AI analysis of economic event impact",
        timeframe=parsed.get("timeframe") or "1-4 hours",
        risk_level=_risk_from(parsed.get("riskLevel")),
        target_price=target_price,
        stop_loss=stop_loss,
    )


class MockSignalGenerator:
    """
    Demo upstream for the signal feed.

    Callable as upstream(event) -> TradingSignal.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        logger.info("Demo trading signal generator initialized")

    def __call__(self, event: EconomicEvent) -> TradingSignal:
        response = self.generate_response(event)
        return parse_signal_response(response, event)

    def generate_response(self, event: EconomicEvent) -> str:
        """JSON signal text for an event, shaped like a model answer."""
        rng = self._rng
        direction = rng.choice(DIRECTIONS)
        if event.importance == Importance.HIGH:
            risk_level = "high"
        else:
            risk_level = rng.choice(RISK_LEVELS)

        currency = event.currency
        importance = event.importance.value
        momentum = "mixed" if direction == "neutral" else direction
        impact = {"bullish": "positive", "bearish": "negative"}.get(direction, "neutral")

        signal = {
            "direction": direction,
            "confidence": rng.randint(65, 94),
            "reasoning": (
                f"Mock analysis of {event.title} shows {direction} sentiment for {currency}. "
                f"The {importance}-impact event is expected to drive {momentum} momentum "
                f"in {currency} pairs."
            ),
            "targetPrice": f"{currency}/USD: {rng.uniform(1.0, 1.1):.4f}",
            "stopLoss": f"{currency}/USD: {rng.uniform(0.95, 1.0):.4f}",
            "timeframe": rng.choice(TIMEFRAMES),
            "riskLevel": risk_level,
            "affectedPairs": [f"{currency}/USD", f"EUR/{currency}", f"GBP/{currency}"],
            "marketImpact": f"{importance} volatility expected with potential {direction} bias",
            "category": event.category or "Economic Data",
            "impact": impact,
        }
        return json.dumps(signal, indent=2)
