# =============================================================================
# FOREX JOURNAL FEEDS - SIGNAL DATA MODEL
# =============================================================================

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from shared.enums import RiskLevel, SignalDirection


@dataclass
class TradingSignal:
    """
    Demo trading signal for one economic event.

    strength is 1-10, confidence is 0-100. is_placeholder marks signals
    produced without an upstream answer.
    """
    symbol: str
    direction: SignalDirection
    strength: int
    price: float
    confidence: int
    reasoning: str
    timeframe: str
    risk_level: RiskLevel
    target_price: Optional[float] = None
    stop_loss: Optional[float] = None
    timestamp: str = ""
    is_placeholder: bool = False

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "symbol": self.symbol,
            "direction": self.direction.value,
            "strength": self.strength,
            "price": self.price,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "timeframe": self.timeframe,
            "riskLevel": self.risk_level.value,
            "targetPrice": self.target_price,
            "stopLoss": self.stop_loss,
            "timestamp": self.timestamp,
            "isPlaceholder": self.is_placeholder,
        }


def build_fallback_signal() -> TradingSignal:
    """Static signal returned when nothing else is available."""
    return TradingSignal(
        symbol="N/A",
        direction=SignalDirection.HOLD,
        strength=1,
        price=0.0,
        confidence=0,
        reasoning="Trading signal temporarily unavailable",
        timeframe="N/A",
        risk_level=RiskLevel.MEDIUM,
        is_placeholder=True,
    )
