# =============================================================================
# FOREX JOURNAL FEEDS - SHARED ENUMS
# =============================================================================
#
# Shared vocabulary across the calendar and signal feeds.
# Values match the strings used by the journal UI and the upstream JSON.
#
# =============================================================================

from enum import Enum


class DataSource(Enum):
    """
    Logical upstream sources.

    Each source gets its own AcquisitionClient, log directory and quota.
    """
    CALENDAR = "calendar"
    SIGNALS = "signals"


class Importance(Enum):
    """Economic event importance (also used as expected volatility)."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Impact(Enum):
    """
    Market impact of a released figure.

    PENDING: figure not yet released.
    """
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    PENDING = "pending"


class SignalDirection(Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RiskLevel(Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Timeframe(Enum):
    """
    Calendar windows understood by the calendar feed.

    ALL: no filtering.
    WEEK: today 00:00 through seven days ahead.
    """
    ALL = "all"
    TODAY = "today"
    YESTERDAY = "yesterday"
    TOMORROW = "tomorrow"
    WEEK = "week"

    @classmethod
    def parse(cls, value: str) -> "Timeframe":
        """Map a raw timeframe string to a Timeframe; unknown values mean ALL."""
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            return cls.ALL
