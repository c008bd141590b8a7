# =============================================================================
# FOREX JOURNAL FEEDS - CALENDAR DATA MODELS
# =============================================================================
#
# Economic calendar records as consumed by the journal UI.
#
# TIME CONVENTION:
# Event times are naive datetimes in the caller's LOCAL time. Aware
# timestamps from upstream JSON (e.g. "2024-05-03T12:30:00.000Z") are
# converted on parse.
#
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from shared.enums import Importance, Impact


def parse_event_time(value: Any) -> datetime:
    """
    Parse an upstream timestamp into a naive local datetime.

    Raises:
        ValueError: If the value is not an ISO-8601 string or datetime
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"invalid event time: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


@dataclass
class EconomicEvent:
    """
    One economic calendar entry.

    is_placeholder marks the static fallback event shown when no real data
    is available.
    """
    id: str
    title: str
    country: str
    currency: str
    time: datetime
    importance: Importance
    description: str
    category: str
    impact: Impact
    source: str
    frequency: str
    volatility: Importance
    forecast: str = ""
    previous: str = ""
    actual: str = ""
    unit: str = ""
    is_live: bool = False
    time_until: Optional[str] = None
    is_placeholder: bool = False

    @property
    def has_actual(self) -> bool:
        return bool(self.actual)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EconomicEvent":
        """
        Build an event from upstream JSON.

        Raises:
            ValueError: Missing required field or invalid enum/time value
        """
        if not isinstance(data, dict):
            raise ValueError(f"event must be an object, got {type(data).__name__}")

        missing = [name for name in ("id", "title", "currency", "time") if not data.get(name)]
        if missing:
            raise ValueError(f"event missing required fields: {', '.join(missing)}")

        importance = Importance(data.get("importance", "low"))
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            country=str(data.get("country", "")),
            currency=str(data["currency"]),
            time=parse_event_time(data["time"]),
            importance=importance,
            description=str(data.get("description", "")),
            category=str(data.get("category", "other")),
            impact=Impact(data.get("impact", "pending")),
            source=str(data.get("source", "")),
            frequency=str(data.get("frequency", "")),
            volatility=Importance(data.get("volatility", importance.value)),
            forecast=str(data.get("forecast") or ""),
            previous=str(data.get("previous") or ""),
            actual=str(data.get("actual") or ""),
            unit=str(data.get("unit") or ""),
            is_live=bool(data.get("isLive", False)),
            time_until=data.get("timeUntil"),
            is_placeholder=bool(data.get("isPlaceholder", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict (upstream field names)."""
        return {
            "id": self.id,
            "title": self.title,
            "country": self.country,
            "currency": self.currency,
            "time": self.time.isoformat(),
            "importance": self.importance.value,
            "forecast": self.forecast,
            "previous": self.previous,
            "actual": self.actual,
            "description": self.description,
            "category": self.category,
            "impact": self.impact.value,
            "source": self.source,
            "unit": self.unit,
            "frequency": self.frequency,
            "volatility": self.volatility.value,
            "isLive": self.is_live,
            "timeUntil": self.time_until,
            "isPlaceholder": self.is_placeholder,
        }


@dataclass
class NewsArticle:
    """Forex news item shown next to the calendar."""
    id: str
    title: str
    summary: str
    content: str
    category: str
    importance: Importance
    currency: str
    timestamp: datetime
    source: str
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "content": self.content,
            "category": self.category,
            "importance": self.importance.value,
            "currency": self.currency,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "tags": list(self.tags),
        }


# =============================================================================
# PLACEHOLDERS
# =============================================================================


def build_fallback_events(now: Optional[datetime] = None) -> List[EconomicEvent]:
    """The static calendar shown when no data can be produced."""
    now = now or datetime.now()
    return [
        EconomicEvent(
            id="fallback_1",
            title="Forex Factory Data Unavailable",
            country="Global",
            currency="USD",
            time=now,
            importance=Importance.LOW,
            description="Economic calendar data temporarily unavailable",
            category="other",
            impact=Impact.NEUTRAL,
            source="System",
            frequency="daily",
            volatility=Importance.LOW,
            time_until="N/A",
            is_placeholder=True,
        )
    ]


def build_placeholder_news(now: Optional[datetime] = None) -> List[NewsArticle]:
    """The calendar upstream has no news feed; this is what the news panel shows."""
    now = now or datetime.now()
    return [
        NewsArticle(
            id="mock_news_1",
            title="Economic Calendar Data from Forex Factory",
            summary="Real-time economic calendar data scraped from ForexFactory.com",
            content="Economic events and data are being fetched from Forex Factory.",
            category="market-update",
            importance=Importance.MEDIUM,
            currency="USD",
            timestamp=now,
            source="Forex Factory",
            tags=["Economic Calendar", "Forex Factory", "Market Data"],
        )
    ]
