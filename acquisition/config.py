# =============================================================================
# FOREX JOURNAL FEEDS - FEED CONFIGURATION
# =============================================================================
#
# Per-client options recognised by AcquisitionClient:
#   ttl_ms             cache lifetime per entry (milliseconds)
#   max_calls_per_day  quota ceiling (> 0)
#   fallback_payload   static degraded-mode value
#
# Validated on creation. Invalid values raise ConfigurationError.
#
# =============================================================================

from dataclasses import dataclass
from typing import Any, Dict, List

from .exceptions import ConfigurationError


@dataclass
class FeedConfig:
    """Configuration for one acquisition client."""
    name: str
    ttl_ms: int
    max_calls_per_day: int
    fallback_payload: Any = None

    def __post_init__(self):
        errors = self.validate()
        if errors:
            raise ConfigurationError(
                f"Invalid FeedConfig: {'; '.join(errors)}", source=self.name or None
            )

    def validate(self) -> List[str]:
        """Validate all fields. Returns list of errors."""
        errors = []

        if not self.name:
            errors.append("name is required")

        if isinstance(self.ttl_ms, bool) or not isinstance(self.ttl_ms, int):
            errors.append(f"ttl_ms must be an integer, got {type(self.ttl_ms).__name__}")
        elif self.ttl_ms < 0:
            errors.append(f"ttl_ms must not be negative, got {self.ttl_ms}")

        if isinstance(self.max_calls_per_day, bool) or not isinstance(self.max_calls_per_day, int):
            errors.append(
                f"max_calls_per_day must be an integer, got {type(self.max_calls_per_day).__name__}"
            )
        elif self.max_calls_per_day <= 0:
            errors.append(f"max_calls_per_day must be positive, got {self.max_calls_per_day}")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for logging (fallback payload omitted)."""
        return {
            "name": self.name,
            "ttl_ms": self.ttl_ms,
            "max_calls_per_day": self.max_calls_per_day,
            "has_fallback_payload": self.fallback_payload is not None,
        }
