# =============================================================================
# FOREX JOURNAL FEEDS - FALLBACK POLICY
# =============================================================================
#
# Last-resort payload for when neither a cache entry nor an upstream call
# can produce data. The payload is static and key-independent, and it
# carries its own placeholder marker (e.g. is_placeholder=True on events).
#
# fallback() NEVER raises.
#
# =============================================================================

import copy
from typing import Any

from .exceptions import ConfigurationError


class FallbackPolicy:
    """Returns a fixed placeholder payload."""

    def __init__(self, payload: Any, name: str = "feed"):
        try:
            copy.deepcopy(payload)
        except Exception as e:
            raise ConfigurationError(
                f"fallback payload must be copyable: {e}", source=name
            ) from e
        self._payload = payload

    def fallback(self, key: str) -> Any:
        """Return a copy of the configured payload. key is ignored."""
        return copy.deepcopy(self._payload)
