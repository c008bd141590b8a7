# =============================================================================
# FOREX JOURNAL FEEDS - ACQUISITION LAYER
# Module: acquisition/__init__.py
# Purpose: Quota-governed, TTL-cached access to rate-limited upstream data
# =============================================================================
#
# COMPONENTS (leaf first):
# - CacheStore        keyed TTL cache
# - QuotaGovernor     daily call budget, lazy midnight rollover
# - FallbackPolicy    static last-resort payload
# - AcquisitionClient cache -> quota -> upstream -> degraded fallback
#
# One AcquisitionClient per logical source. Sources NEVER share quota.
#
# =============================================================================

from .exceptions import (
    AcquisitionError,
    UpstreamError,
    TransientUpstreamError,
    MalformedResponseError,
    ConfigurationError,
)
from .cache_store import CacheEntry, CacheStore
from .quota_governor import QuotaGovernor
from .fallback_policy import FallbackPolicy
from .config import FeedConfig
from .client import AcquisitionClient, FetchOutcome, FetchResult, UsageStats

__all__ = [
    "AcquisitionError",
    "UpstreamError",
    "TransientUpstreamError",
    "MalformedResponseError",
    "ConfigurationError",
    "CacheEntry",
    "CacheStore",
    "QuotaGovernor",
    "FallbackPolicy",
    "FeedConfig",
    "AcquisitionClient",
    "FetchOutcome",
    "FetchResult",
    "UsageStats",
]
