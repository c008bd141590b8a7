# =============================================================================
# FOREX JOURNAL FEEDS - SHARED MODULE
# =============================================================================
#
# Shared utilities for both feeds. No fetch logic lives here.
#
# CONTENTS:
# - Enums (shared type definitions)
# - Logging utilities (separated by data source)
# - Feed configuration (config/feeds.yaml + .env)
#
# =============================================================================

from .enums import DataSource, Importance, Impact, SignalDirection, RiskLevel, Timeframe
from .logging_config import setup_logging, get_source_logger
from .config_loader import FeedsConfig, CalendarSettings, SignalSettings, get_feeds_config

__all__ = [
    "DataSource",
    "Importance",
    "Impact",
    "SignalDirection",
    "RiskLevel",
    "Timeframe",
    "setup_logging",
    "get_source_logger",
    "FeedsConfig",
    "CalendarSettings",
    "SignalSettings",
    "get_feeds_config",
]
