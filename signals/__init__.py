# =============================================================================
# FOREX JOURNAL FEEDS - TRADING SIGNALS
# Module: signals/__init__.py
# Purpose: Demo trading signals for economic events
# =============================================================================
#
# DEMONSTRATION ONLY: signals are simulated, not investment advice.
#
# =============================================================================

from .models import TradingSignal, build_fallback_signal
from .rules import basic_signal, determine_basic_signal, parse_figure
from .generator import MockSignalGenerator, parse_signal_response
from .service import SignalService, get_signal_service, reset_signal_service

__all__ = [
    "TradingSignal",
    "build_fallback_signal",
    "basic_signal",
    "determine_basic_signal",
    "parse_figure",
    "MockSignalGenerator",
    "parse_signal_response",
    "SignalService",
    "get_signal_service",
    "reset_signal_service",
]
