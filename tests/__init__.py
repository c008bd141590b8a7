# =============================================================================
# FOREX JOURNAL FEEDS - TEST SUITE
# =============================================================================
#
# Struktur:
#   tests/
#     unit/           - Cache, quota, fallback, config, timeframes, signals
#     integration/    - HTTP source (mocked session), services, concurrency, CLI
#
# Usage:
#   pytest                       # Alle Tests
#   pytest tests/unit/           # Nur Unit Tests
#   pytest tests/integration/    # Nur Integration Tests
#
# =============================================================================
