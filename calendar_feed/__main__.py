# =============================================================================
# FOREX JOURNAL FEEDS - CALENDAR CLI
# Module: calendar_feed/__main__.py
# Purpose: Fetch the economic calendar (and optional signals) from a shell
# =============================================================================
#
# USAGE:
# python -m calendar_feed --timeframe today --signals
#
# OPTIONS:
# --timeframe    all, today, yesterday, tomorrow, week (default: today)
# --clear-cache  Force a fresh upstream fetch
# --signals      Also fetch a demo trading signal per event
# --demo         Use the offline demo calendar instead of the HTTP API
# --config       Path to feeds.yaml
# --limit        Maximum events to print (default: 20)
# --log-file     Also write logs to logs/calendar/
# --verbose      Enable debug logging
#
# =============================================================================

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from acquisition.exceptions import ConfigurationError
from shared.config_loader import FeedsConfig
from shared.logging_config import setup_logging
from signals.service import SignalService

from .service import CalendarService


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m calendar_feed",
        description="Forex Journal Feeds - economic calendar with cached, quota-governed fetches",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m calendar_feed --timeframe today
  python -m calendar_feed --timeframe week --signals
  python -m calendar_feed --demo --clear-cache --verbose

Note: Signals are simulated for demonstration purposes only.
        """,
    )

    parser.add_argument(
        "--timeframe",
        type=str,
        default="today",
        choices=["all", "today", "yesterday", "tomorrow", "week"],
        help="Calendar window (default: today)",
    )
    parser.add_argument("--clear-cache", action="store_true", help="Force a fresh upstream fetch")
    parser.add_argument("--signals", action="store_true", help="Fetch a trading signal per event")
    parser.add_argument("--demo", action="store_true", help="Use the offline demo calendar")
    parser.add_argument("--config", type=str, default=None, help="Path to feeds.yaml")
    parser.add_argument("--limit", type=int, default=20, help="Maximum events to print (default: 20)")
    parser.add_argument("--log-file", action="store_true", help="Also write logs to logs/calendar/")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Console only until the config (and its log level) is known
    logger = setup_logging(
        source=None,
        level=logging.DEBUG if args.verbose else logging.INFO,
        file_output=False,
    )

    try:
        config = FeedsConfig(config_path=Path(args.config) if args.config else None)

        # --verbose wins over global.log_level
        logger = setup_logging(
            source=None,
            level=logging.DEBUG if args.verbose else getattr(logging, config.log_level),
            file_output=args.log_file,
        )

        calendar_settings = config.calendar
        if args.demo:
            calendar_settings = replace(calendar_settings, upstream="demo")

        calendar = CalendarService(settings=calendar_settings)
        signal_service = SignalService(settings=config.signals) if args.signals else None
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        result = calendar.get_calendar(args.timeframe, clear_cache=args.clear_cache)
        events = result.payload

        print("\n" + "=" * 60)
        print(f"ECONOMIC CALENDAR ({args.timeframe})")
        if result.degraded:
            print("[DATA MAY BE STALE - " + result.outcome.value + "]")
        print("=" * 60)

        for event in events[: args.limit]:
            line = (
                f"{event.time:%Y-%m-%d %H:%M}  {event.currency:<4} "
                f"{event.importance.value:<6} {event.title}"
            )
            figures = f"A:{event.actual or '-'} F:{event.forecast or '-'} P:{event.previous or '-'}"
            print(f"{line}  [{figures}]")

            if signal_service is not None:
                signal_result = signal_service.get_signal(event)
                signal = signal_result.payload
                marker = " (degraded)" if signal_result.degraded else ""
                print(
                    f"    -> {signal.direction.value} strength={signal.strength} "
                    f"confidence={signal.confidence} risk={signal.risk_level.value}{marker}"
                )

        if len(events) > args.limit:
            print(f"... {len(events) - args.limit} more events")

        print()
        print("Usage:")
        services = [calendar] + ([signal_service] if signal_service is not None else [])
        for service in services:
            stats = service.usage_stats()
            print(
                f"  {stats.name}: {stats.daily_call_count}/{stats.max_daily_calls} calls today, "
                f"{stats.remaining_calls} remaining, {stats.cache_size} cached"
            )
        print("=" * 60)

        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
