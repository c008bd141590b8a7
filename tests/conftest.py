"""Global test fixtures: singleton reset between tests and controllable time."""
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Epoch-seconds clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class FakeDay:
    """Local-date provider for quota rollover tests."""

    def __init__(self, start: date = date(2024, 3, 14)):
        self.current = start

    def __call__(self) -> date:
        return self.current

    def next_day(self) -> None:
        self.current += timedelta(days=1)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def day():
    return FakeDay()


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module-level singletons before and after each test."""
    _do_reset()
    yield
    _do_reset()


@pytest.fixture(autouse=True)
def clean_feed_env(monkeypatch):
    """Keep developer .env overrides out of config tests."""
    for name in (
        "CALENDAR_API_BASE_URL",
        "CALENDAR_UPSTREAM",
        "CALENDAR_MAX_CALLS_PER_DAY",
        "SIGNALS_MAX_CALLS_PER_DAY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_package_loggers():
    """setup_logging() rewires package loggers; undo it after each test."""
    names = ["feeds", "calendar", "signals", "calendar_feed", "acquisition", "shared"]
    saved = {}
    for name in names:
        lg = logging.getLogger(name)
        saved[name] = (list(lg.handlers), lg.propagate, lg.level)
    yield
    for name, (handlers, propagate, level) in saved.items():
        lg = logging.getLogger(name)
        for handler in lg.handlers:
            if handler not in handlers:
                handler.close()
        lg.handlers[:] = handlers
        lg.propagate = propagate
        lg.setLevel(level)


def _do_reset():
    import calendar_feed.service as calendar_mod
    calendar_mod._calendar_service = None

    import signals.service as signals_mod
    signals_mod._signal_service = None

    import shared.config_loader as config_mod
    config_mod._feeds_config = None
