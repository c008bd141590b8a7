# =============================================================================
# FOREX JOURNAL FEEDS - QUOTA GOVERNOR
# =============================================================================
#
# Daily upstream call budget with lazy rollover at local midnight.
#
# STATE MACHINE:
#   CURRENT (reset_date == today)
#   STALE   (reset_date != today)
#
#   can_call() / record_call() first move STALE -> CURRENT by setting
#   call_count = 0 and reset_date = today. That is the only transition.
#   There is NO background timer: rollover is detected on access.
#
# NOT thread-safe on its own; AcquisitionClient owns the lock.
#
# =============================================================================

import logging
from datetime import date
from typing import Callable, Optional, Tuple

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class QuotaGovernor:
    """
    Tracks upstream calls made against a calendar day.

    Args:
        max_calls_per_day: Hard ceiling of calls per local day (must be > 0)
        today: Returns the caller's local date (default date.today)
        name: Feed name used in log lines
    """

    def __init__(
        self,
        max_calls_per_day: int,
        today: Optional[Callable[[], date]] = None,
        name: str = "feed",
    ):
        if isinstance(max_calls_per_day, bool) or not isinstance(max_calls_per_day, int):
            raise ConfigurationError(
                f"max_calls_per_day must be an integer, got {type(max_calls_per_day).__name__}",
                source=name,
            )
        if max_calls_per_day <= 0:
            raise ConfigurationError(
                f"max_calls_per_day must be positive, got {max_calls_per_day}",
                source=name,
            )

        self._today = today or date.today
        self._max_calls = max_calls_per_day
        self._name = name
        self._call_count = 0
        self._reset_date = self._today()

    @property
    def max_calls_per_day(self) -> int:
        return self._max_calls

    @property
    def call_count(self) -> int:
        return self._call_count

    @property
    def reset_date(self) -> date:
        return self._reset_date

    def _rollover(self) -> None:
        today = self._today()
        if self._reset_date != today:
            logger.info(
                f"{self._name}: daily quota reset "
                f"({self._reset_date.isoformat()} -> {today.isoformat()}, "
                f"{self._call_count} calls used)"
            )
            self._call_count = 0
            self._reset_date = today

    def can_call(self) -> bool:
        self._rollover()
        return self._call_count < self._max_calls

    def record_call(self) -> None:
        """Count one upstream attempt against today's budget."""
        self._rollover()
        self._call_count += 1
        logger.info(f"{self._name}: upstream calls today: {self._call_count}/{self._max_calls}")

    def snapshot(self) -> Tuple[int, date]:
        """
        (call_count, reset_date) as of today.

        A stale day reads as (0, today). State is not modified.
        """
        today = self._today()
        if self._reset_date != today:
            return 0, today
        return self._call_count, self._reset_date

    def remaining(self) -> int:
        """
        Calls left today, clamped to zero.

        Reports the post-rollover budget when the stored day is stale, but
        does not perform the transition itself.
        """
        call_count, _ = self.snapshot()
        return max(0, self._max_calls - call_count)
