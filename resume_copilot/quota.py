"""In-memory daily quota of free AI exchanges."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional

DEFAULT_DAILY_LIMIT = 3


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class UsageGate:
    """Counts successful AI exchanges per UTC day; Pro users are unlimited."""

    def __init__(
        self,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        pro: bool = False,
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self.daily_limit = daily_limit
        self.pro = pro
        self._clock = clock or _utc_today
        self._day = self._clock()
        self._used = 0

    def _roll_day(self) -> None:
        today = self._clock()
        if today != self._day:
            self._day = today
            self._used = 0

    @property
    def used(self) -> int:
        self._roll_day()
        return self._used

    def can_use_ai(self) -> bool:
        return self.pro or self.used < self.daily_limit

    def record_use(self) -> None:
        self._roll_day()
        self._used += 1

    def remaining(self) -> Optional[int]:
        """Uses left today, or ``None`` when unlimited."""
        if self.pro:
            return None
        return max(0, self.daily_limit - self.used)
