"""Clock — источник текущего времени оракула (целые Unix seconds)."""

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> int:
        ...


class SystemClock:
    """Wall-clock время, усечённое до секунды."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """
    Управляемые часы для симуляций и тестов.

    Время только задаётся явно; само по себе не идёт.
    """

    def __init__(self, start: int | None = None):
        self._now = int(time.time()) if start is None else start

    def now(self) -> int:
        return self._now

    def set(self, timestamp: int) -> None:
        if timestamp < 0:
            raise ValueError(f"timestamp must be non-negative, got {timestamp}")
        self._now = timestamp

    def advance(self, seconds: int) -> int:
        """Сдвиг времени на seconds; возвращает новое значение."""
        self.set(self._now + seconds)
        return self._now
