"""Источники времени для пула.

Timestamps: целые UNIX секунды. Часы никогда не идут назад.
"""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        ...


class SystemClock:
    """Системные часы, усеченные до целых секунд и монотонные."""

    def __init__(self) -> None:
        self._last = 0

    def now(self) -> int:
        current = int(time.time())
        # системные часы могут откатиться (NTP); более раннюю секунду не отдаем
        if current < self._last:
            return self._last
        self._last = current
        return current


class ManualClock:
    """Часы, сдвигаемые вручную; для симуляций и тестов.

    Usage:
        clock = ManualClock(start=1_700_000_000)
        clock.advance(50)
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        """Сдвиг вперед на ``seconds``; возвращает новое время."""
        if seconds < 0:
            raise ValueError(f"clock cannot move backwards ({seconds}s)")
        self._now += seconds
        return self._now

    def set(self, timestamp: int) -> int:
        """Переход к абсолютному времени не раньше текущего."""
        if timestamp < self._now:
            raise ValueError(f"clock cannot move backwards ({self._now} -> {timestamp})")
        self._now = timestamp
        return self._now
