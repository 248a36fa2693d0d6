"""Clock — время исполнения (unix seconds).

Время не откатывается вместе с транзакцией: это свойство среды, а не
состояния контрактов. В тестах управляется через advance()/set().
"""

import time
from typing import Optional


class Clock:
    """Монотонные часы среды исполнения."""

    def __init__(self, start: Optional[int] = None):
        """
        Args:
            start: начальное время (unix seconds); по умолчанию — текущее
        """
        self._now = int(time.time()) if start is None else int(start)
        if self._now < 0:
            raise ValueError(f"Clock start cannot be negative: {self._now}")

    @property
    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        """Сдвиг времени вперёд.

        Returns:
            новое текущее время
        """
        if seconds < 0:
            raise ValueError(f"Clock cannot move backwards: {seconds}s")
        self._now += int(seconds)
        return self._now

    def set(self, ts: int) -> int:
        """Установка абсолютного времени (только вперёд)."""
        if ts < self._now:
            raise ValueError(f"Clock cannot move backwards: {ts} < {self._now}")
        self._now = int(ts)
        return self._now
