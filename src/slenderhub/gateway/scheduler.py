"""Scheduler: отложенные вызовы для таймеров gateway flow.

Все таймеры контроллера (verification delay, settle delay, copy feedback)
создаются через Scheduler и отменяемы. Реализации:
- ManualScheduler: виртуальное время в миллисекундах, продвигается явно
- AsyncioScheduler: поверх loop.call_later для хостов с event loop
"""

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol


class TimerHandle(Protocol):
    """Отменяемый отложенный вызов."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Источник отложенных вызовов (однопоточный, кооперативный)."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        ...


# =============================================================================
# MANUAL SCHEDULER
# =============================================================================


@dataclass(order=True)
class ManualTimer:
    """Таймер ManualScheduler."""

    when_ms: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler с виртуальными часами.

    Таймеры срабатывают только внутри advance() в порядке времени
    (при равном времени: в порядке создания). Таймеры, созданные из
    callback, срабатывают в том же advance(), если укладываются в окно.
    """

    def __init__(self, start_ms: float = 0.0):
        self.now_ms = start_ms
        self._queue: List[ManualTimer] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ManualTimer:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        timer = ManualTimer(
            when_ms=self.now_ms + delay_ms,
            seq=next(self._seq),
            callback=callback,
        )
        heapq.heappush(self._queue, timer)
        return timer

    def advance(self, delta_ms: float) -> int:
        """Продвинуть часы на delta_ms и выполнить созревшие таймеры.

        Returns:
            Число выполненных (не отменённых) таймеров
        """
        if delta_ms < 0:
            raise ValueError(f"delta_ms must be >= 0, got {delta_ms}")
        target_ms = self.now_ms + delta_ms
        fired = 0
        while self._queue and self._queue[0].when_ms <= target_ms:
            timer = heapq.heappop(self._queue)
            self.now_ms = timer.when_ms
            if timer.cancelled:
                continue
            timer.fired = True
            timer.callback()
            fired += 1
        self.now_ms = target_ms
        return fired

    @property
    def pending_count(self) -> int:
        """Число ожидающих и не отменённых таймеров."""
        return sum(1 for t in self._queue if not t.cancelled)


# =============================================================================
# ASYNCIO SCHEDULER
# =============================================================================


class AsyncioScheduler:
    """Scheduler поверх asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)
