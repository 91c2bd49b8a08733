"""Verification: стратегии подтверждения задач gateway.

Единственная поставляемая стратегия, DelayedTrustVerification, НЕ проверяет,
что внешнее действие (подписка, лайк, вход на сервер) действительно
произошло: задача считается выполненной по истечении фиксированной задержки
после открытия её URL (trust-on-delay). Реальный backend проверки
подключается новой реализацией VerificationStrategy без изменения машины шагов.
"""

from typing import Callable, Protocol

from slenderhub.core.domain.script import Task
from slenderhub.gateway.scheduler import Scheduler, TimerHandle


class VerificationStrategy(Protocol):
    """Стратегия подтверждения задачи.

    begin() запускает подтверждение и возвращает отменяемый handle.
    on_verified вызывается не более одного раза и только если handle
    не был отменён.
    """

    def begin(self, task: Task, on_verified: Callable[[], None]) -> TimerHandle:
        ...


class DelayedTrustVerification:
    """Trust-on-delay: задача подтверждается через delay_ms после клика."""

    def __init__(self, scheduler: Scheduler, delay_ms: float = 1500.0):
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        self.scheduler = scheduler
        self.delay_ms = delay_ms

    def begin(self, task: Task, on_verified: Callable[[], None]) -> TimerHandle:
        return self.scheduler.call_later(self.delay_ms, on_verified)
