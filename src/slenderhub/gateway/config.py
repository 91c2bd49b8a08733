"""Конфигурация таймингов gateway flow."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GatewayTimingConfig:
    """Задержки gateway flow (миллисекунды).

    - verification_delay_ms: trust-on-delay подтверждение задачи
    - settle_delay_ms: пауза между последней задачей и сменой шага
    - copy_feedback_ms: сколько держится флаг copied после копирования
    """

    verification_delay_ms: float = 1500.0
    settle_delay_ms: float = 600.0
    copy_feedback_ms: float = 2000.0

    def __post_init__(self):
        for name in ("verification_delay_ms", "settle_delay_ms", "copy_feedback_ms"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
