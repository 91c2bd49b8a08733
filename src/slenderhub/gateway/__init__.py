"""Gateway: gated unlock flow скрипта.

- Шаги TASKS → MONETIZATION → RESULT без регресса
- Подключаемая verification strategy (по умолчанию trust-on-delay)
- Reset всех таймеров на каждой активации
"""

from slenderhub.core.loader import generate_loader

from .config import GatewayTimingConfig
from .controller import (
    GatewayEffects,
    GatewayFlowController,
    GatewayView,
    TaskClickResult,
    TaskRow,
)
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler, TimerHandle
from .state_machine import GatewayStep, GatewayStepMachine, GatewayTransitionResult
from .verification import DelayedTrustVerification, VerificationStrategy

__all__ = [
    "generate_loader",
    "GatewayTimingConfig",
    "GatewayEffects",
    "GatewayFlowController",
    "GatewayView",
    "TaskClickResult",
    "TaskRow",
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "TimerHandle",
    "GatewayStep",
    "GatewayStepMachine",
    "GatewayTransitionResult",
    "DelayedTrustVerification",
    "VerificationStrategy",
]
