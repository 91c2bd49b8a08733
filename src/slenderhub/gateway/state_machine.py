"""Gateway Step Machine: переходы шагов gateway flow.

Шаги (линейно, без циклов):
- TASKS: подтверждение задач
- MONETIZATION: один внешний redirect
- RESULT: loader-строка или состояние no_source

Целевой шаг вычисляется цепочкой GATE 0 → GATE 1. Машина stateless:
текущий шаг и completion set передаются на каждом вызове, как и в
контроллере активации. Регресс шага запрещён.
"""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Final, Optional

from slenderhub.core.domain.script import Script
from slenderhub.gatekeeper.gates.gate_00_task_completion import Gate00TaskCompletion
from slenderhub.gatekeeper.gates.gate_01_monetization import Gate01Monetization


class GatewayStep(str, Enum):
    """Шаг gateway flow."""

    TASKS = "TASKS"
    MONETIZATION = "MONETIZATION"
    RESULT = "RESULT"

    @property
    def ordinal(self) -> int:
        return _STEP_ORDER[self]


_STEP_ORDER: Final[dict[GatewayStep, int]] = {
    GatewayStep.TASKS: 0,
    GatewayStep.MONETIZATION: 1,
    GatewayStep.RESULT: 2,
}


@dataclass(frozen=True)
class GatewayTransitionResult:
    """Результат перехода шага gateway."""

    new_step: GatewayStep
    previous_step: Optional[GatewayStep]

    # Диагностика
    transition_occurred: bool
    transition_reason: str

    # Прогресс задач на момент оценки
    completed_count: int
    total_count: int

    details: str


class GatewayStepMachine:
    """Машина шагов gateway flow.

    Правило выбора целевого шага:
    - есть неподтверждённые задачи → TASKS
    - иначе shortener_link → MONETIZATION
    - иначе → RESULT

    При активации (previous_step=None) целевой шаг вычисляется с пустым
    completion set, что даёт начальный шаг: TASKS для скрипта с задачами.
    """

    def __init__(
        self,
        task_gate: Optional[Gate00TaskCompletion] = None,
        monetization_gate: Optional[Gate01Monetization] = None,
    ):
        self.task_gate = task_gate or Gate00TaskCompletion()
        self.monetization_gate = monetization_gate or Gate01Monetization()

    def initial_step(self, script: Script) -> GatewayStep:
        """Начальный шаг активации."""
        return self.evaluate_transition(None, script, frozenset()).new_step

    def evaluate_transition(
        self,
        current_step: Optional[GatewayStep],
        script: Script,
        completed_task_ids: AbstractSet[str],
    ) -> GatewayTransitionResult:
        """Оценка перехода шага.

        Args:
            current_step: текущий шаг (None при активации)
            script: скрипт активации
            completed_task_ids: completion set текущей активации

        Returns:
            GatewayTransitionResult с новым шагом

        Raises:
            ValueError: completion set не является подмножеством задач скрипта
        """
        gate00 = self.task_gate.evaluate(script, completed_task_ids)

        if not gate00.passed:
            target = GatewayStep.TASKS
        elif self.monetization_gate.evaluate(script).requires_redirect:
            target = GatewayStep.MONETIZATION
        else:
            target = GatewayStep.RESULT

        # 1. Активация
        if current_step is None:
            return GatewayTransitionResult(
                new_step=target,
                previous_step=None,
                transition_occurred=True,
                transition_reason="activation",
                completed_count=gate00.completed_count,
                total_count=gate00.total_count,
                details=f"Activated at {target.value} ({gate00.details})",
            )

        # 2. Регресс запрещён
        if target.ordinal < current_step.ordinal:
            return GatewayTransitionResult(
                new_step=current_step,
                previous_step=current_step,
                transition_occurred=False,
                transition_reason="regression_blocked",
                completed_count=gate00.completed_count,
                total_count=gate00.total_count,
                details=f"Target {target.value} is behind {current_step.value}",
            )

        # 3. Нет перехода
        if target == current_step:
            return GatewayTransitionResult(
                new_step=current_step,
                previous_step=current_step,
                transition_occurred=False,
                transition_reason="no_transition",
                completed_count=gate00.completed_count,
                total_count=gate00.total_count,
                details=gate00.details,
            )

        # 4. Переход вперёд
        return GatewayTransitionResult(
            new_step=target,
            previous_step=current_step,
            transition_occurred=True,
            transition_reason=f"{current_step.value}_to_{target.value}",
            completed_count=gate00.completed_count,
            total_count=gate00.total_count,
            details=f"Transition {current_step.value} → {target.value}",
        )
