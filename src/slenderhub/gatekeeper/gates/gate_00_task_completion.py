"""GATE 0: Task completion

Первый gate в цепочке gateway flow.
- Пропускает, когда completion set покрывает все задачи скрипта
- Скрипт без задач проходит сразу
- Completion set обязан быть подмножеством идентификаторов задач скрипта

Gate не знает, как именно задача была подтверждена: это ответственность
verification strategy контроллера.
"""

from dataclasses import dataclass
from typing import AbstractSet

from slenderhub.core.domain.script import Script


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    passed: bool
    block_reason: str

    # Прогресс
    completed_count: int
    total_count: int
    remaining_task_ids: tuple[str, ...]

    # Детали
    details: str

    @property
    def progress_label(self) -> str:
        return f"{self.completed_count}/{self.total_count}"


class Gate00TaskCompletion:
    """GATE 0: все задачи скрипта подтверждены.

    Порядок проверок:
    1. Completion set ⊆ task ids (иначе ValueError)
    2. Нет задач → PASS
    3. Остались неподтверждённые задачи → блокировка
    """

    def __init__(self):
        """GATE 0 не требует зависимостей (stateless)."""
        pass

    def evaluate(self, script: Script, completed_task_ids: AbstractSet[str]) -> Gate00Result:
        """Оценка GATE 0.

        Args:
            script: скрипт активации
            completed_task_ids: подтверждённые в текущей активации задачи

        Returns:
            Gate00Result с прогрессом и решением

        Raises:
            ValueError: completion set содержит чужие идентификаторы
        """
        unknown = set(completed_task_ids) - script.task_ids
        if unknown:
            raise ValueError(
                f"completed task ids {sorted(unknown)} do not belong to script {script.id!r}"
            )

        total = len(script.tasks)
        completed = len(completed_task_ids)
        # Порядок оставшихся задач совпадает с порядком в скрипте
        remaining = tuple(t.id for t in script.tasks if t.id not in completed_task_ids)

        if total == 0:
            return Gate00Result(
                passed=True,
                block_reason="",
                completed_count=0,
                total_count=0,
                remaining_task_ids=(),
                details="No tasks configured",
            )

        if remaining:
            return Gate00Result(
                passed=False,
                block_reason="tasks_incomplete",
                completed_count=completed,
                total_count=total,
                remaining_task_ids=remaining,
                details=f"Tasks incomplete: {completed}/{total}",
            )

        return Gate00Result(
            passed=True,
            block_reason="",
            completed_count=completed,
            total_count=total,
            remaining_task_ids=(),
            details=f"All tasks completed: {completed}/{total}",
        )
