"""Gateway Flow Controller: активация gateway flow для одного скрипта.

Контроллер хранит состояние одной активации (шаг, completion set, pending
marker, флаг copied) и реагирует на дискретные действия пользователя и
срабатывания таймеров. Все переходы выполняются в одном логическом потоке.

Reset contract: каждая активация (новый скрипт, закрытие/повторное
открытие) очищает completion set, pending marker и copied, отменяет все
таймеры и заново вычисляет начальный шаг. Таймер прошлой активации,
сработавший после reset, ничего не меняет.

Побочные эффекты идут через GatewayEffects (open_url, write_clipboard) и
callback закрытия. Контроллер не ждёт их завершения.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Set

import structlog

from slenderhub.core.domain.script import Script, Task
from slenderhub.gatekeeper.gates.gate_02_loader_source import Gate02LoaderSource
from slenderhub.gateway.config import GatewayTimingConfig
from slenderhub.gateway.scheduler import Scheduler, TimerHandle
from slenderhub.gateway.state_machine import GatewayStep, GatewayStepMachine
from slenderhub.gateway.verification import DelayedTrustVerification, VerificationStrategy

logger = structlog.get_logger(__name__)


class GatewayEffects(Protocol):
    """Внешние эффекты контроллера."""

    def open_url(self, url: str) -> None:
        """Открыть URL в новом browsing context."""
        ...

    def write_clipboard(self, text: str) -> None:
        ...


# =============================================================================
# VIEW
# =============================================================================


@dataclass(frozen=True)
class TaskRow:
    """Строка задачи в шаге TASKS."""

    id: str
    label: str
    completed: bool
    pending: bool


@dataclass(frozen=True)
class GatewayView:
    """Снапшот активации для отрисовки."""

    script_id: str
    title: str
    game_name: str
    author: str
    step: GatewayStep

    tasks: tuple[TaskRow, ...]
    progress_label: str

    # RESULT
    loader: Optional[str]
    no_source: bool
    copied: bool

    # Индикатор шагов: показывается только при наличии задач
    show_progress_dots: bool
    progress_dots: tuple[bool, bool]


@dataclass(frozen=True)
class TaskClickResult:
    """Результат клика по задаче."""

    accepted: bool
    reason: str
    task_id: str


# =============================================================================
# CONTROLLER
# =============================================================================


class GatewayFlowController:
    """Контроллер gateway flow.

    Порядок работы:
    1. sync()/activate() с новым скриптом → reset и начальный шаг
    2. click_task() → open_url + verification strategy
    3. Все задачи подтверждены → settle delay → MONETIZATION или RESULT
    4. proceed() в MONETIZATION → open_url(shortener_link) + close
    5. copy_loader() в RESULT → write_clipboard + флаг copied
    """

    def __init__(
        self,
        effects: GatewayEffects,
        scheduler: Scheduler,
        on_close: Optional[Callable[[], None]] = None,
        verification: Optional[VerificationStrategy] = None,
        config: Optional[GatewayTimingConfig] = None,
        step_machine: Optional[GatewayStepMachine] = None,
    ):
        self.effects = effects
        self.scheduler = scheduler
        self.config = config or GatewayTimingConfig()
        self.verification = verification or DelayedTrustVerification(
            scheduler, delay_ms=self.config.verification_delay_ms
        )
        self.step_machine = step_machine or GatewayStepMachine()
        self._loader_gate = Gate02LoaderSource()
        self._on_close = on_close

        self._script: Optional[Script] = None
        self._activation_id = 0
        self._active = False
        self._step: Optional[GatewayStep] = None
        self._completed: Set[str] = set()
        self._pending_task_id: Optional[str] = None
        self._copied = False

        # Таймеры текущей активации
        self._verifying: Dict[str, TimerHandle] = {}
        self._settle_handle: Optional[TimerHandle] = None
        self._copy_handle: Optional[TimerHandle] = None

    # -------------------------------------------------------------------------
    # Activation
    # -------------------------------------------------------------------------

    def sync(
        self,
        script: Optional[Script],
        is_open: bool,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        """Синхронизация с входом хоста (script, is_open, close callback).

        Активация пересчитывается, если flow был закрыт или скрипт изменился.
        Закрытие хостом (is_open=False или script=None) сбрасывает активацию
        без вызова close callback.
        """
        if on_close is not None:
            self._on_close = on_close

        if not is_open or script is None:
            if self._active:
                self._deactivate(reason="host_closed")
            self._script = script
            return

        if not self._active or script != self._script:
            self.activate(script)

    def activate(self, script: Script) -> None:
        """Новая активация для скрипта (всегда с полным reset)."""
        self._reset_activation()
        self._script = script
        self._active = True
        self._step = self.step_machine.initial_step(script)
        logger.info(
            "gateway.activated",
            script_id=script.id,
            activation_id=self._activation_id,
            step=self._step.value,
            task_count=len(script.tasks),
        )

    def close(self) -> None:
        """Закрыть flow (кнопка закрытия/backdrop) и отправить close signal."""
        if not self._active:
            return
        self._deactivate(reason="closed")
        if self._on_close is not None:
            self._on_close()

    def _deactivate(self, reason: str) -> None:
        script_id = self._script.id if self._script else None
        self._reset_activation()
        logger.info("gateway.closed", script_id=script_id, reason=reason)

    def _reset_activation(self) -> None:
        """Отмена всех таймеров и инвалидация текущей активации."""
        for handle in self._verifying.values():
            handle.cancel()
        self._verifying.clear()
        if self._settle_handle is not None:
            self._settle_handle.cancel()
            self._settle_handle = None
        if self._copy_handle is not None:
            self._copy_handle.cancel()
            self._copy_handle = None

        self._activation_id += 1
        self._active = False
        self._step = None
        self._completed = set()
        self._pending_task_id = None
        self._copied = False

    # -------------------------------------------------------------------------
    # TASKS
    # -------------------------------------------------------------------------

    def click_task(self, task_id: str) -> TaskClickResult:
        """Клик по задаче: открыть URL и начать подтверждение.

        Raises:
            ValueError: задача не принадлежит скрипту активации
        """
        if not self._active or self._script is None:
            return TaskClickResult(accepted=False, reason="inactive", task_id=task_id)

        task = self._script.get_task(task_id)
        if task is None:
            raise ValueError(f"task {task_id!r} does not belong to script {self._script.id!r}")

        if self._step != GatewayStep.TASKS:
            return TaskClickResult(accepted=False, reason="not_in_tasks_step", task_id=task_id)
        if task_id in self._completed:
            return TaskClickResult(accepted=False, reason="already_completed", task_id=task_id)
        if task_id in self._verifying:
            return TaskClickResult(accepted=False, reason="verification_pending", task_id=task_id)

        self.effects.open_url(task.url)
        self._pending_task_id = task_id

        activation_id = self._activation_id
        handle = self.verification.begin(
            task, lambda: self._on_task_verified(activation_id, task)
        )
        # Стратегия могла подтвердить задачу синхронно внутри begin()
        if activation_id == self._activation_id and task_id not in self._completed:
            self._verifying[task_id] = handle
        logger.debug(
            "gateway.task_pending",
            script_id=self._script.id,
            task_id=task_id,
            task_type=task.type.value,
        )
        return TaskClickResult(accepted=True, reason="verification_started", task_id=task_id)

    def _on_task_verified(self, activation_id: int, task: Task) -> None:
        if activation_id != self._activation_id or not self._active or self._script is None:
            logger.debug("gateway.stale_timer", kind="verification", task_id=task.id)
            return

        self._verifying.pop(task.id, None)
        if self._pending_task_id == task.id:
            self._pending_task_id = None
        self._completed.add(task.id)

        gate00 = self.step_machine.task_gate.evaluate(self._script, self._completed)
        logger.info(
            "gateway.task_verified",
            script_id=self._script.id,
            task_id=task.id,
            progress=gate00.progress_label,
        )

        if gate00.passed and self._settle_handle is None:
            self._settle_handle = self.scheduler.call_later(
                self.config.settle_delay_ms,
                lambda: self._on_settled(activation_id),
            )

    def _on_settled(self, activation_id: int) -> None:
        if activation_id != self._activation_id or not self._active or self._script is None:
            logger.debug("gateway.stale_timer", kind="settle")
            return

        self._settle_handle = None
        result = self.step_machine.evaluate_transition(self._step, self._script, self._completed)
        if result.transition_occurred:
            self._step = result.new_step
            logger.info(
                "gateway.step_changed",
                script_id=self._script.id,
                previous_step=result.previous_step.value if result.previous_step else None,
                step=result.new_step.value,
                reason=result.transition_reason,
            )

    # -------------------------------------------------------------------------
    # MONETIZATION
    # -------------------------------------------------------------------------

    def proceed(self) -> bool:
        """Переход по monetization redirect; flow закрывается.

        Returns:
            True если redirect открыт
        """
        if not self._active or self._script is None:
            return False
        if self._step != GatewayStep.MONETIZATION or self._script.shortener_link is None:
            return False

        redirect_url = self._script.shortener_link
        self.effects.open_url(redirect_url)
        logger.info("gateway.redirect", script_id=self._script.id, url=redirect_url)
        self.close()
        return True

    # -------------------------------------------------------------------------
    # RESULT
    # -------------------------------------------------------------------------

    @property
    def loader(self) -> Optional[str]:
        """Loader-строка (только в шаге RESULT и при наличии raw_link)."""
        if not self._active or self._script is None or self._step != GatewayStep.RESULT:
            return None
        return self._loader_gate.evaluate(self._script).loader

    def copy_loader(self) -> bool:
        """Скопировать loader-строку в буфер обмена.

        Returns:
            False если артефакта нет (no_source или шаг не RESULT)
        """
        loader = self.loader
        if loader is None:
            return False

        self.effects.write_clipboard(loader)
        self._copied = True

        if self._copy_handle is not None:
            self._copy_handle.cancel()
        activation_id = self._activation_id
        self._copy_handle = self.scheduler.call_later(
            self.config.copy_feedback_ms,
            lambda: self._on_copy_feedback_expired(activation_id),
        )
        return True

    def _on_copy_feedback_expired(self, activation_id: int) -> None:
        if activation_id != self._activation_id:
            logger.debug("gateway.stale_timer", kind="copy_feedback")
            return
        self._copy_handle = None
        self._copied = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def activation_id(self) -> int:
        return self._activation_id

    @property
    def step(self) -> Optional[GatewayStep]:
        return self._step

    @property
    def completed_task_ids(self) -> frozenset[str]:
        return frozenset(self._completed)

    @property
    def pending_task_id(self) -> Optional[str]:
        return self._pending_task_id

    @property
    def copied(self) -> bool:
        return self._copied

    def view(self) -> Optional[GatewayView]:
        """Снапшот для отрисовки; None если отрисовывать нечего."""
        if not self._active or self._script is None or self._step is None:
            return None

        script = self._script
        rows: List[TaskRow] = [
            TaskRow(
                id=task.id,
                label=task.label,
                completed=task.id in self._completed,
                pending=task.id in self._verifying,
            )
            for task in script.tasks
        ]
        gate02 = self._loader_gate.evaluate(script)
        in_result = self._step == GatewayStep.RESULT

        return GatewayView(
            script_id=script.id,
            title=script.title,
            game_name=script.game_name,
            author=script.author,
            step=self._step,
            tasks=tuple(rows),
            progress_label=f"{len(self._completed)}/{len(script.tasks)}",
            loader=gate02.loader if in_result else None,
            no_source=in_result and not gate02.has_source,
            copied=self._copied,
            show_progress_dots=script.has_tasks,
            progress_dots=(
                self._step.ordinal >= 0,
                self._step.ordinal >= 1,
            ),
        )
