"""Тесты для Gateway Step Machine.

Coverage:
- Начальный шаг по двум статическим фактам скрипта
- Переходы вперёд после выполнения задач
- Запрет регресса
- Ошибки completion set
"""

import pytest

from slenderhub.core.domain.script import Script, Task, TaskType
from slenderhub.gateway.state_machine import GatewayStep, GatewayStepMachine


def make_script(task_ids=(), shortener_link=None, raw_link="https://example.com/s.lua"):
    return Script(
        id="s1",
        title="Title",
        game_name="Game",
        raw_link=raw_link,
        shortener_link=shortener_link,
        tasks=[Task(id=t, type=TaskType.YOUTUBE_LIKE, url=f"https://yt.example/{t}") for t in task_ids],
    )


@pytest.fixture
def sm():
    return GatewayStepMachine()


class TestInitialStep:
    """Начальный шаг активации."""

    @pytest.mark.parametrize(
        "task_ids,shortener_link,expected",
        [
            (("a",), None, GatewayStep.TASKS),
            (("a", "b"), "https://short.example/x", GatewayStep.TASKS),
            ((), "https://short.example/x", GatewayStep.MONETIZATION),
            ((), None, GatewayStep.RESULT),
        ],
    )
    def test_initial_step_rule(self, sm, task_ids, shortener_link, expected):
        assert sm.initial_step(make_script(task_ids, shortener_link)) == expected

    def test_missing_raw_link_still_lands_in_result(self, sm):
        assert sm.initial_step(make_script(raw_link=None)) == GatewayStep.RESULT

    def test_activation_result(self, sm):
        result = sm.evaluate_transition(None, make_script(("a",)), frozenset())

        assert result.transition_occurred
        assert result.transition_reason == "activation"
        assert result.previous_step is None
        assert result.total_count == 1


class TestTransitions:
    """Переходы после выполнения задач."""

    def test_tasks_to_result(self, sm):
        result = sm.evaluate_transition(GatewayStep.TASKS, make_script(("a", "b")), {"a", "b"})

        assert result.new_step == GatewayStep.RESULT
        assert result.transition_occurred
        assert result.transition_reason == "TASKS_to_RESULT"

    def test_tasks_to_monetization(self, sm):
        script = make_script(("a",), shortener_link="https://short.example/x")

        result = sm.evaluate_transition(GatewayStep.TASKS, script, {"a"})

        assert result.new_step == GatewayStep.MONETIZATION

    def test_partial_completion_stays(self, sm):
        result = sm.evaluate_transition(GatewayStep.TASKS, make_script(("a", "b")), {"b"})

        assert result.new_step == GatewayStep.TASKS
        assert not result.transition_occurred
        assert result.completed_count == 1

    def test_monetization_is_terminal(self, sm):
        script = make_script(("a",), shortener_link="https://short.example/x")

        result = sm.evaluate_transition(GatewayStep.MONETIZATION, script, {"a"})

        assert result.new_step == GatewayStep.MONETIZATION
        assert not result.transition_occurred

    def test_regression_blocked(self, sm):
        result = sm.evaluate_transition(GatewayStep.RESULT, make_script(("a",)), frozenset())

        assert result.new_step == GatewayStep.RESULT
        assert result.transition_reason == "regression_blocked"

    def test_foreign_completion_ids_rejected(self, sm):
        with pytest.raises(ValueError, match="do not belong"):
            sm.evaluate_transition(GatewayStep.TASKS, make_script(("a",)), {"zzz"})


class TestStepOrdering:
    def test_ordinals_are_linear(self):
        assert [s.ordinal for s in GatewayStep] == [0, 1, 2]
