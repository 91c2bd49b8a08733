"""Gatekeeper: гейты, определяющие последовательность gateway flow.

- Фиксированный порядок: задачи → monetization → loader
- Все гейты stateless; состояние активации хранит контроллер
"""

from .gates import (
    Gate00Result,
    Gate00TaskCompletion,
    Gate01Monetization,
    Gate01Result,
    Gate02LoaderSource,
    Gate02Result,
)

__all__ = [
    "Gate00TaskCompletion",
    "Gate00Result",
    "Gate01Monetization",
    "Gate01Result",
    "Gate02LoaderSource",
    "Gate02Result",
]
