"""GATE 2: Loader source

Последний gate: выдача loader-строки.
- raw_link задан → loader-строка
- raw_link отсутствует → информационное состояние no_source (не ошибка, без retry)
"""

from dataclasses import dataclass
from typing import Optional

from slenderhub.core.domain.script import Script
from slenderhub.core.loader import generate_loader


@dataclass(frozen=True)
class Gate02Result:
    """Результат GATE 2."""

    has_source: bool
    block_reason: str
    loader: Optional[str]
    details: str


class Gate02LoaderSource:
    """GATE 2: формирование артефакта."""

    def evaluate(self, script: Script) -> Gate02Result:
        if script.raw_link is None:
            return Gate02Result(
                has_source=False,
                block_reason="no_source",
                loader=None,
                details="No script source available",
            )
        return Gate02Result(
            has_source=True,
            block_reason="",
            loader=generate_loader(script.raw_link),
            details=f"Loader generated for {script.raw_link}",
        )
