"""GATE 1: Monetization redirect

Второй gate в цепочке (после GATE 0).
- Скрипт с shortener_link требует перехода по внешнему redirect
- После redirect flow закрывается: итоговая страница внешняя
"""

from dataclasses import dataclass
from typing import Optional

from slenderhub.core.domain.script import Script


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    requires_redirect: bool
    redirect_url: Optional[str]
    details: str


class Gate01Monetization:
    """GATE 1: нужен ли monetization redirect."""

    def evaluate(self, script: Script) -> Gate01Result:
        if script.shortener_link is not None:
            return Gate01Result(
                requires_redirect=True,
                redirect_url=script.shortener_link,
                details="Monetization redirect configured",
            )
        return Gate01Result(
            requires_redirect=False,
            redirect_url=None,
            details="No monetization redirect",
        )
