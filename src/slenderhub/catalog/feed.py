"""
Feed: поиск и trending для ленты скриптов

Скрипты приходят из хранилища уже отсортированными по created_at (desc).
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from slenderhub.core.domain.script import Script


@dataclass(frozen=True)
class FeedConfig:
    """Конфигурация ленты."""

    trending_limit: int = 4

    def __post_init__(self):
        if self.trending_limit < 0:
            raise ValueError(f"trending_limit must be >= 0, got {self.trending_limit}")


def matches_query(script: Script, query: str) -> bool:
    """Подстрока query (без учёта регистра) в title, game_name или author"""
    q = query.casefold()
    return (
        q in script.title.casefold()
        or q in script.game_name.casefold()
        or q in script.author.casefold()
    )


def search_scripts(scripts: Iterable[Script], query: str = "") -> list[Script]:
    """
    Поиск по ленте.

    Официальные скрипты идут первыми; внутри групп сохраняется исходный
    порядок (sorted стабилен).
    """
    found = [s for s in scripts if matches_query(s, query)]
    return sorted(found, key=lambda s: not s.is_official)


def trending_scripts(
    scripts: Iterable[Script], config: Optional[FeedConfig] = None
) -> list[Script]:
    """Top-N скриптов по просмотрам."""
    config = config or FeedConfig()
    return sorted(scripts, key=lambda s: s.views, reverse=True)[: config.trending_limit]
