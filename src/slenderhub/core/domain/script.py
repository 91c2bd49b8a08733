"""
Script: Модель скрипта каталога и его задач (tasks)

Immutable Pydantic модели, представляющие скрипт из внешнего хранилища
вместе с упорядоченным списком задач, которые нужно выполнить до выдачи
loader-строки. Gateway flow трактует эти модели как read-only вход.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, Field, field_validator

from slenderhub.core.contracts.validators import validate_script_record


# =============================================================================
# ENUMS
# =============================================================================


class TaskType(str, Enum):
    """Тип задачи (внешнее действие перед разблокировкой)"""

    YOUTUBE_SUBSCRIBE = "youtube_subscribe"
    YOUTUBE_LIKE = "youtube_like"
    DISCORD_JOIN = "discord_join"
    VISIT_URL = "visit_url"

    @property
    def label(self) -> str:
        """Фиксированная подпись кнопки задачи в gateway."""
        return _TASK_LABELS[self]

    @property
    def default_text(self) -> str:
        """Текст задачи по умолчанию при публикации."""
        return _TASK_DEFAULT_TEXTS[self]


_TASK_LABELS: Final[dict[TaskType, str]] = {
    TaskType.YOUTUBE_SUBSCRIBE: "Subscribe to Channel",
    TaskType.YOUTUBE_LIKE: "Like Video",
    TaskType.DISCORD_JOIN: "Join Discord Server",
    TaskType.VISIT_URL: "Visit Website",
}

_TASK_DEFAULT_TEXTS: Final[dict[TaskType, str]] = {
    TaskType.YOUTUBE_SUBSCRIBE: "Subscribe to channel",
    TaskType.YOUTUBE_LIKE: "Like video",
    TaskType.DISCORD_JOIN: "Join Discord server",
    TaskType.VISIT_URL: "Visit page",
}


# =============================================================================
# TASK MODEL
# =============================================================================


class Task(BaseModel):
    """
    Одна задача gateway flow (subscribe / like / join / visit).
    """

    id: str = Field(..., min_length=1, description="Идентификатор задачи")
    type: TaskType = Field(..., description="Тип задачи")
    url: str = Field(..., min_length=1, description="Целевой URL действия")
    text: str = Field("", description="Текст задачи, заданный автором")

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return self.type.label


# =============================================================================
# SCRIPT MODEL
# =============================================================================


class Script(BaseModel):
    """
    Модель скрипта каталога.

    Immutable модель (frozen=True). Последовательность gateway полностью
    определяется двумя фактами:
    - непуст ли список tasks
    - задан ли shortener_link (monetization redirect)

    key_system носит информационный характер и gateway flow не проверяется.
    """

    # Идентификация
    id: str = Field(..., min_length=1, description="Идентификатор скрипта")
    title: str = Field(..., min_length=1, description="Название")
    game_name: str = Field(..., description="Название игры")

    # Карточка каталога
    description: str = Field("", description="Описание")
    image_url: str = Field("", description="Публичный URL миниатюры")
    author: str = Field("", description="Автор (email или username)")
    views: int = Field(0, ge=0, description="Число просмотров")
    created_at_ms: int = Field(0, ge=0, description="Время создания (UTC, миллисекунды)")

    # Источники
    raw_link: str | None = Field(None, description="URL сырого исходника")
    shortener_link: str | None = Field(None, description="Monetization redirect URL")

    # Gateway
    tasks: list[Task] = Field(default_factory=list, description="Упорядоченный список задач")

    # Флаги
    key_system: bool = Field(False, description="Требуется ли отдельная key system")
    verified: bool = Field(False, description="Проверен администратором")
    is_official: bool = Field(False, description="Официальный скрипт хаба")

    model_config = {"frozen": True}

    @field_validator("raw_link", "shortener_link", mode="before")
    @classmethod
    def normalize_empty_link(cls, v: Any) -> Any:
        """Пустая строка из формы/хранилища трактуется как отсутствие ссылки"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("created_at_ms", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> Any:
        """ISO-8601 строка хранилища принимается наравне с миллисекундами"""
        if v is None or isinstance(v, str):
            return parse_timestamp_ms(v)
        return v

    @field_validator("tasks")
    @classmethod
    def validate_unique_task_ids(cls, v: list[Task]) -> list[Task]:
        """Идентификаторы задач внутри скрипта уникальны"""
        seen: set[str] = set()
        for task in v:
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id!r}")
            seen.add(task.id)
        return v

    @property
    def task_ids(self) -> frozenset[str]:
        return frozenset(task.id for task in self.tasks)

    @property
    def has_tasks(self) -> bool:
        return len(self.tasks) > 0

    @property
    def has_redirect(self) -> bool:
        return self.shortener_link is not None

    def get_task(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Script":
        """
        Маппинг строки scripts (snake_case, с вложенными tasks) в модель.

        Строка сначала проверяется JSON Schema контрактом.

        Raises:
            jsonschema.ValidationError: строка не соответствует контракту
            pydantic.ValidationError: нарушены доменные ограничения
        """
        validate_script_record(record)

        tasks = [
            Task(
                id=str(t["id"]),
                type=t["type"],
                url=t["url"],
                text=t.get("text") or "",
            )
            for t in (record.get("tasks") or [])
        ]

        return cls(
            id=str(record["id"]),
            title=record["title"],
            game_name=record["game_name"],
            description=record.get("description") or "",
            image_url=record.get("image_url") or "",
            author=record.get("author") or "",
            views=record.get("views") or 0,
            created_at_ms=record.get("created_at"),
            raw_link=record.get("raw_link"),
            shortener_link=record.get("shortener_link"),
            tasks=tasks,
            key_system=bool(record.get("key_system")),
            verified=bool(record.get("verified")),
            is_official=bool(record.get("is_official")),
        )


def parse_timestamp_ms(value: str | None) -> int:
    """
    ISO-8601 timestamp хранилища → Unix миллисекунды (UTC).

    Naive timestamp трактуется как UTC. None → 0.

    Raises:
        ValueError: строка не является ISO-8601 timestamp
    """
    if not value:
        return 0
    # fromisoformat до 3.11 не понимает суффикс 'Z'
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)
