"""
Publish: подготовка записи скрипта к сохранению во внешнем хранилище

Модуль проверяет черновик публикации и строит payload строк scripts/tasks
(snake_case, как их принимает хранилище). Сама запись, загрузка миниатюры и
выдача публичного URL выполняются внешними сервисами.

Правила:
- Нужен raw_link ИЛИ shortener_link (хотя бы один)
- Новый скрипт требует миниатюру; при редактировании сохраняется старая
- Новый скрипт verified только если публикует администратор
- При редактировании сохраняются author и verified
- is_official только для администратора
- Задачи при редактировании пересоздаются целиком
"""

import secrets
import time
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field, field_validator

from slenderhub.catalog.admin import AdminCapability
from slenderhub.core.domain.script import Script, Task, TaskType

logger = structlog.get_logger(__name__)


THUMBNAIL_PREFIX = "thumbnails"


class PublishValidationError(ValueError):
    """Черновик публикации не может быть сохранён."""


# =============================================================================
# TASK DRAFTS
# =============================================================================


def new_task(task_type: TaskType, url: str, task_id: Optional[str] = None) -> Task:
    """
    Задача из конструктора задач с текстом по умолчанию для её типа.

    Args:
        task_type: тип задачи
        url: целевой URL
        task_id: локальный идентификатор (по умолчанию: текущее время в мс)

    Raises:
        PublishValidationError: URL пуст
    """
    if not url or not url.strip():
        raise PublishValidationError("task url must not be empty")
    return Task(
        id=task_id or str(int(time.time() * 1000)),
        type=task_type,
        url=url.strip(),
        text=task_type.default_text,
    )


def thumbnail_path(file_name: str, now_ms: Optional[int] = None) -> str:
    """
    Путь объекта миниатюры в хранилище: thumbnails/<ms>-<random>.<ext>.
    """
    ext = file_name.rsplit(".", 1)[-1] if "." in file_name else "bin"
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{THUMBNAIL_PREFIX}/{stamp}-{secrets.token_hex(3)}.{ext}"


# =============================================================================
# PUBLISH DRAFT
# =============================================================================


class PublishDraft(BaseModel):
    """Черновик публикации скрипта (данные формы)."""

    title: str = Field(..., min_length=1)
    game_name: str = Field(..., min_length=1)
    description: str = ""
    raw_link: Optional[str] = None
    shortener_link: Optional[str] = None
    key_system: bool = False
    is_official: bool = False
    tasks: list[Task] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("raw_link", "shortener_link", mode="before")
    @classmethod
    def normalize_empty_link(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @classmethod
    def from_script(cls, script: Script) -> "PublishDraft":
        """Черновик для редактирования существующего скрипта."""
        return cls(
            title=script.title,
            game_name=script.game_name,
            description=script.description,
            raw_link=script.raw_link,
            shortener_link=script.shortener_link,
            key_system=script.key_system,
            is_official=script.is_official,
            tasks=list(script.tasks),
        )

    def with_task(self, task: Task) -> "PublishDraft":
        return self.model_copy(update={"tasks": [*self.tasks, task]})

    def without_task(self, task_id: str) -> "PublishDraft":
        return self.model_copy(update={"tasks": [t for t in self.tasks if t.id != task_id]})

    def validate_sources(self) -> None:
        """
        Raises:
            PublishValidationError: нет ни raw_link, ни shortener_link
        """
        if self.raw_link is None and self.shortener_link is None:
            raise PublishValidationError(
                "either a raw script URL or a monetization link is required"
            )

    def build_payload(
        self,
        author_email: str,
        capability: AdminCapability,
        image_url: Optional[str] = None,
        existing: Optional[Script] = None,
    ) -> dict[str, Any]:
        """
        Payload строки scripts для insert (existing=None) или update.

        Args:
            author_email: email текущего пользователя
            capability: admin capability текущего пользователя
            image_url: публичный URL новой миниатюры (None: не загружалась)
            existing: редактируемый скрипт

        Raises:
            PublishValidationError: нарушены правила публикации
        """
        if existing is None and not image_url:
            raise PublishValidationError("a thumbnail image is required for new scripts")
        self.validate_sources()

        if existing is not None:
            author = existing.author
            verified = existing.verified
            final_image = image_url or existing.image_url
        else:
            author = author_email
            verified = capability.is_admin
            final_image = image_url

        payload = {
            "title": self.title,
            "game_name": self.game_name,
            "description": self.description,
            "image_url": final_image,
            "author": author,
            "raw_link": self.raw_link,
            "shortener_link": self.shortener_link,
            "verified": verified,
            "is_official": capability.is_admin and self.is_official,
            "key_system": self.key_system,
        }
        logger.debug(
            "catalog.publish_payload",
            mode="update" if existing is not None else "insert",
            task_count=len(self.tasks),
            is_admin=capability.is_admin,
        )
        return payload

    def build_task_payloads(self, script_id: str) -> list[dict[str, Any]]:
        """Строки tasks для insert; локальные id задач не сохраняются."""
        return [
            {
                "script_id": script_id,
                "type": task.type.value,
                "url": task.url,
                "text": task.text,
            }
            for task in self.tasks
        ]
