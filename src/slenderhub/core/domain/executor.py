"""
Executor: Модель исполнителя скриптов (executor) из каталога

Immutable Pydantic модель строки executors.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from slenderhub.core.contracts.validators import validate_executor_record


class ExecutorStatus(str, Enum):
    """Статус executor"""

    WORKING = "Working"
    PATCHED = "Patched"
    UPDATING = "Updating"
    DETECTED = "Detected"


class Platform(str, Enum):
    """Платформа executor"""

    WINDOWS = "Windows"
    ANDROID = "Android"
    IOS = "iOS"
    MAC = "Mac"


class Executor(BaseModel):
    """Модель executor каталога."""

    id: str = Field(..., min_length=1, description="Идентификатор executor")
    name: str = Field(..., min_length=1, description="Название")
    description: str = Field("", description="Описание")
    image_url: str = Field("", description="Публичный URL изображения")
    download_url: str = Field("", description="URL загрузки")
    status: ExecutorStatus = Field(..., description="Текущий статус")
    platform: Platform = Field(..., description="Платформа")

    model_config = {"frozen": True}

    @property
    def is_usable(self) -> bool:
        """Только WORKING executor можно рекомендовать к загрузке"""
        return self.status == ExecutorStatus.WORKING

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Executor":
        """
        Маппинг строки executors в модель.

        Raises:
            jsonschema.ValidationError: строка не соответствует контракту
        """
        validate_executor_record(record)
        return cls(
            id=str(record["id"]),
            name=record["name"],
            description=record.get("description") or "",
            image_url=record.get("image_url") or "",
            download_url=record.get("download_url") or "",
            status=record["status"],
            platform=record["platform"],
        )
