"""
Account: Модели администратора и публичного профиля пользователя
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class AdminRole(str, Enum):
    """Роль в allow-list администраторов"""

    OWNER = "Owner"
    ADMIN = "Admin"


class AdminUser(BaseModel):
    """Запись allow-list администраторов (admin_users)."""

    id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, description="Email администратора")
    role: AdminRole = Field(..., description="Роль")

    model_config = {"frozen": True}

    @field_validator("email")
    @classmethod
    def validate_email_shape(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError(f"email {v!r} must contain '@'")
        return v


class UserProfile(BaseModel):
    """Публичный профиль автора."""

    id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    bio: str | None = None
    avatar_url: str | None = None
    youtube_url: str | None = None
    discord_url: str | None = None

    model_config = {"frozen": True}
