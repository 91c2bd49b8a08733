"""
Admin capability: проверка прав администратора

Allow-list администраторов хранится во внешнем хранилище (admin_users) и
запрашивается через AdminDirectory. Результат проверки оформляется как
AdminCapability и передаётся в компоненты явно, а не через глобальное состояние.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

import structlog

from slenderhub.core.domain.account import AdminRole, AdminUser

logger = structlog.get_logger(__name__)


class AdminLookupError(RuntimeError):
    """Ошибка обращения к allow-list (внешнее хранилище недоступно)."""


class AdminDirectory(Protocol):
    """Источник allow-list администраторов."""

    def find_role(self, email: str) -> Optional[AdminRole]:
        """Роль по email (без учёта регистра) или None.

        Raises:
            AdminLookupError: хранилище недоступно
        """
        ...


class StaticAdminDirectory:
    """Allow-list из фиксированного набора записей (email без учёта регистра)."""

    def __init__(self, admins: Iterable[AdminUser]):
        self._roles = {admin.email.casefold(): admin.role for admin in admins}

    def find_role(self, email: str) -> Optional[AdminRole]:
        return self._roles.get(email.casefold())


@dataclass(frozen=True)
class AdminCapability:
    """Права текущего пользователя."""

    email: Optional[str]
    role: Optional[AdminRole]

    @property
    def is_admin(self) -> bool:
        return self.role is not None

    @property
    def is_owner(self) -> bool:
        return self.role == AdminRole.OWNER

    @classmethod
    def anonymous(cls) -> "AdminCapability":
        return cls(email=None, role=None)

    @classmethod
    def for_email(cls, directory: AdminDirectory, email: Optional[str]) -> "AdminCapability":
        """
        Capability для пользователя.

        Ошибка хранилища не фатальна: пользователь остаётся без прав,
        ошибка логируется.
        """
        if not email:
            return cls.anonymous()
        try:
            role = directory.find_role(email)
        except AdminLookupError as e:
            logger.warning("catalog.admin_lookup_failed", email=email, error=str(e))
            return cls(email=email, role=None)

        logger.debug("catalog.admin_lookup", email=email, role=role.value if role else None)
        return cls(email=email, role=role)
