"""
Domain models and value objects.

Contains catalog entities: Script, Task, Executor, AdminUser, UserProfile.
"""

from slenderhub.core.domain.account import AdminRole, AdminUser, UserProfile
from slenderhub.core.domain.executor import Executor, ExecutorStatus, Platform
from slenderhub.core.domain.script import Script, Task, TaskType, parse_timestamp_ms

__all__ = [
    # Script model
    "Script",
    "Task",
    "TaskType",
    "parse_timestamp_ms",
    # Executor model
    "Executor",
    "ExecutorStatus",
    "Platform",
    # Accounts
    "AdminRole",
    "AdminUser",
    "UserProfile",
]
