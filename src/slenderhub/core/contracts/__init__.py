"""
Contract Validation Module

Модуль для валидации строк внешнего хранилища (scripts/tasks/executors).
"""

from .validators import (
    SCHEMA_DIR,
    ContractValidator,
    ExecutorRecordValidator,
    SchemaLoader,
    ScriptRecordValidator,
    TaskRecordValidator,
    validate_executor_record,
    validate_script_record,
    validate_task_record,
)

__all__ = [
    "SCHEMA_DIR",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ScriptRecordValidator",
    "TaskRecordValidator",
    "ExecutorRecordValidator",
    # Functions
    "validate_script_record",
    "validate_task_record",
    "validate_executor_record",
]
