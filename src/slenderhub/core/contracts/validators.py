"""
Контракты строк хранилища

Строки scripts/tasks/executors приходят из внешнего хранилища как dict и
проверяются JSON Schema до маппинга в доменные модели. Схемы лежат рядом
с модулем (schema/*.json) и устанавливаются вместе с пакетом.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

SCHEMA_DIR = Path(__file__).parent / "schema"


class SchemaLoader:
    """Чтение и meta-проверка схем из каталога (по умолчанию SCHEMA_DIR)."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: нет файла <schema_name>.json
            ValueError: схема не проходит meta-validation Draft 2020-12
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def _default_loader() -> SchemaLoader:
    return SchemaLoader()


class ContractValidator:
    """Валидатор строки хранилища по имени схемы."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.schema = (loader or _default_loader()).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: строка не соответствует контракту
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class ScriptRecordValidator(ContractValidator):
    """Строка scripts вместе с вложенными tasks."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("script", loader)


class TaskRecordValidator(ContractValidator):
    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("task", loader)


class ExecutorRecordValidator(ContractValidator):
    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("executor", loader)


def validate_script_record(data: Dict[str, Any]) -> None:
    ScriptRecordValidator().validate(data)


def validate_task_record(data: Dict[str, Any]) -> None:
    TaskRecordValidator().validate(data)


def validate_executor_record(data: Dict[str, Any]) -> None:
    ExecutorRecordValidator().validate(data)


__all__ = [
    "SCHEMA_DIR",
    "SchemaLoader",
    "ContractValidator",
    "ScriptRecordValidator",
    "TaskRecordValidator",
    "ExecutorRecordValidator",
    "ValidationError",
    "validate_script_record",
    "validate_task_record",
    "validate_executor_record",
]
