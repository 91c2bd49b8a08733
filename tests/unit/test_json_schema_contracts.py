"""
Tests for JSON Schema Contract Validators

Тестирование валидаторов строк хранилища:
- Валидность самих схем
- Валидация правильных строк
- Детекция нарушений required полей, типов и enum
"""

from pathlib import Path

import pytest
from jsonschema import ValidationError

from slenderhub.core.contracts import (
    SCHEMA_DIR,
    ExecutorRecordValidator,
    SchemaLoader,
    ScriptRecordValidator,
    TaskRecordValidator,
    validate_executor_record,
    validate_script_record,
    validate_task_record,
)


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_task():
    return {"id": "t1", "script_id": "s1", "type": "discord_join", "url": "https://discord.example/i", "text": "Join"}


@pytest.fixture
def valid_script(valid_task):
    return {
        "id": "s1",
        "title": "Auto Farm",
        "game_name": "Blox Fruits",
        "raw_link": None,
        "shortener_link": "https://short.example/x",
        "views": 0,
        "tasks": [valid_task],
    }


@pytest.fixture
def valid_executor():
    return {"id": "e1", "name": "Delta", "status": "Updating", "platform": "iOS"}


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    @pytest.mark.parametrize("name", ["script", "task", "executor"])
    def test_schemas_load(self, name):
        schema = SchemaLoader().load_schema(name)

        assert schema["title"] == name

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("nope")

    def test_missing_dir(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_schemas_ship_inside_package(self):
        """Схемы лежат в пакете slenderhub.core.contracts, а не в корне checkout."""
        import slenderhub.core.contracts as contracts_pkg

        assert SCHEMA_DIR.parent == Path(contracts_pkg.__file__).parent
        assert SchemaLoader().schema_dir == SCHEMA_DIR
        assert sorted(p.name for p in SCHEMA_DIR.glob("*.json")) == [
            "executor.json",
            "script.json",
            "task.json",
        ]

    def test_validator_with_explicit_loader(self, tmp_path):
        (tmp_path / "script.json").write_text(
            '{"type": "object", "required": ["id"]}', encoding="utf-8"
        )

        validator = ScriptRecordValidator(SchemaLoader(tmp_path))

        assert validator.is_valid({"id": 1})
        assert not validator.is_valid({})


# =============================================================================
# VALIDATORS
# =============================================================================


class TestScriptRecord:
    def test_valid(self, valid_script):
        validate_script_record(valid_script)
        assert ScriptRecordValidator().is_valid(valid_script)

    def test_missing_title(self, valid_script):
        del valid_script["title"]

        with pytest.raises(ValidationError):
            validate_script_record(valid_script)

    def test_negative_views(self, valid_script):
        valid_script["views"] = -3

        assert not ScriptRecordValidator().is_valid(valid_script)

    def test_nested_task_enum(self, valid_script):
        valid_script["tasks"][0]["type"] = "tiktok_follow"

        errors = list(ScriptRecordValidator().iter_errors(valid_script))
        assert len(errors) == 1


class TestTaskRecord:
    def test_valid(self, valid_task):
        validate_task_record(valid_task)

    def test_empty_url(self, valid_task):
        valid_task["url"] = ""

        assert not TaskRecordValidator().is_valid(valid_task)


class TestExecutorRecord:
    def test_valid(self, valid_executor):
        validate_executor_record(valid_executor)

    def test_bad_platform(self, valid_executor):
        valid_executor["platform"] = "Linux"

        with pytest.raises(ValidationError):
            ExecutorRecordValidator().validate(valid_executor)
