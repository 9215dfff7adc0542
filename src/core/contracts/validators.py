"""
JSON Schema Contract Validators

Модуль для валидации данных пула согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema (Draft 2020-12).

Схемы:
- pool_config.json   (параметры пула)
- pool_snapshot.json (snapshot публичных запросов)
- pool_event.json    (записи журнала событий)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Определяем корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'pool_snapshot')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Мета-валидация самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class PoolConfigValidator(ContractValidator):
    """Валидатор для pool_config контракта."""

    def __init__(self):
        super().__init__("pool_config")


class PoolSnapshotValidator(ContractValidator):
    """Валидатор для pool_snapshot контракта."""

    def __init__(self):
        super().__init__("pool_snapshot")


class PoolEventValidator(ContractValidator):
    """Валидатор для pool_event контракта."""

    def __init__(self):
        super().__init__("pool_event")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pool_config(data: Dict[str, Any]) -> None:
    """
    Валидация сырой конфигурации пула.

    Raises:
        ValidationError: If data does not match the schema
    """
    PoolConfigValidator().validate(data)


def validate_pool_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация выгруженного PoolSnapshot.

    Raises:
        ValidationError: If data does not match the schema
    """
    PoolSnapshotValidator().validate(data)


def validate_pool_event(data: Dict[str, Any]) -> None:
    """
    Валидация выгруженного события пула.

    Raises:
        ValidationError: If data does not match the schema
    """
    PoolEventValidator().validate(data)


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "PoolConfigValidator",
    "PoolSnapshotValidator",
    "PoolEventValidator",
    "ValidationError",
    "validate_pool_config",
    "validate_pool_snapshot",
    "validate_pool_event",
]
