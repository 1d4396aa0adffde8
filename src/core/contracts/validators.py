"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- engine_config.json (конфигурация движка при создании)
- account_snapshot.json (снапшот счёта для внешних потребителей)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self, schema_dir: Path | None = None):
        """
        Инициализация загрузчика.

        Args:
            schema_dir: Каталог схем (default: contracts/schema/ в корне проекта)

        Raises:
            RuntimeError: Если каталог схем не существует
        """
        # Корень проекта: 4 уровня вверх от этого файла
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'engine_config')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
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


# Глобальный экземпляр загрузчика
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
        """
        Инициализация валидатора.

        Args:
            schema_name: Имя схемы для валидации
        """
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Args:
            data: Данные для валидации (dict)

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """
        Проверка валидности данных без exception.

        Args:
            data: Данные для проверки (dict)

        Returns:
            True если данные валидны, False иначе
        """
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """
        Итератор по всем ошибкам валидации.

        Args:
            data: Данные для проверки (dict)

        Yields:
            jsonschema.ValidationError для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class EngineConfigValidator(ContractValidator):
    """
    Валидатор для engine_config контракта.

    Payload создания движка: активы, price feeds, параметры протокола.
    """

    def __init__(self):
        super().__init__("engine_config")


class AccountSnapshotValidator(ContractValidator):
    """
    Валидатор для account_snapshot контракта.

    Read-only снапшот счёта (CollateralEngine.snapshot_account).
    """

    def __init__(self):
        super().__init__("account_snapshot")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_engine_config(data: Dict[str, Any]) -> None:
    """
    Валидация engine_config данных.

    Args:
        data: Данные для валидации

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    EngineConfigValidator().validate(data)


def validate_account_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация account_snapshot данных.

    Args:
        data: Данные для валидации

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    AccountSnapshotValidator().validate(data)
