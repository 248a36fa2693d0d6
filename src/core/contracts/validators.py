"""
JSON Schema Contract Validators

Формальные JSON-контракты пула (Draft 2020-12) и их проверка библиотекой
jsonschema.

Схемы (contracts/schema/):
- pool_event.json — payload каждого события, записываемого Ledger
- pool_snapshot.json — InsurancePool.snapshot()
- pool_config.json — файл конфигурации деплоя

Pydantic модели проверяются по своему JSON-представлению
(model_dump(mode="json")): контракт описывает то, что уходит наружу.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from pydantic import BaseModel

# contracts/schema относительно корня проекта
DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"

Payload = Union[Dict[str, Any], BaseModel]


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение и meta-валидация схем из каталога контрактов.

    Каждая схема читается с диска один раз и дальше отдаётся из кэша.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def available(self) -> List[str]:
        """Имена всех схем каталога (без расширения)."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Args:
            schema_name: имя схемы без расширения ('pool_event')

        Raises:
            FileNotFoundError: схемы нет в каталоге
            ValueError: файл не является корректной Draft 2020-12 схемой
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as exc:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {exc.message}") from exc

        self._cache[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def default_loader() -> SchemaLoader:
    return SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка payload против одной схемы."""

    schema_name: str = ""

    def __init__(self, schema_name: Optional[str] = None, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name or self.schema_name
        self.schema = (loader or default_loader()).load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    @staticmethod
    def _as_json(data: Payload) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(mode="json")
        return data

    def validate(self, data: Payload) -> None:
        """
        Raises:
            ValidationError: первая найденная ошибка контракта
        """
        self.validator.validate(self._as_json(data))

    def is_valid(self, data: Payload) -> bool:
        return self.validator.is_valid(self._as_json(data))

    def iter_errors(self, data: Payload) -> Iterator[ValidationError]:
        return self.validator.iter_errors(self._as_json(data))

    def error_messages(self, data: Payload) -> List[str]:
        """Все нарушения в виде 'path: message' (для логов и диагностики)."""
        messages = []
        for error in sorted(self.iter_errors(data), key=lambda e: list(e.absolute_path)):
            location = "/".join(str(part) for part in error.absolute_path) or "<root>"
            messages.append(f"{location}: {error.message}")
        return messages


class PoolEventValidator(ContractValidator):
    schema_name = "pool_event"


class PoolSnapshotValidator(ContractValidator):
    schema_name = "pool_snapshot"


class PoolConfigValidator(ContractValidator):
    schema_name = "pool_config"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pool_event(data: Payload) -> None:
    """
    Args:
        data: {"event": <имя>, "args": {...}}

    Raises:
        ValidationError: payload не соответствует pool_event.json
    """
    PoolEventValidator().validate(data)


def validate_pool_snapshot(data: Payload) -> None:
    """
    Raises:
        ValidationError: снапшот не соответствует pool_snapshot.json
    """
    PoolSnapshotValidator().validate(data)


def validate_pool_config(data: Payload) -> None:
    """
    Raises:
        ValidationError: конфигурация не соответствует pool_config.json
    """
    PoolConfigValidator().validate(data)
