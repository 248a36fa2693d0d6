"""PoolConfig — параметры деплоя пула

Значения по умолчанию: max_coverage 20%, premium_rate 3%, protocol_fee 5%.
Файл конфигурации (JSON) проверяется против contracts/schema/pool_config.json.
Путь к файлу может быть задан переменной окружения PARAPOOL_CONFIG.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from src.core.contracts import PoolConfigValidator
from src.core.domain.units import MAX_POLICY_DURATION
from src.pool.parameters import ParameterStore

CONFIG_ENV_VAR = "PARAPOOL_CONFIG"


@dataclass(frozen=True)
class PoolConfig:
    """Конфигурация деплоя.

    Bps-значения проверяются при создании (InvalidBPS). max_policy_duration
    можно только сократить относительно MAX_POLICY_DURATION.
    """

    max_coverage_bps: int = 2000
    premium_rate_bps: int = 300
    protocol_fee_bps: int = 500
    max_policy_duration: int = MAX_POLICY_DURATION

    # Среда исполнения
    genesis_time: Optional[int] = None
    validate_events: bool = True

    def __post_init__(self):
        ParameterStore.validate(self.max_coverage_bps, self.premium_rate_bps, self.protocol_fee_bps)
        if not 0 < self.max_policy_duration <= MAX_POLICY_DURATION:
            raise ValueError(
                f"max_policy_duration must be in (0, {MAX_POLICY_DURATION}]: {self.max_policy_duration}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoolConfig":
        """
        Raises:
            jsonschema.ValidationError: данные не соответствуют pool_config.json
        """
        PoolConfigValidator().validate(data)
        return cls(**data)


def load_pool_config(path: Optional[Union[str, Path]] = None) -> PoolConfig:
    """
    Загрузка конфигурации из JSON файла.

    Args:
        path: путь к файлу; если не задан — PARAPOOL_CONFIG, иначе значения
            по умолчанию

    Raises:
        FileNotFoundError: файл не найден
        jsonschema.ValidationError: файл не соответствует схеме
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return PoolConfig()

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return PoolConfig.from_dict(data)
