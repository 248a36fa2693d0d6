"""
PoolState — Модели параметров и состояния пула

Immutable Pydantic модели:
- PoolParameters — три параметра в basis points (ParameterStore)
- PoolSnapshot — снапшот агрегата пула для аудита/экспорта
  (совместим с JSON Schema contracts/schema/pool_snapshot.json)
"""

from pydantic import BaseModel, Field, field_validator

from .policy import Policy
from .units import BPS


# =============================================================================
# PARAMETERS
# =============================================================================


class PoolParameters(BaseModel):
    """
    Параметры ценообразования и лимитов пула.

    Каждое значение: 0 < value <= BPS.
    """

    max_coverage_bps: int = Field(
        ..., description="Лимит покрытия одного полиса (% от свободной ликвидности)"
    )
    premium_rate_bps: int = Field(..., description="Ставка премии (% от покрытия)")
    protocol_fee_bps: int = Field(..., description="Комиссия протокола (% от премии)")

    model_config = {"frozen": True, "strict": True}

    @field_validator("max_coverage_bps", "premium_rate_bps", "protocol_fee_bps")
    @classmethod
    def validate_bps_range(cls, v: int) -> int:
        if not 0 < v <= BPS:
            raise ValueError(f"basis points value {v} outside (0, {BPS}]")
        return v


# =============================================================================
# SNAPSHOT
# =============================================================================


class Totals(BaseModel):
    """
    Агрегированные суммы пула (wei).

    available_liquidity не хранится в пуле — здесь это вычисленное значение
    total_assets - total_locked_coverage.
    """

    total_shares: int = Field(..., ge=0, description="Сумма долей всех LP")
    total_assets: int = Field(..., ge=0, description="Учтённый капитал пула")
    total_locked_coverage: int = Field(
        ..., ge=0, description="Сумма coverage по незакрытым полисам"
    )
    available_liquidity: int = Field(..., description="Свободная ликвидность")
    balance: int = Field(..., ge=0, description="Фактический нативный баланс пула")

    model_config = {"frozen": True}


class PoolSnapshot(BaseModel):
    """
    Снапшот состояния пула.

    Immutable модель (frozen=True). Содержит:
    - Метаданные (адрес, владелец, время, пауза)
    - Параметры
    - Агрегированные суммы
    - Доли LP и записи полисов
    """

    # Метаданные
    address: str = Field(..., min_length=1, description="Адрес пула")
    owner: str = Field(..., min_length=1, description="Владелец пула")
    ts: int = Field(..., ge=0, description="Время снапшота (unix seconds)")
    paused: bool = Field(..., description="Пул на паузе")

    # Структурированные данные
    parameters: PoolParameters = Field(..., description="Параметры пула")
    totals: Totals = Field(..., description="Агрегированные суммы")
    shares: dict[str, int] = Field(default_factory=dict, description="Доли по LP")
    policies: list[Policy] = Field(default_factory=list, description="Все полисы")

    model_config = {"frozen": True}
