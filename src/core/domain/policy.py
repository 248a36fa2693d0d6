"""
Policy — Модель страхового полиса

Immutable Pydantic модель, представляющая запись полиса в PolicyLedger.
Владелец полиса не хранится: бенефициар — текущий держатель токена владения,
он определяется в момент resolve.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class PolicyStatus(str, Enum):
    """Состояние полиса в lifecycle"""

    ACTIVE = "ACTIVE"
    RESOLVED = "RESOLVED"


# =============================================================================
# POLICY MODEL
# =============================================================================


class Policy(BaseModel):
    """
    Модель полиса.

    Immutable модель (frozen=True): любое изменение (resolve/expire) создаёт
    новый экземпляр через mark_resolved(). Поля coverage/premium/start/end
    фиксируются при покупке и никогда не меняются — обновление параметров
    пула на существующие полисы не влияет.
    """

    id: int = Field(..., ge=1, description="Идентификатор полиса (= tokenId)")
    coverage: int = Field(..., gt=0, description="Выплата при наступлении события (wei)")
    premium: int = Field(..., ge=0, description="Фактически оплаченная премия (wei)")
    start: int = Field(..., ge=0, description="Начало действия (unix seconds)")
    end: int = Field(..., ge=0, description="Окончание действия (unix seconds)")
    resolved: bool = Field(default=False, description="Полис закрыт (необратимо)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_window(self) -> "Policy":
        """Окно действия: end строго после start."""
        if self.end <= self.start:
            raise ValueError(f"Policy end {self.end} must be after start {self.start}")
        return self

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def status(self) -> PolicyStatus:
        return PolicyStatus.RESOLVED if self.resolved else PolicyStatus.ACTIVE

    def is_expired(self, now: int) -> bool:
        """
        Истёк ли срок полиса.

        Args:
            now: Текущее время (unix seconds)

        Returns:
            True если now >= end
        """
        return now >= self.end

    def mark_resolved(self) -> "Policy":
        """
        Переход ACTIVE → RESOLVED.

        Returns:
            Новый экземпляр с resolved=True

        Raises:
            ValueError: Если полис уже закрыт (переход только в одну сторону)
        """
        if self.resolved:
            raise ValueError(f"Policy {self.id} is already resolved")
        return self.model_copy(update={"resolved": True})
