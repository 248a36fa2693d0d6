"""
Interfaces (protocols) коллабораторов, которые потребляет пул.
Структурная типизация: пул не зависит от конкретных реализаций.
"""

from typing import Protocol


class OwnershipToken(Protocol):
    """Токен владения полисом."""

    address: str

    def mint(self, sender: str, to: str) -> int:
        """Выпуск токена; разрешён только привязанному пулу."""
        ...

    def owner_of(self, token_id: int) -> str:
        """Текущий держатель токена (бенефициар выплаты)."""
        ...


class OutcomeOracle(Protocol):
    """Источник boolean-исхода по policyId."""

    address: str

    def is_event_happened(self, policy_id: int) -> bool:
        ...


class FeeSink(Protocol):
    """Получатель комиссии протокола (принимает нативные переводы)."""

    address: str
