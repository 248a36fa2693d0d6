"""SimpleOracle — boolean-исход страхового события по policyId.

Источник данных и доверие к нему вне модели: оракул — непрозрачный lookup.
Неизвестный policyId → False (событие не наступило).
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from src.core.domain.events import OutcomeRecorded
from src.pool.access import AccessControl
from src.runtime.contract import Contract
from src.runtime.ledger import Ledger

logger = logging.getLogger(__name__)


@dataclass
class OracleStorage:
    owner: str
    outcomes: Dict[int, bool] = field(default_factory=dict)


class SimpleOracle(Contract):

    def __init__(self, ledger: Ledger, owner: str, address: Optional[str] = None):
        super().__init__(ledger, OracleStorage(owner=owner), address)
        self.access = AccessControl(self)

    @property
    def owner(self) -> str:
        return self.access.owner

    def set_event(self, sender: str, policy_id: int, outcome: bool) -> None:
        """Запись исхода (owner-only)."""
        with self.ledger.transaction():
            self.access.require_owner(sender)
            self.storage.outcomes[policy_id] = bool(outcome)
            self._emit(OutcomeRecorded(policy_id=policy_id, outcome=bool(outcome)))
            logger.info("Oracle outcome for policy %d set to %s", policy_id, outcome)

    def is_event_happened(self, policy_id: int) -> bool:
        return self.storage.outcomes.get(policy_id, False)
