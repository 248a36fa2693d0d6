"""PolicyLedger — записи полисов и сумма заблокированного покрытия."""

from typing import List

from src.core.domain.policy import Policy
from src.core.errors import AlreadyResolved, PolicyNotFound
from src.runtime.contract import Contract


class PolicyLedger:
    """Реестр полисов.

    id выдаются монотонно с 1 и никогда не переиспользуются.
    total_locked_coverage == сумма coverage по незакрытым полисам.
    """

    def __init__(self, contract: Contract):
        self._contract = contract

    @property
    def _storage(self):
        return self._contract.storage

    @property
    def total_locked_coverage(self) -> int:
        return self._storage.total_locked_coverage

    def get(self, policy_id: int) -> Policy:
        policy = self._storage.policies.get(policy_id)
        if policy is None:
            raise PolicyNotFound(f"PolicyNotFound: {policy_id}")
        return policy

    def all(self) -> List[Policy]:
        return [self._storage.policies[pid] for pid in sorted(self._storage.policies)]

    def record(self, coverage: int, premium: int, start: int, end: int) -> Policy:
        """Новый полис + блокировка покрытия."""
        storage = self._storage
        policy = Policy(
            id=storage.next_policy_id,
            coverage=coverage,
            premium=premium,
            start=start,
            end=end,
        )
        storage.policies[policy.id] = policy
        storage.next_policy_id += 1
        storage.total_locked_coverage += coverage
        return policy

    def close(self, policy_id: int) -> Policy:
        """ACTIVE → RESOLVED + разблокировка покрытия.

        Raises:
            PolicyNotFound: полиса нет
            AlreadyResolved: полис уже закрыт
        """
        policy = self.get(policy_id)
        if policy.resolved:
            raise AlreadyResolved(f"AlreadyResolved: {policy_id}")

        closed = policy.mark_resolved()
        self._storage.policies[policy_id] = closed
        self._storage.total_locked_coverage -= closed.coverage
        return closed
