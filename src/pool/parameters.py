"""ParameterStore — три параметра пула в basis points.

Обновление применяется только к полисам, купленным после него:
Policy хранит coverage/premium/start/end и не ссылается на параметры.
"""

import logging

from src.core.domain.events import ParametersUpdated
from src.core.domain.pool_state import PoolParameters
from src.core.domain.units import BPS, is_valid_bps
from src.core.errors import InvalidBPS
from src.pool.access import AccessControl
from src.runtime.contract import Contract

logger = logging.getLogger(__name__)


class ParameterStore:

    def __init__(self, contract: Contract, access: AccessControl):
        self._contract = contract
        self._access = access

    @property
    def current(self) -> PoolParameters:
        return self._contract.storage.parameters

    @staticmethod
    def validate(
        max_coverage_bps: int,
        premium_rate_bps: int,
        protocol_fee_bps: int,
    ) -> PoolParameters:
        """Проверка и сборка параметров.

        Raises:
            InvalidBPS: если хотя бы одно значение вне (0, BPS]
        """
        values = {
            "max_coverage_bps": max_coverage_bps,
            "premium_rate_bps": premium_rate_bps,
            "protocol_fee_bps": protocol_fee_bps,
        }
        for name, value in values.items():
            if not is_valid_bps(value):
                raise InvalidBPS(f"InvalidBPS: {name}={value!r} outside (0, {BPS}]")

        return PoolParameters(**values)

    def update(
        self,
        caller: str,
        max_coverage_bps: int,
        premium_rate_bps: int,
        protocol_fee_bps: int,
    ) -> PoolParameters:
        self._access.require_owner(caller)
        parameters = self.validate(max_coverage_bps, premium_rate_bps, protocol_fee_bps)

        self._contract.storage.parameters = parameters
        self._contract._emit(ParametersUpdated(**parameters.model_dump()))
        logger.info(
            "Pool %s parameters updated: max_coverage=%d premium_rate=%d protocol_fee=%d bps",
            self._contract.address,
            max_coverage_bps,
            premium_rate_bps,
            protocol_fee_bps,
        )
        return parameters
