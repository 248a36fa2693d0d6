"""Деплой протокола: PolicyToken, Treasury, SimpleOracle, InsurancePool.

Порядок:
1. PolicyToken (owner = deployer)
2. Treasury
3. SimpleOracle
4. InsurancePool с параметрами из PoolConfig
5. Привязка PolicyToken к пулу (set_insurance_pool)

Запуск: python -m src.deploy [--config path.json] [--fund 100]
"""

import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional

from src.collaborators import PolicyToken, SimpleOracle, Treasury
from src.config import PoolConfig, load_pool_config
from src.core.domain.units import from_wei, to_wei
from src.pool import InsurancePool
from src.runtime import Clock, Ledger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Deployment:
    """Развёрнутый набор контрактов."""

    ledger: Ledger
    deployer: str
    token: PolicyToken
    treasury: Treasury
    oracle: SimpleOracle
    pool: InsurancePool


def deploy_protocol(
    ledger: Ledger,
    deployer: str,
    config: Optional[PoolConfig] = None,
    treasury: Optional[Treasury] = None,
) -> Deployment:
    """
    Деплой и связывание контрактов протокола.

    Args:
        ledger: среда исполнения
        deployer: адрес владельца всех контрактов
        config: параметры пула (по умолчанию PoolConfig())
        treasury: готовый получатель комиссий (по умолчанию — новый Treasury)
    """
    config = config or PoolConfig()
    logger.info("Deploying contracts with account %s (balance %s)",
                deployer, from_wei(ledger.balance_of(deployer)))

    token = PolicyToken(ledger, owner=deployer)
    logger.info("PolicyToken deployed to %s", token.address)

    if treasury is None:
        treasury = Treasury(ledger, owner=deployer)
    logger.info("Treasury deployed to %s", treasury.address)

    oracle = SimpleOracle(ledger, owner=deployer)
    logger.info("Oracle deployed to %s", oracle.address)

    pool = InsurancePool(
        ledger,
        owner=deployer,
        token=token,
        oracle=oracle,
        treasury=treasury,
        max_coverage_bps=config.max_coverage_bps,
        premium_rate_bps=config.premium_rate_bps,
        protocol_fee_bps=config.protocol_fee_bps,
        max_policy_duration=config.max_policy_duration,
    )
    logger.info("InsurancePool deployed to %s", pool.address)

    token.set_insurance_pool(deployer, pool.address)
    logger.info("PolicyToken linked to InsurancePool")

    return Deployment(
        ledger=ledger,
        deployer=deployer,
        token=token,
        treasury=treasury,
        oracle=oracle,
        pool=pool,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Deploy the parametric insurance pool")
    parser.add_argument("--config", help="JSON config (default: $PARAPOOL_CONFIG)")
    parser.add_argument("--fund", default="100", help="Deployer genesis balance, ether")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_pool_config(args.config)
    ledger = Ledger(clock=Clock(start=config.genesis_time), validate_events=config.validate_events)
    deployer = ledger.new_address("deployer")
    ledger.fund(deployer, to_wei(args.fund))

    deployment = deploy_protocol(ledger, deployer, config)
    logger.info("Deployment completed successfully: %s", deployment.pool.snapshot().model_dump_json())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
