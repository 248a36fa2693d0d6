"""
Contract Validation Module

JSON Schema контракты пула: события, снапшот, конфигурация деплоя.
"""

from .validators import (
    DEFAULT_SCHEMA_DIR,
    ContractValidator,
    PoolConfigValidator,
    PoolEventValidator,
    PoolSnapshotValidator,
    SchemaLoader,
    default_loader,
    validate_pool_config,
    validate_pool_event,
    validate_pool_snapshot,
)

__all__ = [
    # Loader
    "DEFAULT_SCHEMA_DIR",
    "SchemaLoader",
    "default_loader",
    # Validators
    "ContractValidator",
    "PoolEventValidator",
    "PoolSnapshotValidator",
    "PoolConfigValidator",
    # Functions
    "validate_pool_event",
    "validate_pool_snapshot",
    "validate_pool_config",
]
