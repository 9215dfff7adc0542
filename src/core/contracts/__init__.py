"""
Contract Validation Module

Валидация JSON контрактов пула (config, snapshot, events).
"""

from .validators import (
    ContractValidator,
    PoolConfigValidator,
    PoolEventValidator,
    PoolSnapshotValidator,
    SchemaLoader,
    validate_pool_config,
    validate_pool_event,
    validate_pool_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PoolConfigValidator",
    "PoolSnapshotValidator",
    "PoolEventValidator",
    # Functions
    "validate_pool_config",
    "validate_pool_snapshot",
    "validate_pool_event",
]
