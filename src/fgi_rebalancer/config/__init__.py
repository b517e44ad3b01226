"""Config loading and freezing."""

from fgi_rebalancer.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    serialize_config,
    verify_config_lock,
)
from fgi_rebalancer.config.models import BacktestConfig, DataConfig

__all__ = [
    "BacktestConfig",
    "DataConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "serialize_config",
    "verify_config_lock",
]
