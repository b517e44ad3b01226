"""Configuration models for reproducible backtests."""

from __future__ import annotations

from dataclasses import dataclass

from fgi_rebalancer.simulator.models import OptimizerConfig, SimulationConfig


@dataclass(frozen=True)
class DataConfig:
    asset: str = "SOL"
    timeframe: str = "4h"
    period: str = "1_year"
    base_url: str = "https://api.surfsolana.com"
    timeout_seconds: float = 30.0
    max_retries: int = 3


@dataclass(frozen=True)
class BacktestConfig:
    name: str
    version: str
    data: DataConfig = DataConfig()
    simulation: SimulationConfig = SimulationConfig()
    optimizer: OptimizerConfig = OptimizerConfig()
