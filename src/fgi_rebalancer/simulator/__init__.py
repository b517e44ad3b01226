"""Simulation and threshold search."""

from fgi_rebalancer.simulator.engine import simulate
from fgi_rebalancer.simulator.errors import (
    InvalidInputError,
    NonPositivePriceError,
    SimulationInputError,
)
from fgi_rebalancer.simulator.models import (
    OptimizationResult,
    OptimizerConfig,
    PortfolioState,
    RunResult,
    Sample,
    SimulationConfig,
    ThresholdScore,
)
from fgi_rebalancer.simulator.optimizer import find_optimal_threshold, optimize, sweep_thresholds

__all__ = [
    "InvalidInputError",
    "NonPositivePriceError",
    "OptimizationResult",
    "OptimizerConfig",
    "PortfolioState",
    "RunResult",
    "Sample",
    "SimulationConfig",
    "SimulationInputError",
    "ThresholdScore",
    "find_optimal_threshold",
    "optimize",
    "simulate",
    "sweep_thresholds",
]
