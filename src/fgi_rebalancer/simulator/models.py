"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Sample:
    timestamp: datetime
    price: float  # volatile asset priced in stable units
    sentiment: float  # fear/greed style score, nominally 0-100


@dataclass(frozen=True)
class SimulationConfig:
    """Fee and allocation parameters for a single simulation run.

    ``platform_fee_rate`` is charged on the stable amount moved by each swap.
    ``flat_fee`` is a per-swap network fee paid in the volatile asset, and
    ``reserve_amount`` is the volatile balance never sold so that flat fees
    can always be covered.
    """

    initial_capital: float = 1000.0
    reserve_amount: float = 0.01
    platform_fee_rate: float = 0.0009
    flat_fee: float = 0.000025


@dataclass(frozen=True)
class OptimizerConfig:
    min_threshold: int = 20
    max_threshold: int = 80
    default_threshold: int = 50
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.min_threshold > self.max_threshold:
            raise ValueError(f"Invalid threshold range: {self.min_threshold} > {self.max_threshold}")
        if self.max_workers < 1:
            raise ValueError(f"Invalid max_workers: {self.max_workers}")

    def candidates(self) -> range:
        return range(self.min_threshold, self.max_threshold + 1)


@dataclass
class PortfolioState:
    volatile_balance: float
    stable_balance: float
    last_trade_price: float
    num_trades: int = 0
    winning_trades: int = 0

    def value(self, price: float) -> float:
        return self.volatile_balance * price + self.stable_balance

    def record_trade(self, price: float, won: bool) -> None:
        self.num_trades += 1
        if won:
            self.winning_trades += 1
        self.last_trade_price = price


@dataclass(frozen=True)
class RunResult:
    start_time: datetime
    end_time: datetime
    start_price: float
    end_price: float
    baseline_return: float
    strategy_return: float
    num_trades: int
    winning_trades: int
    win_rate: float
    threshold: float
    ending_volatile_balance: float
    ending_stable_balance: float
    total_value: float

    @property
    def outperformance(self) -> float:
        return self.strategy_return - self.baseline_return


@dataclass(frozen=True)
class ThresholdScore:
    threshold: int
    result: RunResult

    @property
    def strategy_return(self) -> float:
        return self.result.strategy_return


@dataclass(frozen=True)
class OptimizationResult:
    best_threshold: int
    best_return: float
    scores: list[ThresholdScore]
    best_result: Optional[RunResult] = None
