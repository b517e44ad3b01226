"""Threshold rebalancing simulator."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from fgi_rebalancer.simulator.errors import InvalidInputError, NonPositivePriceError
from fgi_rebalancer.simulator.models import PortfolioState, RunResult, Sample, SimulationConfig


def simulate(
    samples: Sequence[Sample],
    threshold: float = 50,
    config: Optional[SimulationConfig] = None,
) -> RunResult:
    """Replay ``samples`` once, rotating between assets around ``threshold``.

    At or above the threshold the whole stable balance is swapped into the
    volatile asset; below it everything above the reserve is swapped back.
    The caller's sequence is left untouched.
    """
    config = config or SimulationConfig()
    ordered = _prepare_samples(samples)

    first = ordered[0]
    initial_capital = config.initial_capital
    initial_volatile_amount = initial_capital / first.price
    state = PortfolioState(
        volatile_balance=initial_volatile_amount / 2,
        stable_balance=initial_capital / 2,
        last_trade_price=first.price,
    )

    for sample in ordered[1:]:
        if sample.sentiment >= threshold and state.stable_balance > 0:
            _buy_volatile(state, sample.price, config)
        elif sample.sentiment < threshold and state.volatile_balance > config.reserve_amount:
            _sell_volatile(state, sample.price, config)

    last = ordered[-1]
    final_value = state.value(last.price)
    baseline_value = initial_volatile_amount * last.price
    win_rate = state.winning_trades / state.num_trades * 100 if state.num_trades > 0 else 0.0

    return RunResult(
        start_time=first.timestamp,
        end_time=last.timestamp,
        start_price=first.price,
        end_price=last.price,
        baseline_return=_percent_change(baseline_value, initial_capital),
        strategy_return=_percent_change(final_value, initial_capital),
        num_trades=state.num_trades,
        winning_trades=state.winning_trades,
        win_rate=win_rate,
        threshold=threshold,
        ending_volatile_balance=state.volatile_balance,
        ending_stable_balance=state.stable_balance,
        total_value=final_value,
    )


def _prepare_samples(samples: Optional[Sequence[Sample]]) -> list[Sample]:
    if not samples:
        raise InvalidInputError("At least one sample is required")
    for sample in samples:
        if not (sample.price > 0 and math.isfinite(sample.price)):
            raise NonPositivePriceError(f"Price must be positive and finite at {sample.timestamp}: {sample.price}")
    return sorted(samples, key=lambda sample: sample.timestamp)


def _buy_volatile(state: PortfolioState, price: float, config: SimulationConfig) -> None:
    platform_fee = state.stable_balance * config.platform_fee_rate
    bought = (state.stable_balance - platform_fee) / price
    state.volatile_balance += bought - config.flat_fee
    state.stable_balance = 0.0
    # a buy wins when it is cheaper than the previous trade
    state.record_trade(price, won=price < state.last_trade_price)


def _sell_volatile(state: PortfolioState, price: float, config: SimulationConfig) -> None:
    available = state.volatile_balance - config.reserve_amount - config.flat_fee
    if available <= 0:
        return
    proceeds = available * price
    platform_fee = proceeds * config.platform_fee_rate
    state.stable_balance += proceeds - platform_fee
    state.volatile_balance = config.reserve_amount
    state.record_trade(price, won=price > state.last_trade_price)


def _percent_change(value: float, reference: float) -> float:
    return (value - reference) / reference * 100
