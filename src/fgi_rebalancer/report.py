"""Human-readable and JSON-ready views of a run."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from fgi_rebalancer.simulator.models import OptimizationResult, RunResult


def summarize_run(result: RunResult) -> dict[str, Any]:
    return {
        "start_time": _isoformat(result.start_time),
        "end_time": _isoformat(result.end_time),
        "start_price": result.start_price,
        "end_price": result.end_price,
        "threshold": result.threshold,
        "strategy_return": result.strategy_return,
        "baseline_return": result.baseline_return,
        "outperformance": result.outperformance,
        "num_trades": result.num_trades,
        "winning_trades": result.winning_trades,
        "win_rate": result.win_rate,
        "ending_volatile_balance": result.ending_volatile_balance,
        "ending_stable_balance": result.ending_stable_balance,
        "total_value": result.total_value,
    }


def summarize_sweep(optimization: OptimizationResult) -> list[dict[str, Any]]:
    return [
        {
            "threshold": score.threshold,
            "strategy_return": score.strategy_return,
            "num_trades": score.result.num_trades,
            "win_rate": score.result.win_rate,
        }
        for score in optimization.scores
    ]


def format_summary(result: RunResult, asset: Optional[str] = None) -> list[str]:
    volatile_label = asset or "volatile"
    return [
        "==== Backtest Results ====",
        f"Time period: {_format_date(result.start_time)} to {_format_date(result.end_time)}",
        f"Threshold: {result.threshold}",
        f"Starting price: {result.start_price:.2f}",
        f"Ending price: {result.end_price:.2f}",
        "",
        f"Strategy performance: {result.strategy_return:.2f}%",
        f"Buy & hold performance: {result.baseline_return:.2f}%",
        f"Outperformance: {result.outperformance:.2f}%",
        "",
        f"Number of trades: {result.num_trades}",
        f"Win rate: {result.win_rate:.2f}%",
        "",
        f"Ending portfolio value: {result.total_value:.2f}",
        f"{volatile_label} balance: {result.ending_volatile_balance:.6f}",
        f"Stable balance: {result.ending_stable_balance:.2f}",
    ]


def _isoformat(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value


def _format_date(value: Any) -> str:
    return value.date().isoformat() if isinstance(value, datetime) else str(value)
