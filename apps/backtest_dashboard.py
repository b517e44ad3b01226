from __future__ import annotations

import os
from pathlib import Path

import streamlit as st

from fgi_rebalancer.config import BacktestConfig, load_config
from fgi_rebalancer.data import load_samples
from fgi_rebalancer.report import summarize_sweep
from fgi_rebalancer.simulator import optimize


def _format_currency(value: float) -> str:
    return f"${value:,.2f}"


def _load_backtest_config(path: Path) -> BacktestConfig:
    if path.exists():
        return load_config(path)
    return BacktestConfig(name="adhoc", version="0")


def main() -> None:
    st.set_page_config(page_title="Sentiment Rebalancer", layout="wide")
    st.title("Sentiment Rebalancer: Threshold Sweep")

    default_config_path = os.getenv("FGI_CONFIG_PATH", "configs/sol_4h.yaml")
    default_samples_path = os.getenv("FGI_SAMPLES_PATH", "data/samples.json")

    config_path = Path(st.sidebar.text_input("Config path", value=default_config_path))
    samples_path = Path(st.sidebar.text_input("Samples path", value=default_samples_path))

    if not samples_path.exists():
        st.warning(f"No samples found at {samples_path}")
        return

    config = _load_backtest_config(config_path)
    samples = load_samples(samples_path)
    if not samples:
        st.warning(f"{samples_path} contains no samples")
        return

    optimization = optimize(samples, config.simulation, config.optimizer)
    result = optimization.best_result

    col_a, col_b, col_c, col_d = st.columns(4)
    col_a.metric("Best Threshold", str(optimization.best_threshold))
    col_b.metric("Strategy Return", f"{result.strategy_return:.2f}%")
    col_c.metric("Buy & Hold", f"{result.baseline_return:.2f}%")
    col_d.metric("Outperformance", f"{result.outperformance:.2f}%")

    col_e, col_f, col_g, col_h = st.columns(4)
    col_e.metric("Trades", str(result.num_trades))
    col_f.metric("Win Rate", f"{result.win_rate:.2f}%")
    col_g.metric("Ending Value", _format_currency(result.total_value))
    col_h.metric("Samples", str(len(samples)))

    st.subheader("Return by Threshold")
    sweep = summarize_sweep(optimization)
    st.line_chart(sweep, x="threshold", y="strategy_return")

    st.subheader("Details")
    st.json({
        "config": config.name,
        "start_time": str(result.start_time),
        "end_time": str(result.end_time),
        "ending_volatile_balance": result.ending_volatile_balance,
        "ending_stable_balance": result.ending_stable_balance,
        "platform_fee_rate": config.simulation.platform_fee_rate,
        "flat_fee": config.simulation.flat_fee,
    })


if __name__ == "__main__":
    main()
