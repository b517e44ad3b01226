from __future__ import annotations

import argparse
import logging
from pathlib import Path

from fgi_rebalancer.config import BacktestConfig, freeze_config, load_config, verify_config_lock
from fgi_rebalancer.data import fetch_historical_data, load_samples
from fgi_rebalancer.report import format_summary
from fgi_rebalancer.simulator import optimize, simulate

logger = logging.getLogger("run_backtest")


def _load_backtest_config(path: str | None, freeze: bool) -> BacktestConfig:
    if not path:
        return BacktestConfig(name="adhoc", version="0")
    config_path = Path(path)
    if freeze:
        lock_path = freeze_config(config_path)
        print(f"Frozen {config_path} -> {lock_path}")
    elif config_path.with_suffix(config_path.suffix + ".lock.json").exists():
        if not verify_config_lock(config_path):
            logger.warning("Config %s no longer matches its lock file", config_path)
    return load_config(config_path)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", help="YAML backtest config")
    parser.add_argument("--freeze", action="store_true", help="Write a hash lock next to the config")
    parser.add_argument("--asset")
    parser.add_argument("--timeframe")
    parser.add_argument("--period")
    parser.add_argument("--samples", help="Local JSON/CSV with timestamp,price,fgi instead of fetching")
    parser.add_argument("--threshold", type=float, help="Skip optimisation and use this threshold")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_backtest_config(args.config, args.freeze)
    asset = args.asset or config.data.asset
    timeframe = args.timeframe or config.data.timeframe
    period = args.period or config.data.period

    if args.samples:
        samples = load_samples(args.samples)
    else:
        samples = fetch_historical_data(
            asset,
            timeframe,
            period,
            base_url=config.data.base_url,
            timeout=config.data.timeout_seconds,
            max_retries=config.data.max_retries,
        )

    print(f"Starting backtest for {asset} on {timeframe} timeframe...")
    if args.threshold is None:
        optimization = optimize(samples, config.simulation, config.optimizer)
        threshold = optimization.best_threshold
        print(f"Optimal threshold for {asset}: {threshold}")
    else:
        threshold = args.threshold

    result = simulate(samples, threshold, config.simulation)
    print()
    print("\n".join(format_summary(result, asset=asset)))


if __name__ == "__main__":
    main()
