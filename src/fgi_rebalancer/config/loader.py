"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from fgi_rebalancer.config.models import BacktestConfig, DataConfig
from fgi_rebalancer.simulator.models import OptimizerConfig, SimulationConfig


def load_config(path: str | Path) -> BacktestConfig:
    path = Path(path)
    data = _load_yaml(path)

    return BacktestConfig(
        name=str(_require(data, "name")),
        version=str(_require(data, "version")),
        data=_parse_data(data.get("data") or {}),
        simulation=_parse_simulation(data.get("simulation") or {}),
        optimizer=_parse_optimizer(data.get("optimizer") or {}),
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    config_hash = compute_config_hash(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)

    payload = {
        "config_path": str(path),
        "config_hash": config_hash,
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    expected = payload.get("config_hash")
    return expected == compute_config_hash(path)


def serialize_config(config: BacktestConfig) -> dict[str, Any]:
    return asdict(config)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _parse_data(data: dict[str, Any]) -> DataConfig:
    config = DataConfig(
        asset=str(data.get("asset", "SOL")),
        timeframe=str(data.get("timeframe", "4h")),
        period=str(data.get("period", "1_year")),
        base_url=str(data.get("base_url", "https://api.surfsolana.com")).rstrip("/"),
        timeout_seconds=float(data.get("timeout_seconds", 30.0)),
        max_retries=int(data.get("max_retries", 3)),
    )
    if config.max_retries < 1:
        raise ValueError(f"Invalid max_retries: {config.max_retries}")
    return config


def _parse_simulation(data: dict[str, Any]) -> SimulationConfig:
    config = SimulationConfig(
        initial_capital=float(data.get("initial_capital", 1000.0)),
        reserve_amount=float(data.get("reserve_amount", 0.01)),
        platform_fee_rate=float(data.get("platform_fee_rate", 0.0009)),
        flat_fee=float(data.get("flat_fee", 0.000025)),
    )
    if config.initial_capital <= 0:
        raise ValueError(f"Invalid initial_capital: {config.initial_capital}")
    for key in ("reserve_amount", "platform_fee_rate", "flat_fee"):
        if getattr(config, key) < 0:
            raise ValueError(f"Invalid {key}: {getattr(config, key)}")
    return config


def _parse_optimizer(data: dict[str, Any]) -> OptimizerConfig:
    return OptimizerConfig(
        min_threshold=int(data.get("min_threshold", 20)),
        max_threshold=int(data.get("max_threshold", 80)),
        default_threshold=int(data.get("default_threshold", 50)),
        max_workers=int(data.get("max_workers", 1)),
    )
