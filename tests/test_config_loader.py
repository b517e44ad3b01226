from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from fgi_rebalancer.config import freeze_config, load_config, serialize_config, verify_config_lock
from fgi_rebalancer.simulator import OptimizerConfig, SimulationConfig


SAMPLE_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "sol_4h.yaml"


def test_load_config_sample():
    config = load_config(SAMPLE_CONFIG)
    assert config.name == "sol-4h"
    assert config.version == "1"
    assert config.data.asset == "SOL"
    assert config.simulation == SimulationConfig()
    assert config.optimizer == OptimizerConfig()


def test_missing_sections_use_defaults(tmp_path):
    path = tmp_path / "minimal.yaml"
    path.write_text("name: minimal\nversion: 2\n", encoding="utf-8")

    config = load_config(path)

    assert config.data.timeframe == "4h"
    assert config.simulation.platform_fee_rate == 0.0009
    assert list(config.optimizer.candidates()) == list(range(20, 81))
    assert serialize_config(config)["optimizer"]["default_threshold"] == 50


def test_missing_name_rejected(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("version: 1\n", encoding="utf-8")

    with pytest.raises(ValueError, match="name"):
        load_config(path)


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


@pytest.mark.parametrize(
    "section",
    [
        "optimizer:\n  min_threshold: 70\n  max_threshold: 30\n",
        "optimizer:\n  max_workers: 0\n",
        "simulation:\n  initial_capital: 0\n",
        "simulation:\n  flat_fee: -0.1\n",
    ],
)
def test_invalid_values_rejected(tmp_path, section):
    path = tmp_path / "invalid.yaml"
    path.write_text("name: invalid\nversion: 1\n" + section, encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_freeze_and_verify(tmp_path):
    target = tmp_path / "sol_4h.yaml"
    target.write_text(SAMPLE_CONFIG.read_text(encoding="utf-8"), encoding="utf-8")

    lock_path = freeze_config(target)
    assert verify_config_lock(target, lock_path)

    target.write_text(target.read_text(encoding="utf-8") + "# edited\n", encoding="utf-8")
    assert not verify_config_lock(target, lock_path)
