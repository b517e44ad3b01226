"""Brute-force search for the best sentiment threshold."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import Optional, Sequence

from fgi_rebalancer.simulator.engine import simulate
from fgi_rebalancer.simulator.errors import InvalidInputError
from fgi_rebalancer.simulator.models import (
    OptimizationResult,
    OptimizerConfig,
    Sample,
    SimulationConfig,
    ThresholdScore,
)

logger = logging.getLogger(__name__)


def sweep_thresholds(
    samples: Sequence[Sample],
    config: Optional[SimulationConfig] = None,
    optimizer: Optional[OptimizerConfig] = None,
) -> list[ThresholdScore]:
    """Simulate every candidate threshold, in ascending order."""
    optimizer = optimizer or OptimizerConfig()
    if not samples:
        raise InvalidInputError("At least one sample is required")
    # sort once up front so worker processes receive an already ordered copy
    ordered = sorted(samples, key=lambda sample: sample.timestamp)
    run = partial(_score_threshold, ordered, config)
    candidates = list(optimizer.candidates())

    if optimizer.max_workers > 1 and len(candidates) > 1:
        with ProcessPoolExecutor(max_workers=optimizer.max_workers) as executor:
            # map() yields in submission order, keeping the sweep ascending
            return list(executor.map(run, candidates))
    return [run(threshold) for threshold in candidates]


def optimize(
    samples: Sequence[Sample],
    config: Optional[SimulationConfig] = None,
    optimizer: Optional[OptimizerConfig] = None,
) -> OptimizationResult:
    optimizer = optimizer or OptimizerConfig()
    scores = sweep_thresholds(samples, config, optimizer)

    best_threshold = optimizer.default_threshold
    best_return = -math.inf
    best_result = None
    for score in scores:
        # strict comparison: ties keep the lower threshold
        if score.strategy_return > best_return:
            best_threshold = score.threshold
            best_return = score.strategy_return
            best_result = score.result
            logger.debug("New best threshold %d (%.4f%%)", best_threshold, best_return)

    return OptimizationResult(
        best_threshold=best_threshold,
        best_return=best_return,
        scores=scores,
        best_result=best_result,
    )


def find_optimal_threshold(
    samples: Sequence[Sample],
    config: Optional[SimulationConfig] = None,
    optimizer: Optional[OptimizerConfig] = None,
) -> int:
    return optimize(samples, config, optimizer).best_threshold


def _score_threshold(
    samples: Sequence[Sample],
    config: Optional[SimulationConfig],
    threshold: int,
) -> ThresholdScore:
    return ThresholdScore(threshold=threshold, result=simulate(samples, threshold, config))
