"""
Single-trial bankroll random walk.

Each step is an independent Bernoulli trial: a uniform draw below
``win_probability`` wins ``bet_size``, anything else loses it. The walk is
absorbed the first time the bankroll reaches zero or below; the bankroll is
clamped to exactly 0 and no further steps are taken. There is no upper
barrier.
"""

from __future__ import annotations

import logging
from typing import Protocol

import numpy as np

from walk_lab.core.contracts import SimulationConfig, TrialResult
from walk_lab.engine.validation import validate_walk

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything exposing numpy's ``Generator.random(size)`` signature."""

    def random(self, size: int) -> np.ndarray: ...


def simulate(config: SimulationConfig, rng: RandomSource | None = None) -> TrialResult:
    """
    Run one trial of the walk.

    All ``max_steps`` uniforms are drawn up front, so a trial consumes the
    same amount of its stream whether or not it is absorbed early. Steps
    after absorption are discarded.

    Args:
        config: Simulation parameters; trial_count is neither read nor checked
        rng: Random source; a fresh unseeded numpy Generator when omitted

    Returns:
        TrialResult with trajectory (unless keep_history is False) and metrics

    Raises:
        InvalidConfiguration: If any parameter violates its precondition
    """
    validate_walk(config)
    if rng is None:
        rng = np.random.default_rng()

    draws = np.asarray(rng.random(config.max_steps), dtype=np.float64)
    increments = np.where(
        draws < config.win_probability, config.bet_size, -config.bet_size
    ).astype(np.int64)
    path = config.initial_bankroll + np.cumsum(increments)

    # Absorbing floor: truncate at the first non-positive value
    ruined = np.flatnonzero(path <= 0)
    if ruined.size:
        path = path[: ruined[0] + 1].copy()
        path[-1] = 0

    trajectory = np.concatenate(
        (np.array([config.initial_bankroll], dtype=np.int64), path)
    )
    final = int(trajectory[-1])

    return TrialResult(
        history=tuple(trajectory.tolist()) if config.keep_history else None,
        final_bankroll=final,
        steps_taken=len(trajectory) - 1,
        bankrupt=final == 0,
        max_bankroll=int(trajectory.max()),
        min_bankroll=int(trajectory.min()),
        profit=final - config.initial_bankroll,
    )


class WalkSimulator:
    """Runs independent trials against one injected random source."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def simulate(self, config: SimulationConfig) -> TrialResult:
        result = simulate(config, self.rng)
        logger.debug(
            "Trial finished: final=%d steps=%d bankrupt=%s",
            result.final_bankroll,
            result.steps_taken,
            result.bankrupt,
        )
        return result
