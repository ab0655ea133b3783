"""
Batch runner and cross-trial statistics.

Runs ``trial_count`` independent walks under one SimulationConfig and reduces
them to bankruptcy rate, average profit, average steps taken and the
bankroll extremes over the whole batch.

Every trial draws from its own stream, spawned from a single SeedSequence:
trial *i* always gets child *i*. A fixed seed therefore reproduces the same
trials, in the same order, whether the batch runs sequentially or across a
process pool.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from itertools import repeat

import numpy as np

from walk_lab.core.contracts import AggregateResult, SimulationConfig, TrialResult
from walk_lab.core.logging import package_level, setup_logging
from walk_lab.engine.validation import bet_exceeds_bankroll, validate_config
from walk_lab.engine.walk import WalkSimulator

logger = logging.getLogger(__name__)


def _run_trial(config: SimulationConfig, stream: np.random.SeedSequence) -> TrialResult:
    return WalkSimulator(np.random.default_rng(stream)).simulate(config)


def summarize(config: SimulationConfig, trials: list[TrialResult]) -> AggregateResult:
    """Reduce a completed list of trials into an AggregateResult."""
    n = len(trials)
    bankrupt_count = sum(1 for t in trials if t.bankrupt)
    profits = np.fromiter((t.profit for t in trials), dtype=np.float64, count=n)
    steps = np.fromiter((t.steps_taken for t in trials), dtype=np.float64, count=n)

    return AggregateResult(
        config=config,
        trials=tuple(trials),
        bankrupt_count=bankrupt_count,
        bankruptcy_rate=bankrupt_count / n,
        average_profit=float(profits.mean()),
        average_steps_taken=float(steps.mean()),
        max_bankroll=max(t.max_bankroll for t in trials),
        min_bankroll=min(t.min_bankroll for t in trials),
    )


class ResultAggregator:
    """
    Runs a batch of trials and aggregates them.

    Args:
        seed: Integer seed or SeedSequence. An int reproduces the same batch
            on every call; a SeedSequence advances its spawn counter, so
            successive calls differ. None draws fresh OS entropy.
        max_workers: Run trials in a process pool when > 1.
    """

    def __init__(
        self,
        seed: int | np.random.SeedSequence | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.seed = seed
        self.max_workers = max_workers

    def _streams(self, count: int) -> list[np.random.SeedSequence]:
        if isinstance(self.seed, np.random.SeedSequence):
            root = self.seed
        else:
            root = np.random.SeedSequence(self.seed)
        return root.spawn(count)

    def run(self, config: SimulationConfig) -> AggregateResult:
        """Run ``config.trial_count`` trials and return the aggregate.

        Raises:
            InvalidConfiguration: Before any trial runs, if the config is invalid
        """
        validate_config(config)
        if bet_exceeds_bankroll(config):
            logger.warning(
                "Bet size %d exceeds initial bankroll %d: the first loss is ruin",
                config.bet_size,
                config.initial_bankroll,
            )

        streams = self._streams(config.trial_count)
        parallel = bool(self.max_workers and self.max_workers > 1 and config.trial_count > 1)
        logger.info(
            "Running %d trial(s): bank=%d bet=%d p=%.4f steps=%d%s",
            config.trial_count,
            config.initial_bankroll,
            config.bet_size,
            config.win_probability,
            config.max_steps,
            f" on {self.max_workers} workers" if parallel else "",
        )

        if parallel:
            chunksize = max(1, config.trial_count // (self.max_workers * 4))
            with ProcessPoolExecutor(
                max_workers=self.max_workers,
                initializer=setup_logging,
                initargs=(package_level(),),
            ) as executor:
                # map() yields in submission order, not completion order
                trials = list(
                    executor.map(_run_trial, repeat(config), streams, chunksize=chunksize)
                )
        else:
            trials = [_run_trial(config, stream) for stream in streams]

        result = summarize(config, trials)
        logger.info(
            "Batch done: bankruptcy_rate=%.3f avg_profit=%.2f avg_steps=%.1f",
            result.bankruptcy_rate,
            result.average_profit,
            result.average_steps_taken,
        )
        return result


def run(
    config: SimulationConfig,
    seed: int | np.random.SeedSequence | None = None,
    max_workers: int | None = None,
) -> AggregateResult:
    """Convenience wrapper: ``ResultAggregator(seed, max_workers).run(config)``."""
    return ResultAggregator(seed=seed, max_workers=max_workers).run(config)
