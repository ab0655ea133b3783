"""Tests for batch runs and cross-trial statistics."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from walk_lab.core.contracts import SimulationConfig
from walk_lab.core.exceptions import InvalidConfiguration
from walk_lab.core.logging import package_level, setup_logging
from walk_lab.engine.aggregator import ResultAggregator, run, summarize
from walk_lab.engine.walk import WalkSimulator


class TestBatchShape:
    def test_trial_count(self, default_config):
        result = run(default_config, seed=1)
        assert len(result.trials) == default_config.trial_count
        assert result.config == default_config

    def test_rate_matches_trials(self, default_config):
        result = run(default_config, seed=2)
        bankrupt = [t for t in result.trials if t.bankrupt]
        assert result.bankrupt_count == len(bankrupt)
        assert math.isclose(result.bankruptcy_rate, len(bankrupt) / len(result.trials))

    def test_averages(self, default_config):
        result = run(default_config, seed=3)
        profits = [t.profit for t in result.trials]
        steps = [t.steps_taken for t in result.trials]
        assert math.isclose(result.average_profit, sum(profits) / len(profits))
        assert math.isclose(result.average_steps_taken, sum(steps) / len(steps))

    def test_batch_extremes(self, default_config):
        result = run(default_config, seed=4)
        assert result.max_bankroll == max(max(t.history) for t in result.trials)
        assert result.min_bankroll == min(min(t.history) for t in result.trials)

    def test_primary_is_first_trial(self, default_config):
        result = run(default_config, seed=5)
        assert result.primary is result.trials[0]

    def test_trials_are_immutable(self, default_config):
        result = run(default_config, seed=7)
        assert isinstance(result.trials, tuple)
        assert isinstance(result.trials[0].history, tuple)
        with pytest.raises(AttributeError):
            result.trials.append(result.trials[0])
        assert len(result.trials) == default_config.trial_count

    def test_single_trial(self, default_config):
        result = run(default_config.model_copy(update={"trial_count": 1}), seed=6)
        assert len(result.trials) == 1
        assert result.bankruptcy_rate in (0.0, 1.0)


class TestDeterminism:
    def test_same_seed_same_trials(self, default_config):
        assert run(default_config, seed=11).trials == run(default_config, seed=11).trials

    def test_different_seed_differs(self, default_config):
        assert run(default_config, seed=11).trials != run(default_config, seed=12).trials

    def test_aggregator_reusable(self, default_config):
        aggregator = ResultAggregator(seed=99)
        assert aggregator.run(default_config) == aggregator.run(default_config)

    def test_seed_sequence_advances(self, default_config):
        aggregator = ResultAggregator(seed=np.random.SeedSequence(99))
        assert aggregator.run(default_config).trials != aggregator.run(default_config).trials

    def test_trial_i_uses_stream_i(self, default_config):
        result = run(default_config, seed=21)
        streams = np.random.SeedSequence(21).spawn(default_config.trial_count)
        third = WalkSimulator(np.random.default_rng(streams[2])).simulate(default_config)
        assert result.trials[2] == third

    def test_summary_only_matches_full(self, default_config):
        full = run(default_config, seed=8)
        lean = run(default_config.model_copy(update={"keep_history": False}), seed=8)
        assert all(t.history is None for t in lean.trials)
        assert lean.bankruptcy_rate == full.bankruptcy_rate
        assert lean.average_profit == full.average_profit
        assert [t.final_bankroll for t in lean.trials] == [
            t.final_bankroll for t in full.trials
        ]


class TestParallel:
    def test_parallel_matches_sequential(self, default_config):
        sequential = run(default_config, seed=31)
        parallel = run(default_config, seed=31, max_workers=2)
        assert parallel.trials == sequential.trials
        assert parallel.bankruptcy_rate == sequential.bankruptcy_rate

    def test_workers_inherit_log_level(self, default_config):
        setup_logging("DEBUG")
        assert package_level() == "DEBUG"
        parallel = run(default_config, seed=33, max_workers=2)
        assert parallel.trials == run(default_config, seed=33).trials

    def test_single_worker_runs_inline(self, default_config):
        assert run(default_config, seed=32, max_workers=1) == run(default_config, seed=32)


class TestFailures:
    def test_invalid_config_aborts_batch(self, default_config):
        bad = default_config.model_copy(update={"max_steps": 0})
        with pytest.raises(InvalidConfiguration):
            run(bad, seed=1)

    def test_bet_exceeds_bankroll_warns(self, caplog):
        config = SimulationConfig(
            initial_bankroll=50,
            bet_size=100,
            win_probability=0.5,
            max_steps=10,
            trial_count=5,
        )
        with caplog.at_level(logging.WARNING, logger="walk_lab"):
            result = run(config, seed=1)
        assert len(result.trials) == 5
        assert any("exceeds initial bankroll" in r.message for r in caplog.records)


# ─── Statistical Scenarios ─────────────────────────────────────


class TestScenarios:
    def test_single_fair_flip(self, coin_flip_config):
        result = run(coin_flip_config, seed=2024)
        assert all(t.steps_taken == 1 for t in result.trials)
        for t in result.trials:
            if t.bankrupt:
                assert t.final_bankroll == 0
            else:
                assert t.final_bankroll == 200
        sd = math.sqrt(0.25 / coin_flip_config.trial_count)
        assert abs(result.bankruptcy_rate - 0.5) < 3 * sd

    def test_hopeless_odds(self):
        config = SimulationConfig(
            initial_bankroll=1000,
            bet_size=100,
            win_probability=0.01,
            max_steps=1000,
            trial_count=50,
        )
        result = run(config, seed=5)
        assert result.bankruptcy_rate > 0.95
        assert result.average_steps_taken < 20

    def test_near_certain_wins(self):
        config = SimulationConfig(
            initial_bankroll=1000,
            bet_size=100,
            win_probability=0.99,
            max_steps=1000,
            trial_count=50,
        )
        result = run(config, seed=5)
        assert result.bankruptcy_rate < 0.05
        assert result.average_profit > 90_000
        assert result.average_steps_taken == 1000


class TestSummarize:
    def test_reduces_given_trials(self, default_config, rng):
        config = default_config.model_copy(update={"trial_count": 3})
        sim = WalkSimulator(rng)
        trials = [sim.simulate(config) for _ in range(3)]
        result = summarize(config, trials)
        assert result.trials == tuple(trials)
        assert result.bankrupt_count == sum(t.bankrupt for t in trials)
