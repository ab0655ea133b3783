#!/usr/bin/env python3
"""
Run a handful of reference scenarios and print their batch statistics.

Covers a single fair all-or-nothing flip, near-hopeless odds, near-certain
wins and a bet larger than the bankroll.

Usage:
    python scripts/run_scenarios.py
"""

from __future__ import annotations

import logging

from walk_lab.core.contracts import SimulationConfig
from walk_lab.engine.aggregator import run
from walk_lab.reporting.summary import trials_frame

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)-28s] %(levelname)-7s %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("scenario_runner")

SCENARIOS = {
    "single fair flip": SimulationConfig(
        initial_bankroll=100, bet_size=100, win_probability=0.5,
        max_steps=1, trial_count=1000,
    ),
    "hopeless odds": SimulationConfig(
        initial_bankroll=1000, bet_size=100, win_probability=0.01,
        max_steps=1000, trial_count=50,
    ),
    "near-certain wins": SimulationConfig(
        initial_bankroll=1000, bet_size=100, win_probability=0.99,
        max_steps=1000, trial_count=50,
    ),
    "bet above bankroll": SimulationConfig(
        initial_bankroll=50, bet_size=100, win_probability=0.45,
        max_steps=100, trial_count=200,
    ),
}


def run_scenarios(seed: int = 42) -> None:
    print("=" * 70)
    print("  Walk Lab — Reference Scenarios")
    print("=" * 70)
    for name, config in SCENARIOS.items():
        logger.info("Scenario: %s", name)
        result = run(config, seed=seed)
        outcomes = trials_frame(result)["outcome"].value_counts().to_dict()
        print(f"  {name}:")
        print(
            f"    bankruptcy={result.bankruptcy_rate:.1%}"
            f" avg_profit=${result.average_profit:,.2f}"
            f" avg_steps={result.average_steps_taken:.1f}"
            f" range=[${result.min_bankroll}, ${result.max_bankroll}]"
        )
        print(f"    outcomes: {outcomes}")
    print("=" * 70)


if __name__ == "__main__":
    run_scenarios()
