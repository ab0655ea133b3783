"""Shared test fixtures for Walk Lab."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from walk_lab.core.contracts import SimulationConfig


@pytest.fixture
def default_config() -> SimulationConfig:
    """The simulator's form defaults: 1000 bank, 100 bet, 45%, 100 steps."""
    return SimulationConfig(
        initial_bankroll=1000,
        bet_size=100,
        win_probability=0.45,
        max_steps=100,
        trial_count=20,
    )


@pytest.fixture
def coin_flip_config() -> SimulationConfig:
    """One all-or-nothing fair flip per trial."""
    return SimulationConfig(
        initial_bankroll=100,
        bet_size=100,
        win_probability=0.5,
        max_steps=1,
        trial_count=1000,
    )


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


class ScriptedSource:
    """Random source that replays a fixed list of uniforms."""

    def __init__(self, draws: list[float]) -> None:
        self.draws = draws
        self.calls: list[int] = []

    def random(self, size: int) -> np.ndarray:
        self.calls.append(size)
        values = (self.draws + [0.999999] * size)[:size]
        return np.array(values, dtype=np.float64)


@pytest.fixture
def scripted():
    """Factory for a ScriptedSource; unspecified draws are losses for p < 1."""
    return ScriptedSource


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """setup_logging() disables propagation; restore it so caplog sees records."""
    yield
    logger = logging.getLogger("walk_lab")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
