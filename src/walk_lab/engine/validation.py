"""
Precondition checks for simulation parameters.

The engine never substitutes defaults: anything outside the documented
ranges is rejected with InvalidConfiguration before a single draw is made.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import ValidationError

from walk_lab.core.contracts import (
    MAX_REACHABLE_BANKROLL,
    SimulationConfig,
    reachable_bankroll,
)
from walk_lab.core.exceptions import InvalidConfiguration

_WALK_INT_FIELDS = ("initial_bankroll", "bet_size", "max_steps")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_positive_int(config: SimulationConfig, name: str, problems: list[str]) -> None:
    value = getattr(config, name, None)
    if not _is_int(value):
        problems.append(f"{name}: expected an integer, got {value!r}")
    elif value < 1:
        problems.append(f"{name}: must be >= 1, got {value}")


def _walk_problems(config: SimulationConfig) -> list[str]:
    problems: list[str] = []
    for name in _WALK_INT_FIELDS:
        _check_positive_int(config, name, problems)

    p = getattr(config, "win_probability", None)
    if isinstance(p, bool) or not isinstance(p, (int, float)):
        problems.append(f"win_probability: expected a number, got {p!r}")
    elif not (math.isfinite(p) and 0.0 < p < 1.0):
        problems.append(f"win_probability: must be in (0, 1), got {p}")

    if not problems and reachable_bankroll(config) > MAX_REACHABLE_BANKROLL:
        problems.append(
            "initial_bankroll + max_steps * bet_size must not exceed "
            f"{MAX_REACHABLE_BANKROLL}"
        )
    return problems


def make_config(**fields: Any) -> SimulationConfig:
    """Build a SimulationConfig, translating schema errors to InvalidConfiguration."""
    try:
        return SimulationConfig(**fields)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidConfiguration(details) from exc


def validate_walk(config: SimulationConfig) -> SimulationConfig:
    """Check the fields a single trial depends on; ``trial_count`` is not one."""
    problems = _walk_problems(config)
    if problems:
        raise InvalidConfiguration("; ".join(problems))
    return config


def validate_config(config: SimulationConfig) -> SimulationConfig:
    """
    Re-check every precondition of a batch on an existing config.

    Models built with ``model_construct`` or copied with ``model_copy(update=...)``
    skip pydantic validation, so the engine checks again here.
    """
    problems = _walk_problems(config)
    _check_positive_int(config, "trial_count", problems)
    if problems:
        raise InvalidConfiguration("; ".join(problems))
    return config


def bet_exceeds_bankroll(config: SimulationConfig) -> bool:
    """True when a single loss from the starting bankroll means ruin.

    Legal but usually unintended; callers warn, the engine proceeds.
    """
    return config.bet_size > config.initial_bankroll
