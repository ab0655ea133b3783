"""
Form-value normalisation.

Turns raw user input (strings from a form or command line) into a
SimulationConfig the way the interactive simulator does: unparsable or zero
values fall back to defaults, the win probability percentage is clamped into
[1, 99] and optionally capped at 50, and the step count is clamped into
[10, 1000]. Bankroll, bet and trial count are only defaulted, not clamped;
the engine rejects anything still invalid.
"""

from __future__ import annotations

import math
import re
from typing import Any

from walk_lab.core.config import FormDefaults, InputLimits
from walk_lab.core.contracts import SimulationConfig
from walk_lab.engine.validation import make_config

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any, default: int) -> int:
    """Parse the leading integer of ``value``; 0, empty or garbage gives ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else 0
    else:
        match = _LEADING_INT.match(str(value)) if value is not None else None
        parsed = int(match.group(1)) if match else 0
    return parsed or default


def clamp_win_probability_pct(
    value: int,
    cap_at_50: bool = True,
    bounds: tuple[int, int] = (1, 99),
) -> int:
    """Clamp a win percentage into ``bounds``, then to at most 50 when capped."""
    low, high = bounds
    value = max(low, min(high, value))
    if cap_at_50 and value > 50:
        value = 50
    return value


def clamp_steps(value: int, bounds: tuple[int, int] = (10, 1000)) -> int:
    low, high = bounds
    return max(low, min(high, value))


def config_from_form(
    initial_bankroll: Any = None,
    bet_size: Any = None,
    win_probability_pct: Any = None,
    max_steps: Any = None,
    trial_count: Any = None,
    cap_at_50: bool | None = None,
    keep_history: bool = True,
    defaults: FormDefaults | None = None,
    limits: InputLimits | None = None,
) -> SimulationConfig:
    """Build a SimulationConfig from raw form values.

    Raises:
        InvalidConfiguration: If a value is still out of range after defaulting
            (e.g. a negative bankroll)
    """
    defaults = defaults or FormDefaults()
    limits = limits or InputLimits()
    if cap_at_50 is None:
        cap_at_50 = limits.cap_win_probability_at_50

    pct = clamp_win_probability_pct(
        parse_int(win_probability_pct, defaults.win_probability_pct),
        cap_at_50=cap_at_50,
        bounds=limits.win_probability_pct,
    )
    steps = clamp_steps(parse_int(max_steps, defaults.max_steps), limits.max_steps)

    return make_config(
        initial_bankroll=parse_int(initial_bankroll, defaults.initial_bankroll),
        bet_size=parse_int(bet_size, defaults.bet_size),
        win_probability=pct / 100,
        max_steps=steps,
        trial_count=parse_int(trial_count, defaults.trial_count),
        keep_history=keep_history,
    )
