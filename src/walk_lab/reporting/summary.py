"""
Tabular and structured views of a batch result.

These are the hand-off formats for a presentation layer: a per-trial table,
a step-indexed trajectory table for charting, and a plain dict of the
aggregate statistics.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from walk_lab.core.contracts import AggregateResult, TrialResult
from walk_lab.core.enums import TrialOutcome, WalkStatus

TRIAL_COLUMNS = [
    "trial",
    "final_bankroll",
    "steps_taken",
    "max_bankroll",
    "min_bankroll",
    "profit",
    "bankrupt",
    "outcome",
]


def classify_trial(trial: TrialResult) -> TrialOutcome:
    """BANKRUPT, else PROFIT for a strictly positive profit, else LOSS."""
    if trial.bankrupt:
        return TrialOutcome.BANKRUPT
    if trial.profit > 0:
        return TrialOutcome.PROFIT
    return TrialOutcome.LOSS


def walk_status(trial: TrialResult) -> WalkStatus:
    return WalkStatus.BANKRUPT if trial.bankrupt else WalkStatus.IN_GAME


def trials_frame(result: AggregateResult) -> pd.DataFrame:
    """One row per trial, numbered from 1 in execution order."""
    rows = [
        {
            "trial": i,
            "final_bankroll": t.final_bankroll,
            "steps_taken": t.steps_taken,
            "max_bankroll": t.max_bankroll,
            "min_bankroll": t.min_bankroll,
            "profit": t.profit,
            "bankrupt": t.bankrupt,
            "outcome": classify_trial(t).value,
        }
        for i, t in enumerate(result.trials, start=1)
    ]
    return pd.DataFrame(rows, columns=TRIAL_COLUMNS)


def trajectory_frame(result: AggregateResult) -> pd.DataFrame:
    """
    Bankroll per step (rows) and trial (columns, numbered from 1).

    Trials that stopped early are padded with NaN after their last step, so
    the frame has ``max(steps_taken) + 1`` rows.

    Raises:
        ValueError: If the batch ran in summary-only mode
    """
    if any(t.history is None for t in result.trials):
        raise ValueError("trajectories were not kept (keep_history=False)")

    n_rows = max(len(t.history) for t in result.trials)
    columns = {}
    for i, t in enumerate(result.trials, start=1):
        padded = np.full(n_rows, np.nan)
        padded[: len(t.history)] = t.history
        columns[i] = padded

    frame = pd.DataFrame(columns)
    frame.index.name = "step"
    frame.columns.name = "trial"
    return frame


def _trial_detail(trial: TrialResult) -> dict[str, Any]:
    return {
        "final_bankroll": trial.final_bankroll,
        "steps_taken": trial.steps_taken,
        "max_bankroll": trial.max_bankroll,
        "min_bankroll": trial.min_bankroll,
        "profit": trial.profit,
        "status": walk_status(trial).value,
    }


def summary_dict(result: AggregateResult) -> dict[str, Any]:
    """Configuration, aggregate scalars and the primary trial as plain types."""
    config = result.config
    return {
        "config": config.model_dump(),
        "trials": config.trial_count,
        "bankrupt_count": result.bankrupt_count,
        "bankruptcy_rate": result.bankruptcy_rate,
        "average_profit": result.average_profit,
        "average_steps_taken": result.average_steps_taken,
        "max_bankroll": result.max_bankroll,
        "min_bankroll": result.min_bankroll,
        "primary": _trial_detail(result.primary),
    }
