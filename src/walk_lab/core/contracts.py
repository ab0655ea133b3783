"""
Data contracts for Walk Lab.

All simulation inputs and outputs are defined here as frozen Pydantic v2
models. A result is built once by the engine and never mutated afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# The engine walks in int64; no trajectory may exceed this
MAX_REACHABLE_BANKROLL = 2**63 - 1

# ─── Input ──────────────────────────────────────────────────────


class SimulationConfig(BaseModel):
    """Parameters of one batch of bankroll random walks."""

    model_config = ConfigDict(frozen=True)

    initial_bankroll: int = Field(ge=1, description="Starting capital, currency units")
    bet_size: int = Field(ge=1, description="Fixed stake for every step")
    win_probability: float = Field(gt=0.0, lt=1.0, description="P(step is a win)")
    max_steps: int = Field(ge=1, description="Hard cap on steps per trial")
    trial_count: int = Field(ge=1, description="Independent trials per batch")
    keep_history: bool = Field(
        default=True,
        description="False = summary-only mode, trajectories are not stored",
    )

    @model_validator(mode="after")
    def _check_reachable_bankroll(self) -> SimulationConfig:
        if reachable_bankroll(self) > MAX_REACHABLE_BANKROLL:
            raise ValueError(
                "initial_bankroll + max_steps * bet_size must not exceed "
                f"{MAX_REACHABLE_BANKROLL}"
            )
        return self


def reachable_bankroll(config: SimulationConfig) -> int:
    """Bankroll after ``max_steps`` straight wins, the ceiling of any trajectory."""
    return config.initial_bankroll + config.max_steps * config.bet_size


# ─── Outputs ────────────────────────────────────────────────────


class TrialResult(BaseModel):
    """Outcome of a single walk, produced atomically by the simulator."""

    model_config = ConfigDict(frozen=True)

    history: tuple[int, ...] | None = Field(
        default=None,
        description="Bankroll after each step, starting with the initial bankroll",
    )
    final_bankroll: int = Field(ge=0)
    steps_taken: int = Field(ge=0)
    bankrupt: bool
    max_bankroll: int
    min_bankroll: int = Field(ge=0)
    profit: int

    @model_validator(mode="after")
    def _check_consistency(self) -> TrialResult:
        if self.bankrupt != (self.final_bankroll == 0):
            raise ValueError("bankrupt must equal (final_bankroll == 0)")
        if self.history is not None:
            if len(self.history) != self.steps_taken + 1:
                raise ValueError("history length must be steps_taken + 1")
            if self.history[-1] != self.final_bankroll:
                raise ValueError("history must end at final_bankroll")
        return self

    @property
    def initial_bankroll(self) -> int:
        return self.final_bankroll - self.profit


class AggregateResult(BaseModel):
    """
    Population-level statistics over a batch of trials.

    ``trials`` keeps invocation order, so trial #1 is stable for a given seed.
    """

    model_config = ConfigDict(frozen=True)

    config: SimulationConfig
    trials: tuple[TrialResult, ...]
    bankrupt_count: int = Field(ge=0)
    bankruptcy_rate: float = Field(ge=0.0, le=1.0)
    average_profit: float
    average_steps_taken: float = Field(ge=0.0)
    max_bankroll: int = Field(description="Highest bankroll seen in any trial")
    min_bankroll: int = Field(ge=0, description="Lowest bankroll seen in any trial")

    @model_validator(mode="after")
    def _check_trial_count(self) -> AggregateResult:
        if len(self.trials) != self.config.trial_count:
            raise ValueError(
                f"expected {self.config.trial_count} trials, got {len(self.trials)}"
            )
        return self

    @property
    def primary(self) -> TrialResult:
        """The first trial, shown in detail by the presentation layer."""
        return self.trials[0]
