"""Enumerations shared across the engine and reporting layers."""

from __future__ import annotations

from enum import StrEnum


class TrialOutcome(StrEnum):
    BANKRUPT = "BANKRUPT"
    PROFIT = "PROFIT"
    LOSS = "LOSS"


class WalkStatus(StrEnum):
    BANKRUPT = "BANKRUPT"
    IN_GAME = "IN_GAME"


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    CSV = "csv"
