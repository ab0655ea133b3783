"""Custom exception hierarchy for Walk Lab."""

from __future__ import annotations


class WalkLabError(Exception):
    """Base exception for all Walk Lab errors."""


class InvalidConfiguration(WalkLabError, ValueError):
    """Simulation parameters outside the engine's preconditions."""


class SettingsError(WalkLabError):
    """Settings file missing or malformed."""
