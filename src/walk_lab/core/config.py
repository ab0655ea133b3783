"""
Configuration loader — reads YAML files and produces typed Pydantic models.

Usage:
    settings = load_settings()
    print(settings.defaults.bet_size)
    print(settings.limits.max_steps)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from walk_lab.core.exceptions import SettingsError

# ─── Typed Config Models ────────────────────────────────────────


class FormDefaults(BaseModel):
    """Values substituted when a form field is empty or unparsable."""

    initial_bankroll: int = Field(default=1000, ge=1)
    bet_size: int = Field(default=100, ge=1)
    win_probability_pct: int = Field(default=45, ge=1, le=99)
    max_steps: int = Field(default=100, ge=1)
    trial_count: int = Field(default=1, ge=1)


class InputLimits(BaseModel):
    """Clamping ranges applied to form input before a run."""

    win_probability_pct: tuple[int, int] = (1, 99)
    cap_win_probability_at_50: bool = True
    max_steps: tuple[int, int] = (10, 1000)


class Settings(BaseModel):
    """Root settings container assembled from the YAML config file."""

    defaults: FormDefaults = Field(default_factory=FormDefaults)
    limits: InputLimits = Field(default_factory=InputLimits)
    log_level: str = "INFO"


# ─── Loader ─────────────────────────────────────────────────────


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML file and return its contents as a dict."""
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise SettingsError(f"Cannot parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"{path} must contain a mapping at the top level")
    return data


def load_settings(config_dir: Path | None = None) -> Settings:
    """
    Load settings.yaml into a Settings object.

    A missing file or missing keys fall back to the model defaults.

    Args:
        config_dir: Path to config directory. Defaults to <project_root>/config/
    """
    if config_dir is None:
        config_dir = Path(__file__).resolve().parents[3] / "config"

    settings_data = _read_yaml(Path(config_dir) / "settings.yaml")

    try:
        return Settings(
            defaults=FormDefaults(**(settings_data.get("defaults") or {})),
            limits=InputLimits(**(settings_data.get("limits") or {})),
            log_level=(settings_data.get("system") or {}).get("log_level", "INFO"),
        )
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings in {config_dir}: {exc}") from exc
