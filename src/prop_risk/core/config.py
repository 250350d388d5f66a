"""
Configuration — the account input record plus the YAML settings loader.

Usage:
    settings = load_settings()
    print(settings.simulation.runs)
    print(settings.accounts["ftmo_100k"].max_drawdown_pct)
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from prop_risk.core.enums import TradingMode
from prop_risk.core.exceptions import ConfigurationError, InvalidAccountConfigError

# ─── Account Input Record ───────────────────────────────────────


class AccountConfig(BaseModel):
    """
    One funded account plus the trader's edge.

    Percent fields hold percent values (5 means 5%), never fractions.
    The model coerces types only; range checks live in
    validate_account_config() so the calculator stays total.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str
    account_balance: float
    daily_drawdown_pct: float
    max_drawdown_pct: float
    profit_target_pct: float
    consistency_rule_pct: float
    consistency_rule_enabled: bool
    win_rate: float = Field(description="Percent, 1-99")
    risk_reward_ratio: float = Field(description="Reward units per 1 unit risked")
    trades_per_day: int
    mode: TradingMode
    custom_risk_per_trade: float = Field(description="Dollars, used only in custom mode")


# Clamp bounds applied by the editing layer before a config reaches the engine
_PCT_CEILING = 100.0
_WIN_RATE_FLOOR = 1.0
_WIN_RATE_CEILING = 99.0
_RR_FLOOR = 0.1


def sanitize_config(config: AccountConfig) -> AccountConfig:
    """Clamp user-edited fields into the ranges the engine expects.

    Mirrors what a form layer does on every keystroke: percentages capped
    at 100, win rate held in [1, 99], R:R at least 0.1, whole trades per
    day (minimum 1) and a non-negative custom risk.
    """
    return config.model_copy(
        update={
            "daily_drawdown_pct": min(config.daily_drawdown_pct, _PCT_CEILING),
            "max_drawdown_pct": min(config.max_drawdown_pct, _PCT_CEILING),
            "profit_target_pct": min(config.profit_target_pct, _PCT_CEILING),
            "consistency_rule_pct": min(config.consistency_rule_pct, _PCT_CEILING),
            "win_rate": min(max(config.win_rate, _WIN_RATE_FLOOR), _WIN_RATE_CEILING),
            "risk_reward_ratio": max(config.risk_reward_ratio, _RR_FLOOR),
            "trades_per_day": max(1, int(math.floor(config.trades_per_day))),
            "custom_risk_per_trade": max(0.0, config.custom_risk_per_trade),
        }
    )


def validate_account_config(config: AccountConfig) -> None:
    """Strict boundary check. Raises InvalidAccountConfigError listing every problem.

    The engine never calls this; callers that prefer failing loudly over
    receiving saturated results (ruin pinned at 100, infinite estimates)
    opt in explicitly.
    """
    problems: list[str] = []

    if not math.isfinite(config.account_balance) or config.account_balance <= 0:
        problems.append(f"account_balance must be > 0 (got {config.account_balance})")

    pct_fields = ["daily_drawdown_pct", "max_drawdown_pct", "profit_target_pct"]
    if config.consistency_rule_enabled:
        pct_fields.append("consistency_rule_pct")
    for field in pct_fields:
        value = getattr(config, field)
        if not (0 < value <= _PCT_CEILING):
            problems.append(f"{field} must be in (0, 100] (got {value})")

    if not (_WIN_RATE_FLOOR <= config.win_rate <= _WIN_RATE_CEILING):
        problems.append(f"win_rate must be in [1, 99] (got {config.win_rate})")
    if not (config.risk_reward_ratio > 0):
        problems.append(f"risk_reward_ratio must be > 0 (got {config.risk_reward_ratio})")
    if config.trades_per_day < 1:
        problems.append(f"trades_per_day must be >= 1 (got {config.trades_per_day})")
    if config.custom_risk_per_trade < 0:
        problems.append(
            f"custom_risk_per_trade must be >= 0 (got {config.custom_risk_per_trade})"
        )

    if problems:
        raise InvalidAccountConfigError(problems)


# ─── Settings Models ────────────────────────────────────────────


class SimulationSettings(BaseModel):
    """Monte Carlo batch parameters."""

    runs: int = Field(default=1000, ge=1)
    display_curves: int = Field(default=30, ge=0, description="Equity curves kept for display")
    safety_limit: int = Field(default=20000, ge=1, description="Trade cap per trial")
    comparison_runs: int = Field(default=500, ge=1)


class Settings(BaseModel):
    """Root settings container assembled from the YAML config files."""

    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    accounts: dict[str, AccountConfig] = Field(default_factory=dict)
    log_level: str = "INFO"
    engine_log_level: str = Field(default="INFO", description="Level for prop_risk.engine loggers")


# ─── Loader ─────────────────────────────────────────────────────


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML file and return its contents as a dict. Missing files read as empty."""
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    return data


def load_settings(config_dir: Path | None = None) -> Settings:
    """
    Load and merge the YAML configuration files into a Settings object.

    Args:
        config_dir: Path to config directory. Defaults to <project_root>/config/
    """
    if config_dir is None:
        config_dir = Path(__file__).resolve().parents[3] / "config"

    settings_data = _read_yaml(config_dir / "settings.yaml")
    accounts_data = _read_yaml(config_dir / "accounts.yaml")
    system = settings_data.get("system") or {}

    try:
        simulation = SimulationSettings(**settings_data.get("simulation", {}))
        accounts = {
            profile_id: AccountConfig(id=profile_id, **profile)
            for profile_id, profile in accounts_data.get("profiles", {}).items()
        }
    except (TypeError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid configuration in {config_dir}: {exc}") from exc

    return Settings(
        simulation=simulation,
        accounts=accounts,
        log_level=system.get("log_level", "INFO"),
        engine_log_level=system.get("engine_log_level", "INFO"),
    )
