"""Shared test fixtures for the Prop Firm Risk Engine."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np
import pytest

from prop_risk.core.config import AccountConfig
from prop_risk.core.enums import TradingMode

_BASE_FIELDS: dict[str, Any] = {
    "id": "acct-1",
    "name": "Test Account",
    "account_balance": 100000,
    "daily_drawdown_pct": 5,
    "max_drawdown_pct": 10,
    "profit_target_pct": 10,
    "consistency_rule_pct": 20,
    "consistency_rule_enabled": False,
    "win_rate": 60,
    "risk_reward_ratio": 2,
    "trades_per_day": 3,
    "mode": TradingMode.NORMAL,
    "custom_risk_per_trade": 0,
}


@pytest.fixture
def make_config() -> Callable[..., AccountConfig]:
    """Factory: the reference account with selected fields overridden."""

    def _make(**overrides: Any) -> AccountConfig:
        return AccountConfig(**{**_BASE_FIELDS, **overrides})

    return _make


@pytest.fixture
def base_config(make_config) -> AccountConfig:
    """100K account, 5% daily / 10% max DD, 10% target, 60% WR at 1:2, 3 trades/day."""
    return make_config()


@pytest.fixture
def strong_edge_config(make_config) -> AccountConfig:
    """99% win rate at 1:10: should almost always reach the target."""
    return make_config(win_rate=99, risk_reward_ratio=10)


@pytest.fixture
def hopeless_config(make_config) -> AccountConfig:
    """1% win rate at 1:0.1: should almost never reach the target."""
    return make_config(win_rate=1, risk_reward_ratio=0.1)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)
