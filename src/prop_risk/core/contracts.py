"""
Output records produced by the risk engine.

All records are Pydantic v2 BaseModels with camelCase aliases so that the
display and export collaborators see the same field names as the account
input record. Drawdown fields keep the upper-case acronym (dailyDD, maxDD,
hitMaxDD). Records are built fresh per evaluation and never mutated.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prop_risk.core.enums import WarningSeverity


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Risk Calculator Output ─────────────────────────────────────


class RiskWarning(_Record):
    """A single risk warning attached to a calculation."""

    severity: WarningSeverity
    message: str


class CalculationResults(_Record):
    """
    Deterministic risk figures for one AccountConfig.

    Unreachable quantities (no daily profit cap, target never reached)
    are math.inf; renderers must show them as a sentinel.
    """

    daily_dd: float = Field(alias="dailyDD", description="Daily drawdown limit in dollars")
    max_dd: float = Field(alias="maxDD", description="Max drawdown limit in dollars")
    profit_target: float
    max_daily_profit: float = Field(description="inf when the consistency rule is off")
    base_risk: float
    safe_risk_per_trade: float
    reward_per_trade: float
    expectancy: float = Field(description="Expected dollars per trade")
    estimated_trades_to_target: float = Field(description="Whole trades, or inf")
    estimated_days_to_target: float = Field(description="Whole days, or inf")
    risk_of_ruin: float = Field(description="Percent, 0-100")
    risk_pct: float = Field(description="Risk per trade as percent of balance")
    warnings: list[RiskWarning] = Field(default_factory=list)

    @property
    def target_reachable(self) -> bool:
        return math.isfinite(self.estimated_trades_to_target)


# ─── Path Simulator Output ──────────────────────────────────────


class MonteCarloResult(_Record):
    """
    Aggregate of one Monte Carlo batch. A new batch replaces, never merges.

    Trade-count statistics cover successful trials only.
    """

    runs: int = Field(ge=0)
    success_rate: float = Field(ge=0.0, le=100.0)
    median_trades: int = Field(ge=0)
    median_days: int = Field(ge=0)
    percentile10_trades: int = Field(ge=0)
    percentile90_trades: int = Field(ge=0)
    equity_curves: list[list[float]] = Field(
        default_factory=list,
        description="Per-trade equity of the first N trials, starting at 0",
    )
    median_equity_curve: list[float] = Field(default_factory=list)
    profit_target: float = Field(description="Reference line for charts")
    max_dd: float = Field(alias="maxDD", description="Reference line for charts")


class LosingStreakResult(_Record):
    """Deterministic impact of N consecutive losses at the safe risk size."""

    loss_count: int
    account_after_losses: float
    drawdown_amount: float
    drawdown_pct: float
    remaining_buffer: float = Field(description="Max drawdown dollars still unused")
    remaining_pct: float
    is_dangerous: bool = Field(description="Less than 30% of the max drawdown left")
    hit_max_dd: bool = Field(alias="hitMaxDD")
    daily_dd: float = Field(alias="dailyDD")


class LosingStreakPoint(_Record):
    """One row of the losing-streak chart series."""

    losses: int
    drawdown: float
    remaining: float = Field(description="Remaining buffer floored at zero")
    account: float


# ─── Comparison Output ──────────────────────────────────────────


class ComparisonResult(_Record):
    """Side-by-side summary of one account in a multi-account comparison."""

    id: str
    name: str
    success_rate: float
    median_days: int
    risk_per_trade: float
    expectancy: float
    risk_of_ruin: float
