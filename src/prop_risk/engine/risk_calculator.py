"""
Deterministic risk calculator.

Maps an AccountConfig to CalculationResults:
- Dollar drawdown limits and profit target from percentages
- Base risk: most conservative of max_dd/5, daily_dd/3, max_dd/8
- Mode scaling (conservative /1.5, aggressive x1.2, custom override)
- Expectancy and projected trades/days to target
- Risk of ruin via a gambler's-ruin approximation for asymmetric payoffs
- Ordered warnings (danger, warning, info)

The calculator is total: out-of-domain inputs produce inf/nan or saturated
values (ruin pinned at 100) instead of exceptions.
"""

from __future__ import annotations

import math

import numpy as np

from prop_risk.core.config import AccountConfig
from prop_risk.core.contracts import CalculationResults, RiskWarning
from prop_risk.core.enums import TradingMode, WarningSeverity

# Base risk divisors
_MAX_DD_STREAK_DIVISOR = 5.0  # five full losses consume the max drawdown
_DAILY_DD_STREAK_DIVISOR = 3.0  # three full losses consume the daily drawdown
_MAX_DD_TIGHT_DIVISOR = 8.0

# Mode scaling
_CONSERVATIVE_DIVISOR = 1.5
_AGGRESSIVE_MULTIPLIER = 1.2

# Warning thresholds
_RUIN_WARNING_PCT = 25.0
_RISK_PCT_DANGER = 1.0
_TIGHT_MAX_DD_PCT = 8.0
_TIGHT_CONSISTENCY_PCT = 30.0


def safe_div(numerator: float, denominator: float) -> float:
    """IEEE float division: x/0 gives +-inf and 0/0 gives nan instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.divide(numerator, denominator))


def _ceil(value: float) -> float:
    return float(math.ceil(value)) if math.isfinite(value) else value


def compute_base_risk(max_dd: float, daily_dd: float) -> float:
    """Most conservative of the three heuristic caps, in dollars."""
    return min(
        max_dd / _MAX_DD_STREAK_DIVISOR,
        daily_dd / _DAILY_DD_STREAK_DIVISOR,
        max_dd / _MAX_DD_TIGHT_DIVISOR,
    )


def apply_mode(base_risk: float, mode: TradingMode, custom_risk: float) -> float:
    """Scale base risk by the trading mode.

    Custom mode uses the trader's own figure when it is positive and
    falls back to the base risk otherwise.
    """
    if mode == TradingMode.CUSTOM:
        return custom_risk if custom_risk > 0 else base_risk
    if mode == TradingMode.CONSERVATIVE:
        return base_risk / _CONSERVATIVE_DIVISOR
    if mode == TradingMode.AGGRESSIVE:
        return base_risk * _AGGRESSIVE_MULTIPLIER
    return base_risk


def compute_expectancy(win_rate: float, risk: float, reward: float) -> float:
    """Expected dollars per trade.

    Args:
        win_rate: Win rate in percent (60 means 60%)
        risk: Dollars lost on a losing trade (positive)
        reward: Dollars gained on a winning trade

    Returns:
        Expected P&L per trade
    """
    wr = win_rate / 100
    return wr * reward - (1 - wr) * risk


def compute_risk_of_ruin(
    win_rate: float,
    risk_reward_ratio: float,
    expectancy: float,
    max_dd: float,
    risk: float,
) -> float:
    """Gambler's-ruin approximation for a biased walk with asymmetric payoff.

    The walk is ruined after floor(max_dd / risk) loss-equivalents; with
    odds ratio q / (p * R) below one the ruin probability is that ratio
    raised to the number of units.

    Returns:
        Risk of ruin in percent, 100 when expectancy is not positive
    """
    if expectancy <= 0:
        return 100.0

    wr = win_rate / 100
    loss_rate = 1 - wr
    adjusted_ratio = safe_div(loss_rate, wr * risk_reward_ratio)
    units = safe_div(max_dd, risk)
    if math.isfinite(units):
        units = float(math.floor(units))

    if not adjusted_ratio < 1:
        return 100.0

    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        ruin = float(np.power(adjusted_ratio, units)) * 100
    return min(100.0, ruin)


def build_warnings(
    config: AccountConfig,
    *,
    base_risk: float,
    safe_risk: float,
    max_dd: float,
    max_daily_profit: float,
    expectancy: float,
    risk_of_ruin: float,
    risk_pct: float,
) -> list[RiskWarning]:
    """Evaluate every warning rule independently, in fixed order."""
    warnings: list[RiskWarning] = []

    if expectancy <= 0:
        warnings.append(
            RiskWarning(
                severity=WarningSeverity.DANGER,
                message=(
                    "Negative expectancy: this strategy will lose money over time. "
                    "Increase win rate or R:R ratio."
                ),
            )
        )

    if safe_risk * 5 >= max_dd:
        warnings.append(
            RiskWarning(
                severity=WarningSeverity.DANGER,
                message="Five consecutive losses will breach your Max Drawdown limit.",
            )
        )

    if risk_pct > _RISK_PCT_DANGER and config.max_drawdown_pct < _TIGHT_MAX_DD_PCT:
        warnings.append(
            RiskWarning(
                severity=WarningSeverity.DANGER,
                message=(
                    f"Risk per trade ({risk_pct:.2f}%) is too high relative to "
                    f"Max DD ({config.max_drawdown_pct:g}%). Reduce risk immediately."
                ),
            )
        )

    if risk_of_ruin > _RUIN_WARNING_PCT:
        warnings.append(
            RiskWarning(
                severity=WarningSeverity.WARNING,
                message=(
                    f"Risk of Ruin is {risk_of_ruin:.1f}%. Consider reducing position size."
                ),
            )
        )

    if config.mode == TradingMode.AGGRESSIVE:
        warnings.append(
            RiskWarning(
                severity=WarningSeverity.WARNING,
                message="Aggressive mode increases risk by 20%. Monitor drawdown carefully.",
            )
        )

    safe_limit = base_risk * _AGGRESSIVE_MULTIPLIER
    if config.mode == TradingMode.CUSTOM and config.custom_risk_per_trade > safe_limit:
        warnings.append(
            RiskWarning(
                severity=WarningSeverity.WARNING,
                message=(
                    f"Custom risk ${config.custom_risk_per_trade:.0f} exceeds the "
                    f"recommended safe limit of ${safe_limit:.0f}."
                ),
            )
        )

    if (
        config.consistency_rule_enabled
        and config.consistency_rule_pct < _TIGHT_CONSISTENCY_PCT
        and config.profit_target_pct > 0
    ):
        warnings.append(
            RiskWarning(
                severity=WarningSeverity.INFO,
                message=(
                    f"Tight consistency rule ({config.consistency_rule_pct:g}%): no single "
                    f"winning day should exceed ${max_daily_profit:.0f}."
                ),
            )
        )

    return warnings


def calculate(config: AccountConfig) -> CalculationResults:
    """Derive the full deterministic results record for one account.

    Args:
        config: Account configuration (pre-clamped by the caller)

    Returns:
        CalculationResults recomputed from scratch
    """
    balance = config.account_balance

    daily_dd = balance * (config.daily_drawdown_pct / 100)
    max_dd = balance * (config.max_drawdown_pct / 100)
    profit_target = balance * (config.profit_target_pct / 100)

    max_daily_profit = (
        profit_target * (config.consistency_rule_pct / 100)
        if config.consistency_rule_enabled
        else math.inf
    )

    base_risk = compute_base_risk(max_dd, daily_dd)
    safe_risk = apply_mode(base_risk, config.mode, config.custom_risk_per_trade)
    reward = safe_risk * config.risk_reward_ratio
    expectancy = compute_expectancy(config.win_rate, safe_risk, reward)

    if expectancy > 0:
        trades_to_target = _ceil(safe_div(profit_target, expectancy))
    else:
        trades_to_target = math.inf
    if math.isfinite(trades_to_target):
        days_to_target = _ceil(safe_div(trades_to_target, config.trades_per_day))
    else:
        days_to_target = math.inf

    risk_pct = safe_div(safe_risk, balance) * 100

    risk_of_ruin = compute_risk_of_ruin(
        config.win_rate, config.risk_reward_ratio, expectancy, max_dd, safe_risk
    )

    warnings = build_warnings(
        config,
        base_risk=base_risk,
        safe_risk=safe_risk,
        max_dd=max_dd,
        max_daily_profit=max_daily_profit,
        expectancy=expectancy,
        risk_of_ruin=risk_of_ruin,
        risk_pct=risk_pct,
    )

    return CalculationResults(
        daily_dd=daily_dd,
        max_dd=max_dd,
        profit_target=profit_target,
        max_daily_profit=max_daily_profit,
        base_risk=base_risk,
        safe_risk_per_trade=safe_risk,
        reward_per_trade=reward,
        expectancy=expectancy,
        estimated_trades_to_target=trades_to_target,
        estimated_days_to_target=days_to_target,
        risk_of_ruin=risk_of_ruin,
        risk_pct=risk_pct,
        warnings=warnings,
    )
