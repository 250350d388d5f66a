"""
Losing-streak projection.

Deterministic what-if: how much of the drawdown budget survives N
consecutive full losses at the calculator's safe risk size.
"""

from __future__ import annotations

import math

from prop_risk.core.config import AccountConfig
from prop_risk.core.contracts import LosingStreakPoint, LosingStreakResult
from prop_risk.engine.risk_calculator import calculate, safe_div

DANGER_BUFFER_FRACTION = 0.30  # under 30% of max drawdown left is dangerous
CHART_MAX_POINTS = 30


def compute_losing_streak(config: AccountConfig, loss_count: int) -> LosingStreakResult:
    """Project the account after `loss_count` straight losses."""
    results = calculate(config)
    balance = config.account_balance
    max_dd = results.max_dd

    drawdown_amount = loss_count * results.safe_risk_per_trade
    remaining_buffer = max_dd - drawdown_amount

    return LosingStreakResult(
        loss_count=loss_count,
        account_after_losses=balance - drawdown_amount,
        drawdown_amount=drawdown_amount,
        drawdown_pct=safe_div(drawdown_amount, balance) * 100,
        remaining_buffer=remaining_buffer,
        remaining_pct=safe_div(remaining_buffer, balance) * 100,
        is_dangerous=remaining_buffer < max_dd * DANGER_BUFFER_FRACTION,
        hit_max_dd=drawdown_amount >= max_dd,
        daily_dd=results.daily_dd,
    )


def losing_streak_series(
    config: AccountConfig, max_points: int = CHART_MAX_POINTS
) -> list[LosingStreakPoint]:
    """Chart rows for 0, 1, 2, ... losses, two past the max drawdown breach.

    Capped at `max_points` rows; remaining buffer is floored at zero.
    """
    results = calculate(config)
    breach = safe_div(results.max_dd, results.safe_risk_per_trade)
    if math.isfinite(breach):
        length = min(math.ceil(breach) + 3, max_points)
    else:
        length = max_points

    points: list[LosingStreakPoint] = []
    for losses in range(max(length, 0)):
        streak = compute_losing_streak(config, losses)
        points.append(
            LosingStreakPoint(
                losses=losses,
                drawdown=streak.drawdown_amount,
                remaining=max(streak.remaining_buffer, 0.0),
                account=streak.account_after_losses,
            )
        )
    return points


def losses_to_breach(config: AccountConfig) -> dict[str, float]:
    """Consecutive full losses each drawdown limit absorbs.

    Returns:
        Dict with max_dd and daily_dd loss counts (inf at zero risk)
    """
    results = calculate(config)
    counts = {}
    for key, limit in (("max_dd", results.max_dd), ("daily_dd", results.daily_dd)):
        value = safe_div(limit, results.safe_risk_per_trade)
        counts[key] = float(math.floor(value)) if math.isfinite(value) else value
    return counts
