"""
Plain-text risk report.

Renders the engine's records for terminals and logs. Unreachable values
go through the formatting helpers so they print as the infinity sentinel.
"""

from __future__ import annotations

from prop_risk.core.config import AccountConfig
from prop_risk.core.contracts import (
    CalculationResults,
    ComparisonResult,
    LosingStreakResult,
    MonteCarloResult,
)
from prop_risk.io.formatting import format_currency, format_number, format_pct

_RULE = "─" * 56


def _row(label: str, value: str) -> str:
    return f"  {label:<30}{value:>24}"


def render_calculation(config: AccountConfig, results: CalculationResults) -> str:
    lines = [
        f"{config.name} ({config.mode.value} mode)",
        _RULE,
        _row("Account balance", format_currency(config.account_balance)),
        _row("Daily drawdown limit", format_currency(results.daily_dd)),
        _row("Max drawdown limit", format_currency(results.max_dd)),
        _row("Profit target", format_currency(results.profit_target)),
        _row("Max daily profit", format_currency(results.max_daily_profit)),
        _row("Base risk", format_currency(results.base_risk)),
        _row("Risk per trade", format_currency(results.safe_risk_per_trade)),
        _row("Risk per trade (% balance)", format_pct(results.risk_pct)),
        _row("Reward per trade", format_currency(results.reward_per_trade)),
        _row("Expectancy per trade", format_currency(results.expectancy)),
        _row("Trades to target", format_number(results.estimated_trades_to_target)),
        _row("Days to target", format_number(results.estimated_days_to_target)),
        _row("Risk of ruin", format_pct(results.risk_of_ruin)),
    ]
    if results.warnings:
        lines.append("")
        lines.append("Warnings")
        lines.extend(f"  [{w.severity.value.upper()}] {w.message}" for w in results.warnings)
    return "\n".join(lines)


def render_monte_carlo(result: MonteCarloResult) -> str:
    return "\n".join(
        [
            f"Monte Carlo ({result.runs} runs)",
            _RULE,
            _row("Success rate", format_pct(result.success_rate, 1)),
            _row("Median trades to target", format_number(result.median_trades)),
            _row("Median days to target", format_number(result.median_days)),
            _row("10th percentile trades", format_number(result.percentile10_trades)),
            _row("90th percentile trades", format_number(result.percentile90_trades)),
        ]
    )


def render_losing_streak(streak: LosingStreakResult) -> str:
    if streak.hit_max_dd:
        status = "MAX DRAWDOWN BREACHED"
    elif streak.is_dangerous:
        status = "DANGER ZONE"
    else:
        status = "Safe"
    return "\n".join(
        [
            f"Losing streak of {streak.loss_count}",
            _RULE,
            _row("Drawdown", format_currency(streak.drawdown_amount)),
            _row("Drawdown (% balance)", format_pct(streak.drawdown_pct)),
            _row("Account after losses", format_currency(streak.account_after_losses)),
            _row("Remaining max DD buffer", format_currency(streak.remaining_buffer)),
            _row("Remaining (% balance)", format_pct(streak.remaining_pct)),
            _row("Status", status),
        ]
    )


def render_comparison(results: list[ComparisonResult]) -> str:
    header = (
        f"  {'Account':<24}{'Success':>9}{'Days':>6}{'Risk/Trade':>13}"
        f"{'Expectancy':>13}{'RoR':>9}"
    )
    lines = ["Comparison", _RULE, header]
    for r in results:
        lines.append(
            f"  {r.name[:23]:<24}{format_pct(r.success_rate, 1):>9}"
            f"{format_number(r.median_days):>6}{format_currency(r.risk_per_trade):>13}"
            f"{format_currency(r.expectancy):>13}{format_pct(r.risk_of_ruin, 1):>9}"
        )
    return "\n".join(lines)
