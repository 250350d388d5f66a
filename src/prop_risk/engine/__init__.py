"""Quantitative risk engine: calculator, Monte Carlo, losing streaks, comparison."""

from prop_risk.engine.comparison import compare_accounts, comparison_frame
from prop_risk.engine.losing_streak import (
    compute_losing_streak,
    losing_streak_series,
    losses_to_breach,
)
from prop_risk.engine.monte_carlo import run_monte_carlo
from prop_risk.engine.risk_calculator import calculate

__all__ = [
    "calculate",
    "compare_accounts",
    "comparison_frame",
    "compute_losing_streak",
    "losing_streak_series",
    "losses_to_breach",
    "run_monte_carlo",
]
