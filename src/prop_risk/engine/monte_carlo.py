"""
Monte Carlo simulation of prop firm evaluation paths.

Each trial is a sequence of independent win/loss trades sized by the
risk calculator, starting from zero P&L. A trial stops at the first of:
- equity >= profit target (success)
- equity <= -max drawdown (fixed floor from the starting balance)
- equity <= day-open equity - daily drawdown (day resets every trades_per_day)

Trials that reach the safety limit without stopping count as failures.
Success rate and time-to-target percentiles are aggregated across trials;
the first few trials keep their full equity path for display.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from prop_risk.core.config import AccountConfig
from prop_risk.core.contracts import MonteCarloResult
from prop_risk.engine.risk_calculator import calculate

logger = logging.getLogger(__name__)

DEFAULT_RUNS = 1000
DISPLAY_CURVES = 30
# Reached only when the trade size is tiny next to the drawdown budgets and
# target, e.g. a $1 custom risk on a six-figure account
SAFETY_LIMIT = 20000

# Trades drawn per vectorized block (rounded to whole trading days)
_BLOCK_TRADES = 512


def _simulate_trial(
    rng: np.random.Generator,
    win_prob: float,
    reward: float,
    risk: float,
    profit_target: float,
    max_dd: float,
    daily_dd: float,
    trades_per_day: int,
    safety_limit: int,
    record: bool,
) -> tuple[bool, int, list[float] | None]:
    """Run one trial.

    Returns:
        (success, trades taken, equity path starting at 0 or None)
    """
    equity = 0.0
    trades = 0
    curve: list[float] | None = [0.0] if record else None

    # Blocks span whole days so every block opens a fresh day
    block = trades_per_day * max(1, _BLOCK_TRADES // trades_per_day)

    while trades < safety_limit:
        n = min(block, safety_limit - trades)
        wins = rng.random(n) < win_prob
        steps = np.where(wins, reward, -risk)

        path = np.cumsum(np.concatenate(([equity], steps)))[1:]
        before = np.concatenate(([equity], path[:-1]))
        day_open = before[(np.arange(n) // trades_per_day) * trades_per_day]

        stopped = (
            (path >= profit_target)
            | (path <= -max_dd)
            | (path <= day_open - daily_dd)
        )
        if stopped.any():
            idx = int(np.argmax(stopped))
            trades += idx + 1
            if curve is not None:
                curve.extend(path[: idx + 1].tolist())
            return bool(path[idx] >= profit_target), trades, curve

        trades += n
        equity = float(path[-1])
        if curve is not None:
            curve.extend(path.tolist())

    return False, trades, curve


def _median_equity_curve(curves: list[list[float]]) -> list[float]:
    """Per-step median across curves; finished curves hold their last value."""
    if not curves:
        return []

    max_len = max(len(c) for c in curves)
    matrix = np.array(
        [np.pad(np.asarray(c, dtype=float), (0, max_len - len(c)), mode="edge") for c in curves]
    )
    matrix.sort(axis=0)
    return matrix[len(curves) // 2].tolist()


def _pick(sorted_trades: np.ndarray, fraction: float) -> int:
    if len(sorted_trades) == 0:
        return 0
    return int(sorted_trades[int(math.floor(len(sorted_trades) * fraction))])


def run_monte_carlo(
    config: AccountConfig,
    runs: int = DEFAULT_RUNS,
    *,
    rng: np.random.Generator | None = None,
    rng_seed: int | None = None,
    display_curves: int = DISPLAY_CURVES,
    safety_limit: int = SAFETY_LIMIT,
) -> MonteCarloResult:
    """
    Simulate `runs` independent evaluation attempts for one account.

    Args:
        config: Account configuration
        runs: Number of trials
        rng: Optional generator; takes precedence over rng_seed
        rng_seed: Optional seed for reproducibility
        display_curves: How many leading trials keep their equity path
        safety_limit: Trade cap per trial

    Returns:
        MonteCarloResult for this batch. The median of an even number of
        successful trials is the upper of the two middle values.
    """
    if rng is None:
        rng = np.random.default_rng(rng_seed)

    results = calculate(config)
    win_prob = config.win_rate / 100
    trades_per_day = max(1, config.trades_per_day)

    successes = 0
    capped = 0
    success_trades: list[int] = []
    equity_curves: list[list[float]] = []

    for i in range(max(runs, 0)):
        success, trades, curve = _simulate_trial(
            rng,
            win_prob,
            results.reward_per_trade,
            results.safe_risk_per_trade,
            results.profit_target,
            results.max_dd,
            results.daily_dd,
            trades_per_day,
            safety_limit,
            record=i < display_curves,
        )
        if success:
            successes += 1
            success_trades.append(trades)
        elif trades >= safety_limit:
            capped += 1
        if curve is not None:
            equity_curves.append(curve)

    success_rate = successes / runs * 100 if runs > 0 else 0.0

    sorted_trades = np.sort(np.asarray(success_trades, dtype=int))
    median_trades = _pick(sorted_trades, 0.5)
    p10 = _pick(sorted_trades, 0.1)
    p90 = _pick(sorted_trades, 0.9)
    median_days = math.ceil(median_trades / trades_per_day) if median_trades > 0 else 0

    if capped:
        logger.warning(
            "%d of %d trials hit the %d-trade safety limit (account %s)",
            capped, runs, safety_limit, config.id,
        )
    logger.debug(
        "Monte Carlo %s: runs=%d success=%.1f%% median_trades=%d p10=%d p90=%d",
        config.id, runs, success_rate, median_trades, p10, p90,
    )

    return MonteCarloResult(
        runs=max(runs, 0),
        success_rate=success_rate,
        median_trades=median_trades,
        median_days=median_days,
        percentile10_trades=p10,
        percentile90_trades=p90,
        equity_curves=equity_curves,
        median_equity_curve=_median_equity_curve(equity_curves),
        profit_target=results.profit_target,
        max_dd=results.max_dd,
    )
