"""
Multi-account comparison.

Runs the calculator and a Monte Carlo batch for each account so that
alternative setups (balance, drawdown rules, edge) can be ranked side by side.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import pandas as pd

from prop_risk.core.config import AccountConfig
from prop_risk.core.contracts import ComparisonResult
from prop_risk.core.exceptions import ConfigurationError
from prop_risk.engine.monte_carlo import run_monte_carlo
from prop_risk.engine.risk_calculator import calculate

logger = logging.getLogger(__name__)

COMPARISON_RUNS = 500
MAX_COMPARISON_ACCOUNTS = 5  # current account plus four alternatives

_FRAME_COLUMNS = [
    "name",
    "success_rate",
    "median_days",
    "risk_per_trade",
    "expectancy",
    "risk_of_ruin",
]


def compare_accounts(
    accounts: Sequence[AccountConfig],
    runs: int = COMPARISON_RUNS,
    *,
    rng: np.random.Generator | None = None,
    rng_seed: int | None = None,
) -> list[ComparisonResult]:
    """Evaluate every account with the same trial count.

    Args:
        accounts: Accounts to compare, current account first
        runs: Monte Carlo trials per account
        rng: Optional generator shared across the batch
        rng_seed: Optional seed for reproducibility

    Returns:
        One ComparisonResult per account, in input order
    """
    if len(accounts) > MAX_COMPARISON_ACCOUNTS:
        raise ConfigurationError(
            f"At most {MAX_COMPARISON_ACCOUNTS} accounts can be compared "
            f"(got {len(accounts)})"
        )
    if rng is None:
        rng = np.random.default_rng(rng_seed)

    results: list[ComparisonResult] = []
    for account in accounts:
        calc = calculate(account)
        mc = run_monte_carlo(account, runs, rng=rng)
        results.append(
            ComparisonResult(
                id=account.id,
                name=account.name,
                success_rate=mc.success_rate,
                median_days=mc.median_days,
                risk_per_trade=calc.safe_risk_per_trade,
                expectancy=calc.expectancy,
                risk_of_ruin=calc.risk_of_ruin,
            )
        )

    logger.info("Compared %d accounts at %d runs each", len(results), runs)
    return results


def comparison_frame(results: Sequence[ComparisonResult]) -> pd.DataFrame:
    """Tabulate comparison results, indexed by account id."""
    if not results:
        return pd.DataFrame(columns=_FRAME_COLUMNS, index=pd.Index([], name="id"))
    frame = pd.DataFrame([r.model_dump() for r in results]).set_index("id")
    return frame[_FRAME_COLUMNS]
