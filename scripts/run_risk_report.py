#!/usr/bin/env python3
"""
Risk report runner.

Evaluates one account (a preset from config/accounts.yaml or an exported
JSON file): deterministic risk figures, a Monte Carlo batch, a losing-streak
projection and, optionally, a comparison against other presets.

Usage:
    python scripts/run_risk_report.py                          # default preset
    python scripts/run_risk_report.py --profile ftmo_100k --seed 7
    python scripts/run_risk_report.py --config risk-config-my-account.json --strict
    python scripts/run_risk_report.py --compare the5ers_20k tight_50k
    python scripts/run_risk_report.py --export ./exports/
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from prop_risk.core.config import (
    AccountConfig,
    Settings,
    load_settings,
    sanitize_config,
    validate_account_config,
)
from prop_risk.core.exceptions import ConfigurationError, PropRiskError
from prop_risk.core.logging import get_logger, setup_logging
from prop_risk.engine.comparison import compare_accounts
from prop_risk.engine.losing_streak import compute_losing_streak
from prop_risk.engine.monte_carlo import run_monte_carlo
from prop_risk.engine.risk_calculator import calculate
from prop_risk.io.export import load_config, save_config
from prop_risk.io.report import (
    render_calculation,
    render_comparison,
    render_losing_streak,
    render_monte_carlo,
)

logger = get_logger("report")


def _preset(settings: Settings, name: str) -> AccountConfig:
    try:
        return settings.accounts[name]
    except KeyError:
        valid = ", ".join(sorted(settings.accounts)) or "none"
        raise ConfigurationError(f"Unknown profile: {name!r}. Valid: {valid}") from None


def _prepare(config: AccountConfig, strict: bool) -> AccountConfig:
    if strict:
        validate_account_config(config)
        return config
    return sanitize_config(config)


def run(args: argparse.Namespace) -> int:
    settings = load_settings(Path(args.config_dir) if args.config_dir else None)
    setup_logging(
        args.log_level or settings.log_level,
        args.engine_log_level or settings.engine_log_level,
    )

    if args.config:
        config = load_config(Path(args.config))
    else:
        config = _preset(settings, args.profile)
    config = _prepare(config, args.strict)

    runs = args.runs or settings.simulation.runs
    logger.info("Evaluating %s with %d Monte Carlo runs", config.name, runs)

    results = calculate(config)
    mc = run_monte_carlo(
        config,
        runs,
        rng_seed=args.seed,
        display_curves=settings.simulation.display_curves,
        safety_limit=settings.simulation.safety_limit,
    )
    streak = compute_losing_streak(config, args.losses)

    sections = [
        render_calculation(config, results),
        render_monte_carlo(mc),
        render_losing_streak(streak),
    ]

    if args.compare:
        others = [_prepare(_preset(settings, name), args.strict) for name in args.compare]
        current = config.model_copy(update={"name": f"{config.name} (current)"})
        comparison = compare_accounts(
            [current, *others],
            settings.simulation.comparison_runs,
            rng_seed=args.seed,
        )
        sections.append(render_comparison(comparison))

    print("\n\n".join(sections))

    if args.export:
        path = save_config(config, Path(args.export))
        print(f"\nExported config to {path}")

    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Prop firm risk report")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--profile", default="default",
        help="Preset name from config/accounts.yaml (default: default)",
    )
    source.add_argument(
        "--config", default=None,
        help="Exported JSON config file to evaluate instead of a preset",
    )
    parser.add_argument("--config-dir", default=None, help="Alternative config directory")
    parser.add_argument(
        "--runs", type=int, default=None,
        help="Monte Carlo trials (default: simulation.runs from settings.yaml)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument(
        "--losses", type=int, default=5,
        help="Losing streak length to project (default: 5)",
    )
    parser.add_argument(
        "--compare", nargs="+", default=None, metavar="PROFILE",
        help="Preset names to compare against (up to 4)",
    )
    parser.add_argument("--export", default=None, help="Write the config as JSON to this path")
    parser.add_argument(
        "--strict", action="store_true",
        help="Reject out-of-range inputs instead of clamping them",
    )
    parser.add_argument("--log-level", default=None, help="Override system.log_level")
    parser.add_argument(
        "--engine-log-level", default=None, help="Override system.engine_log_level",
    )
    args = parser.parse_args()

    try:
        code = run(args)
    except PropRiskError as exc:
        logger.error("%s", exc)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
