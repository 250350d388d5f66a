"""Tests for the deterministic risk calculator."""

from __future__ import annotations

import math

import pytest

from prop_risk.core.enums import TradingMode, WarningSeverity
from prop_risk.engine.risk_calculator import (
    apply_mode,
    calculate,
    compute_base_risk,
    compute_expectancy,
    compute_risk_of_ruin,
    safe_div,
)

# ─── Reference Account ─────────────────────────────────────────


class TestReferenceAccount:
    def test_dollar_limits(self, base_config):
        r = calculate(base_config)
        assert r.daily_dd == pytest.approx(5000)
        assert r.max_dd == pytest.approx(10000)
        assert r.profit_target == pytest.approx(10000)

    def test_base_risk_is_tightest_cap(self, base_config):
        # min(10000/5, 5000/3, 10000/8) = 1250
        r = calculate(base_config)
        assert r.base_risk == pytest.approx(1250)
        assert r.safe_risk_per_trade == pytest.approx(1250)

    def test_reward_and_expectancy(self, base_config):
        # 0.6 * 2500 - 0.4 * 1250 = 1000
        r = calculate(base_config)
        assert r.reward_per_trade == pytest.approx(2500)
        assert r.expectancy == pytest.approx(1000)

    def test_trades_and_days_to_target(self, base_config):
        r = calculate(base_config)
        assert r.estimated_trades_to_target == 10
        assert r.estimated_days_to_target == 4
        assert r.target_reachable

    def test_risk_pct(self, base_config):
        r = calculate(base_config)
        assert r.risk_pct == pytest.approx(1.25)

    def test_risk_of_ruin(self, base_config):
        # adjusted = 0.4 / 1.2, units = floor(10000 / 1250) = 8
        r = calculate(base_config)
        assert r.risk_of_ruin == pytest.approx((0.4 / 1.2) ** 8 * 100)

    def test_no_warnings(self, base_config):
        assert calculate(base_config).warnings == []

    def test_max_daily_profit_unbounded_without_rule(self, base_config):
        assert math.isinf(calculate(base_config).max_daily_profit)

    def test_max_daily_profit_with_rule(self, make_config):
        r = calculate(make_config(consistency_rule_enabled=True, consistency_rule_pct=40))
        assert r.max_daily_profit == pytest.approx(4000)

    def test_idempotent(self, base_config):
        first = calculate(base_config)
        second = calculate(base_config)
        assert first.model_dump() == second.model_dump()


# ─── Invariants ────────────────────────────────────────────────


class TestInvariants:
    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"risk_reward_ratio": 0.7},
            {"win_rate": 35, "risk_reward_ratio": 3.3},
            {"mode": TradingMode.AGGRESSIVE, "max_drawdown_pct": 6},
            {"mode": TradingMode.CUSTOM, "custom_risk_per_trade": 777},
            {"account_balance": 25000, "daily_drawdown_pct": 4},
        ],
    )
    def test_reward_equals_risk_times_ratio(self, make_config, overrides):
        config = make_config(**overrides)
        r = calculate(config)
        assert r.reward_per_trade == r.safe_risk_per_trade * config.risk_reward_ratio

    @pytest.mark.parametrize("win_rate,rr", [(60, 2), (45, 1.5), (70, 0.8), (52, 1)])
    def test_positive_expectancy_gives_finite_estimate(self, make_config, win_rate, rr):
        r = calculate(make_config(win_rate=win_rate, risk_reward_ratio=rr))
        assert r.expectancy > 0
        assert r.estimated_trades_to_target == math.ceil(r.profit_target / r.expectancy)
        assert math.isfinite(r.estimated_days_to_target)

    @pytest.mark.parametrize("win_rate,rr", [(50, 1), (30, 1), (20, 2)])
    def test_non_positive_expectancy_is_unreachable(self, make_config, win_rate, rr):
        r = calculate(make_config(win_rate=win_rate, risk_reward_ratio=rr))
        assert r.expectancy <= 0
        assert math.isinf(r.estimated_trades_to_target)
        assert math.isinf(r.estimated_days_to_target)
        assert not r.target_reachable
        assert r.risk_of_ruin == 100

    def test_ruin_non_decreasing_as_max_dd_shrinks(self, make_config):
        ruins = [
            calculate(make_config(max_drawdown_pct=pct, mode=TradingMode.CUSTOM,
                                  custom_risk_per_trade=500)).risk_of_ruin
            for pct in (12, 10, 8, 6, 4, 2)
        ]
        assert all(later >= earlier for earlier, later in zip(ruins, ruins[1:]))
        assert ruins[-1] > ruins[0]


# ─── Mode Scaling ──────────────────────────────────────────────


class TestModes:
    def test_aggressive_is_120_pct_of_normal(self, make_config):
        normal = calculate(make_config(mode=TradingMode.NORMAL)).safe_risk_per_trade
        aggressive = calculate(make_config(mode=TradingMode.AGGRESSIVE)).safe_risk_per_trade
        assert aggressive == pytest.approx(normal * 1.2)

    def test_conservative_is_normal_over_1_5(self, make_config):
        normal = calculate(make_config(mode=TradingMode.NORMAL)).safe_risk_per_trade
        conservative = calculate(make_config(mode=TradingMode.CONSERVATIVE)).safe_risk_per_trade
        assert conservative == pytest.approx(normal / 1.5)

    def test_custom_uses_own_risk(self, make_config):
        r = calculate(make_config(mode=TradingMode.CUSTOM, custom_risk_per_trade=900))
        assert r.safe_risk_per_trade == 900
        assert r.base_risk == pytest.approx(1250)

    def test_custom_zero_falls_back_to_base(self, make_config):
        r = calculate(make_config(mode=TradingMode.CUSTOM, custom_risk_per_trade=0))
        assert r.safe_risk_per_trade == pytest.approx(r.base_risk)

    def test_apply_mode_direct(self):
        assert apply_mode(300.0, TradingMode.NORMAL, 0.0) == 300.0
        assert apply_mode(300.0, TradingMode.CONSERVATIVE, 0.0) == pytest.approx(200.0)
        assert apply_mode(300.0, TradingMode.AGGRESSIVE, 0.0) == pytest.approx(360.0)
        assert apply_mode(300.0, TradingMode.CUSTOM, 50.0) == 50.0


# ─── Helpers ───────────────────────────────────────────────────


class TestHelpers:
    def test_base_risk_daily_cap_dominates(self):
        # max_dd/8 = 2500, daily/3 = 1000
        assert compute_base_risk(20000, 3000) == pytest.approx(1000)

    def test_base_risk_max_cap_dominates(self):
        assert compute_base_risk(8000, 9000) == pytest.approx(1000)

    def test_expectancy(self):
        # 40% WR, 3:1 -> 0.4*300 - 0.6*100 = 60
        assert compute_expectancy(40, 100, 300) == pytest.approx(60)

    def test_ruin_saturates_without_edge(self):
        assert compute_risk_of_ruin(50, 1, 0.0, 10000, 1000) == 100.0

    def test_ruin_adjusted_ratio_at_least_one(self):
        # Positive expectancy passed in but odds ratio 0.6 / (0.4 * 1) = 1.5
        assert compute_risk_of_ruin(40, 1, 1.0, 10000, 1000) == 100.0

    def test_ruin_zero_risk_is_zero(self):
        # Infinite units drive the ruin probability to zero
        assert compute_risk_of_ruin(60, 2, 1.0, 10000, 0.0) == 0.0

    def test_safe_div(self):
        assert safe_div(6, 3) == 2
        assert safe_div(1, 0) == math.inf
        assert safe_div(-1, 0) == -math.inf
        assert math.isnan(safe_div(0, 0))


# ─── Warnings ──────────────────────────────────────────────────


class TestWarnings:
    def test_negative_expectancy_danger(self, make_config):
        warnings = calculate(make_config(win_rate=30, risk_reward_ratio=1)).warnings
        assert warnings[0].severity == WarningSeverity.DANGER
        assert "expectancy" in warnings[0].message.lower()

    def test_five_losses_breach(self, make_config):
        r = calculate(make_config(mode=TradingMode.CUSTOM, custom_risk_per_trade=2000))
        messages = [w.message for w in r.warnings]
        assert any("Five consecutive losses" in m for m in messages)

    def test_risk_too_high_for_tight_max_dd(self, make_config):
        r = calculate(make_config(max_drawdown_pct=6, mode=TradingMode.CUSTOM,
                                  custom_risk_per_trade=1100))
        danger = [w for w in r.warnings if w.severity == WarningSeverity.DANGER]
        assert any("1.10%" in w.message and "6%" in w.message for w in danger)

    def test_ruin_warning(self, make_config):
        r = calculate(make_config(win_rate=40, risk_reward_ratio=1.6))
        assert r.risk_of_ruin > 25
        assert any(
            w.severity == WarningSeverity.WARNING and "Risk of Ruin" in w.message
            for w in r.warnings
        )

    def test_aggressive_warning(self, make_config):
        r = calculate(make_config(mode=TradingMode.AGGRESSIVE))
        assert any("Aggressive mode" in w.message for w in r.warnings)

    def test_custom_over_limit_warning(self, make_config):
        # base 1250 -> limit 1500
        r = calculate(make_config(mode=TradingMode.CUSTOM, custom_risk_per_trade=1600))
        assert any("$1600" in w.message and "$1500" in w.message for w in r.warnings)

    def test_custom_within_limit_no_warning(self, make_config):
        r = calculate(make_config(mode=TradingMode.CUSTOM, custom_risk_per_trade=1400))
        assert not any("Custom risk" in w.message for w in r.warnings)

    def test_tight_consistency_info(self, make_config):
        r = calculate(make_config(consistency_rule_enabled=True, consistency_rule_pct=20))
        info = [w for w in r.warnings if w.severity == WarningSeverity.INFO]
        assert len(info) == 1
        assert "$2000" in info[0].message

    def test_loose_consistency_no_info(self, make_config):
        r = calculate(make_config(consistency_rule_enabled=True, consistency_rule_pct=40))
        assert not any(w.severity == WarningSeverity.INFO for w in r.warnings)

    def test_fixed_order(self, make_config):
        r = calculate(
            make_config(
                win_rate=20,
                risk_reward_ratio=1,
                max_drawdown_pct=5,
                mode=TradingMode.CUSTOM,
                custom_risk_per_trade=2000,
                consistency_rule_enabled=True,
                consistency_rule_pct=10,
            )
        )
        severities = [w.severity for w in r.warnings]
        assert severities == [
            WarningSeverity.DANGER,
            WarningSeverity.DANGER,
            WarningSeverity.DANGER,
            WarningSeverity.WARNING,
            WarningSeverity.WARNING,
            WarningSeverity.INFO,
        ]


# ─── Degenerate Inputs ─────────────────────────────────────────


class TestDegenerateInputs:
    def test_zero_balance_does_not_raise(self, make_config):
        r = calculate(make_config(account_balance=0))
        assert r.safe_risk_per_trade == 0
        assert math.isnan(r.risk_pct)
        assert r.risk_of_ruin == 100

    def test_zero_trades_per_day_does_not_raise(self, make_config):
        r = calculate(make_config(trades_per_day=0))
        assert math.isinf(r.estimated_days_to_target)

    def test_win_rate_100(self, make_config):
        r = calculate(make_config(win_rate=100))
        assert r.risk_of_ruin == 0.0
