"""Unit tests for hedgecalc.analysis.payoff module."""

import pytest

from hedgecalc.analysis.payoff import PAYOFF_POINTS, build_payoff_curve
from hedgecalc.analysis.pricing import black_scholes_price
from hedgecalc.models import OptionType, StrategyLeg, StrikeMode


class TestBuildPayoffCurve:
    def test_exactly_101_points(self, call_leg):
        assert len(build_payoff_curve([call_leg], 100.0, 2.0)) == PAYOFF_POINTS == 101

    def test_grid_endpoints(self, call_leg):
        points = build_payoff_curve([call_leg], 80.0, 2.0)
        assert points[0].price == pytest.approx(40.0)
        assert points[50].price == pytest.approx(80.0)
        assert points[-1].price == pytest.approx(120.0)

    def test_grid_step_is_one_percent(self, call_leg):
        points = build_payoff_curve([call_leg], 100.0, 2.0)
        steps = [b.price - a.price for a, b in zip(points, points[1:])]
        assert all(s == pytest.approx(1.0) for s in steps)

    def test_single_call_net_of_premium(self, call_leg):
        premium = black_scholes_price("call", 100.0, 100.0, 0.02, 1.0, 0.2)
        points = build_payoff_curve([call_leg], 100.0, 2.0)
        # below strike only the premium is lost
        assert points[0].payoff == pytest.approx(-premium)
        # at 150 the call is 50 in the money
        assert points[-1].payoff == pytest.approx(50.0 - premium)

    def test_quantity_scales_payoff(self, call_leg):
        half = StrategyLeg(OptionType.CALL, 100.0, StrikeMode.PERCENT, 20.0, 50.0)
        full_curve = build_payoff_curve([call_leg], 100.0, 2.0)
        half_curve = build_payoff_curve([half], 100.0, 2.0)
        for f, h in zip(full_curve, half_curve):
            assert h.payoff == pytest.approx(f.payoff / 2)

    def test_legs_sum(self, call_leg, put_leg):
        combined = build_payoff_curve([call_leg, put_leg], 100.0, 2.0)
        calls = build_payoff_curve([call_leg], 100.0, 2.0)
        puts = build_payoff_curve([put_leg], 100.0, 2.0)
        for c, a, b in zip(combined, calls, puts):
            assert c.payoff == pytest.approx(a.payoff + b.payoff)

    def test_absolute_put_strike(self, put_leg):
        premium = black_scholes_price("put", 100.0, 90.0, 0.02, 1.0, 0.25)
        points = build_payoff_curve([put_leg], 100.0, 2.0)
        # at 50 the put pays 40, half quantity
        assert points[0].payoff == pytest.approx((40.0 - premium) * 0.5)

    def test_restartable(self, call_leg, put_leg):
        assert build_payoff_curve([call_leg, put_leg], 100.0, 2.0) == build_payoff_curve(
            [call_leg, put_leg], 100.0, 2.0
        )
