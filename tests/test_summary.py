"""Unit tests for hedgecalc.analysis.summary module."""

import math
from datetime import date

import pytest

from hedgecalc.analysis.projection import project_results
from hedgecalc.analysis.summary import (
    cost_reduction_pct,
    summarize_by_year,
    summarize_totals,
)
from hedgecalc.models import Period


def _period(d: date, hedged: float, unhedged: float) -> Period:
    return Period(
        date=d,
        label="",
        time_to_maturity=0.1,
        forward=100.0,
        real_price=100.0,
        option_prices=(),
        strategy_price=0.0,
        total_payoff=0.0,
        monthly_volume=1.0,
        hedged_cost=hedged,
        unhedged_cost=unhedged,
        delta_pnl=unhedged - hedged,
    )


class TestTotals:
    def test_delta_matches_sum(self, base_state):
        results = project_results(base_state.params, base_state.strategy)
        totals = summarize_totals(results)
        assert totals["delta_pnl"] == sum(r.delta_pnl for r in results)
        assert totals["hedged_cost"] == sum(r.hedged_cost for r in results)
        assert totals["unhedged_cost"] == sum(r.unhedged_cost for r in results)

    def test_cost_reduction(self):
        results = [_period(date(2025, 1, 31), 90.0, 100.0), _period(date(2025, 2, 28), 95.0, 100.0)]
        totals = summarize_totals(results)
        assert totals["delta_pnl"] == pytest.approx(15.0)
        assert totals["cost_reduction_pct"] == pytest.approx(7.5)

    def test_negative_unhedged_uses_absolute_value(self):
        assert cost_reduction_pct(10.0, -200.0) == pytest.approx(5.0)

    def test_zero_unhedged_is_nan(self):
        totals = summarize_totals([_period(date(2025, 1, 31), 5.0, 0.0)])
        assert math.isnan(totals["cost_reduction_pct"])

    def test_empty_results(self):
        for results in (None, []):
            totals = summarize_totals(results)
            assert totals["delta_pnl"] == 0.0
            assert math.isnan(totals["cost_reduction_pct"])


class TestByYear:
    def test_groups_by_calendar_year(self):
        results = [
            _period(date(2025, 11, 30), 90.0, 100.0),
            _period(date(2025, 12, 31), 80.0, 100.0),
            _period(date(2026, 1, 31), 110.0, 100.0),
        ]
        yearly = summarize_by_year(results)
        assert list(yearly) == [2025, 2026]
        assert yearly[2025]["delta_pnl"] == pytest.approx(30.0)
        assert yearly[2025]["unhedged_cost"] == pytest.approx(200.0)
        assert yearly[2026]["delta_pnl"] == pytest.approx(-10.0)
        assert yearly[2026]["cost_reduction_pct"] == pytest.approx(-10.0)

    def test_years_add_up_to_totals(self, base_state):
        results = project_results(base_state.params, base_state.strategy)
        yearly = summarize_by_year(results)
        assert sum(y["delta_pnl"] for y in yearly.values()) == pytest.approx(
            summarize_totals(results)["delta_pnl"]
        )

    def test_empty(self):
        assert summarize_by_year(None) == {}
