"""Yearly and total roll-ups of projected periods."""

import math
from typing import TypedDict

from hedgecalc.models import Period


class CostSummary(TypedDict):
    hedged_cost: float
    unhedged_cost: float
    delta_pnl: float
    cost_reduction_pct: float  # NaN when unhedged cost sums to zero


def cost_reduction_pct(delta_pnl: float, unhedged_cost: float) -> float:
    """delta / |unhedged| * 100, NaN on a zero denominator."""
    if unhedged_cost == 0:
        return math.nan
    return delta_pnl / abs(unhedged_cost) * 100


def _summarize(periods: list[Period]) -> CostSummary:
    hedged = 0.0
    unhedged = 0.0
    delta = 0.0
    for period in periods:
        hedged += period.hedged_cost
        unhedged += period.unhedged_cost
        delta += period.delta_pnl
    return CostSummary(
        hedged_cost=hedged,
        unhedged_cost=unhedged,
        delta_pnl=delta,
        cost_reduction_pct=cost_reduction_pct(delta, unhedged),
    )


def summarize_by_year(results: list[Period] | None) -> dict[int, CostSummary]:
    """Group periods by calendar year of their settlement date."""
    grouped: dict[int, list[Period]] = {}
    for period in results or []:
        grouped.setdefault(period.date.year, []).append(period)
    return {year: _summarize(periods) for year, periods in grouped.items()}


def summarize_totals(results: list[Period] | None) -> CostSummary:
    return _summarize(results or [])
