"""Forward and real price curves over the hedge horizon.

The real-price walk draws its shocks from a uniform distribution on [-1, 1]
rather than a standard normal. This is a deliberate approximation kept for
parity with the reference calculator, not a proper lognormal simulation.
"""

import calendar
import logging
import math
from dataclasses import dataclass
from datetime import date

import numpy as np

from hedgecalc.models import ManualOverrides, Parameters, SimulationParams

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
DAYS_PER_YEAR = 365

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class PricePoint:
    date: date
    key: str
    time_to_maturity: float
    forward: float
    real_price: float


def month_key(d: date) -> str:
    """Override mapping key, e.g. ``"2025-3"`` (month not zero padded)."""
    return f"{d.year}-{d.month}"


def month_label(d: date) -> str:
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def hedge_dates(start_date: date, months_to_hedge: int) -> list[date]:
    """Month-end settlement dates, the first one closing the start month."""
    dates = []
    year, month = start_date.year, start_date.month
    for _ in range(months_to_hedge):
        dates.append(_month_end(year, month))
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return dates


def time_to_maturity(start_date: date, index: int, months_to_hedge: int) -> float:
    """Year fraction used for option pricing in period ``index``.

    Period 0 is a stub: the share of the start month still remaining
    (start day included), scaled by the horizon length. Later periods get
    index / months_to_hedge.
    """
    if index == 0:
        days_in_month = calendar.monthrange(start_date.year, start_date.month)[1]
        remaining = days_in_month - start_date.day + 1
        return (remaining / days_in_month) / months_to_hedge
    return index / months_to_hedge


def forward_price(spot_price: float, rate: float, start_date: date, settle_date: date) -> float:
    """Carry-only forward: spot * exp(rate * actual_days / 365)."""
    elapsed_years = (settle_date - start_date).days / DAYS_PER_YEAR
    return spot_price * math.exp(rate * elapsed_years)


def simulate_real_prices(
    spot_price: float,
    dates: list[date],
    simulation: SimulationParams,
    rng: np.random.Generator | None = None,
) -> dict[str, float]:
    """Run one path of the monthly pseudo-Brownian walk.

    Each step multiplies the running price by
    exp((drift - vol^2/2) * dt + vol * sqrt(dt) * u) with dt = 1/12 and
    u ~ U(-1, 1). The first date already carries one step.
    """
    if rng is None:
        rng = np.random.default_rng()
    if not dates:
        return {}

    dt = 1 / MONTHS_PER_YEAR
    vol = simulation.volatility
    shocks = rng.uniform(-1.0, 1.0, size=len(dates))
    log_steps = (simulation.drift - vol**2 / 2) * dt + vol * np.sqrt(dt) * shocks
    path = spot_price * np.exp(np.cumsum(log_steps))

    logger.debug(
        "Simulated %d real prices (vol=%.4f, drift=%.4f)", len(dates), vol, simulation.drift
    )
    return {month_key(d): float(p) for d, p in zip(dates, path)}


def resolve_price_curves(
    params: Parameters,
    overrides: ManualOverrides,
    simulation: SimulationParams,
    rng: np.random.Generator | None = None,
    simulated_prices: dict[str, float] | None = None,
) -> list[PricePoint]:
    """Forward and real price for every period of the horizon.

    Forwards come from the manual curve when a key is present, otherwise from
    carry. Real prices come from the simulated path when simulation is on,
    else from the manual curve, else fall back to the forward. A fresh path
    is drawn on every call unless ``simulated_prices`` is supplied.
    """
    dates = hedge_dates(params.start_date, params.months_to_hedge)

    if simulation.use_simulation and simulated_prices is None:
        simulated_prices = simulate_real_prices(params.spot_price, dates, simulation, rng)

    points = []
    for i, settle in enumerate(dates):
        key = month_key(settle)
        if key in overrides.forwards:
            forward = overrides.forwards[key]
        else:
            forward = forward_price(params.spot_price, params.rate, params.start_date, settle)

        if simulation.use_simulation:
            real_price = simulated_prices[key]
        else:
            real_price = overrides.real_prices.get(key, forward)

        points.append(
            PricePoint(
                date=settle,
                key=key,
                time_to_maturity=time_to_maturity(params.start_date, i, params.months_to_hedge),
                forward=forward,
                real_price=real_price,
            )
        )
    return points
