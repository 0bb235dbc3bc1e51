"""Month-by-month hedge projection.

Premiums are quoted off the forward for each period while payoffs are
realized at the real price, so the hedged cost mixes both curves:

    unhedged = volume * real
    hedged   = volume * (real + strategy_premium - payoff)
    delta    = unhedged - hedged        (positive => hedge saved money)
"""

import logging

import numpy as np

from hedgecalc.analysis.prices import month_label, resolve_price_curves
from hedgecalc.analysis.pricing import black_scholes_price, intrinsic_value
from hedgecalc.models import (
    ManualOverrides,
    OptionPrice,
    OptionType,
    Parameters,
    Period,
    SimulationParams,
    StrategyLeg,
)

logger = logging.getLogger(__name__)


def _leg_label(leg: StrategyLeg, index: int) -> str:
    kind = "Call" if OptionType(leg.option_type) == OptionType.CALL else "Put"
    return f"{kind} Price {index + 1}"


def project_results(
    params: Parameters,
    strategy: list[StrategyLeg],
    overrides: ManualOverrides | None = None,
    simulation: SimulationParams | None = None,
    rng: np.random.Generator | None = None,
    simulated_prices: dict[str, float] | None = None,
) -> list[Period] | None:
    """Project every period of the horizon for ``strategy``.

    Args:
        params: Horizon and market inputs.
        strategy: Option legs, summed; order only affects labels.
        overrides: Manual forward / real / implied volatility curves.
        simulation: Real-price simulation switches.
        rng: Generator for the simulated walk (ignored without simulation).
        simulated_prices: Pre-drawn simulated path keyed by period.

    Returns:
        One Period per month, or None when the strategy is empty.
    """
    if not strategy:
        logger.debug("Empty strategy, nothing to project")
        return None

    overrides = overrides or ManualOverrides()
    simulation = simulation or SimulationParams()

    curves = resolve_price_curves(params, overrides, simulation, rng, simulated_prices)
    monthly_volume = params.monthly_volume
    rate = params.rate

    results = []
    for point in curves:
        implied_vol = overrides.implied_volatilities.get(point.key)

        option_prices = []
        for i, leg in enumerate(strategy):
            strike = leg.resolve_strike(params.spot_price)
            volatility = implied_vol if implied_vol is not None else leg.volatility
            premium = black_scholes_price(
                leg.option_type, point.forward, strike, rate,
                point.time_to_maturity, volatility / 100,
            )
            option_prices.append(
                OptionPrice(
                    option_type=OptionType(leg.option_type),
                    price=premium,
                    quantity=leg.quantity_fraction,
                    strike=strike,
                    label=_leg_label(leg, i),
                )
            )

        strategy_price = sum(opt.price * opt.quantity for opt in option_prices)
        total_payoff = sum(
            intrinsic_value(opt.option_type, point.real_price, opt.strike) * opt.quantity
            for opt in option_prices
        )

        unhedged_cost = monthly_volume * point.real_price
        hedged_cost = monthly_volume * (point.real_price + strategy_price - total_payoff)

        results.append(
            Period(
                date=point.date,
                label=month_label(point.date),
                time_to_maturity=point.time_to_maturity,
                forward=point.forward,
                real_price=point.real_price,
                option_prices=tuple(option_prices),
                strategy_price=strategy_price,
                total_payoff=total_payoff,
                monthly_volume=monthly_volume,
                hedged_cost=hedged_cost,
                unhedged_cost=unhedged_cost,
                delta_pnl=unhedged_cost - hedged_cost,
            )
        )

    logger.debug("Projected %d periods for %d legs", len(results), len(strategy))
    return results
