"""Strategy payoff diagram at a fixed one-year reference maturity."""

import logging

import numpy as np

from hedgecalc.analysis.pricing import black_scholes_price
from hedgecalc.models import OptionType, PayoffPoint, StrategyLeg

logger = logging.getLogger(__name__)

PAYOFF_POINTS = 101
PRICE_STEP = 0.01
LOWER_BOUND = 0.5
REFERENCE_MATURITY_YEARS = 1.0


def payoff_price_grid(spot_price: float) -> np.ndarray:
    """spot * (0.5 + k * 0.01) for k = 0..100."""
    return spot_price * (LOWER_BOUND + np.arange(PAYOFF_POINTS) * PRICE_STEP)


def build_payoff_curve(
    strategy: list[StrategyLeg],
    spot_price: float,
    interest_rate: float,
) -> list[PayoffPoint]:
    """Net payoff (intrinsic minus premium) of the strategy across prices.

    Premiums are priced at spot with a one-year maturity and each leg's own
    volatility; ``interest_rate`` is in percent.
    """
    prices = payoff_price_grid(spot_price)
    total = np.zeros(PAYOFF_POINTS)
    rate = interest_rate / 100

    for leg in strategy:
        strike = leg.resolve_strike(spot_price)
        premium = black_scholes_price(
            leg.option_type, spot_price, strike, rate,
            REFERENCE_MATURITY_YEARS, leg.volatility / 100,
        )
        if OptionType(leg.option_type) == OptionType.CALL:
            intrinsic = np.maximum(prices - strike, 0.0)
        else:
            intrinsic = np.maximum(strike - prices, 0.0)
        total += (intrinsic - premium) * leg.quantity_fraction

    logger.debug("Built payoff curve for %d legs around spot %.4f", len(strategy), spot_price)
    return [PayoffPoint(price=float(p), payoff=float(v)) for p, v in zip(prices, total)]
