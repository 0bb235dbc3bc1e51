"""Black-Scholes option valuation.

Pure functions, no state. The normal CDF goes through the Abramowitz-Stegun
7.1.26 error-function approximation (max abs error ~1.5e-7) so results
match the reference calculator digit for digit.
"""

import math

from hedgecalc.models import OptionType

# Abramowitz & Stegun 7.1.26
ERF_A1 = 0.254829592
ERF_A2 = -0.284496736
ERF_A3 = 1.421413741
ERF_A4 = -1.453152027
ERF_A5 = 1.061405429
ERF_P = 0.3275911


def erf(x: float) -> float:
    sign = -1.0 if x < 0 else 1.0
    x = abs(x)
    t = 1.0 / (1.0 + ERF_P * x)
    y = 1.0 - (((((ERF_A5 * t + ERF_A4) * t) + ERF_A3) * t + ERF_A2) * t + ERF_A1) * t * math.exp(-x * x)
    return sign * y


def norm_cdf(x: float) -> float:
    """Standard normal cumulative distribution."""
    return (1.0 + erf(x / math.sqrt(2.0))) / 2.0


def black_scholes_price(
    option_type: OptionType | str,
    underlying: float,
    strike: float,
    rate: float,
    time_years: float,
    volatility: float,
) -> float:
    """Price a European call or put (no dividend yield).

    Args:
        option_type: "call" or "put".
        underlying: Spot-equivalent price (the forward in monthly projections).
        strike: Absolute strike.
        rate: Continuously compounded annual rate as a fraction.
        time_years: Time to maturity in years, must be > 0.
        volatility: Annualized volatility as a fraction, must be > 0.

    Raises:
        ValueError: On non-positive inputs or an unknown option type.
    """
    option_type = OptionType(option_type)
    if underlying <= 0 or strike <= 0:
        raise ValueError(f"underlying and strike must be positive (got {underlying}, {strike})")
    if time_years <= 0:
        raise ValueError(f"time to maturity must be positive (got {time_years})")
    if volatility <= 0:
        raise ValueError(f"volatility must be positive (got {volatility})")

    vol_sqrt_t = volatility * math.sqrt(time_years)
    d1 = (math.log(underlying / strike) + (rate + volatility**2 / 2) * time_years) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t

    nd1 = norm_cdf(d1)
    nd2 = norm_cdf(d2)
    discounted_strike = strike * math.exp(-rate * time_years)

    if option_type == OptionType.CALL:
        return underlying * nd1 - discounted_strike * nd2
    return discounted_strike * (1 - nd2) - underlying * (1 - nd1)


def intrinsic_value(option_type: OptionType | str, price: float, strike: float) -> float:
    """Exercise value at ``price``, premium excluded."""
    if OptionType(option_type) == OptionType.CALL:
        return max(price - strike, 0.0)
    return max(strike - price, 0.0)
