"""Unit tests for hedgecalc.analysis.pricing module."""

import math

import pytest

from hedgecalc.analysis.pricing import black_scholes_price, erf, intrinsic_value, norm_cdf
from hedgecalc.models import OptionType


class TestNormCdf:
    def test_zero_is_half(self):
        assert norm_cdf(0.0) == pytest.approx(0.5, abs=1e-8)

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 1.96, 3.0, 7.5])
    def test_symmetry(self, x):
        assert norm_cdf(-x) == pytest.approx(1 - norm_cdf(x), abs=1e-12)

    def test_monotonic(self):
        xs = [i / 10 for i in range(-60, 61)]
        values = [norm_cdf(x) for x in xs]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_bounded(self):
        for x in (-40.0, -5.0, 5.0, 40.0):
            assert 0.0 <= norm_cdf(x) <= 1.0

    @pytest.mark.parametrize("x", [-2.0, -0.3, 0.7, 1.5])
    def test_matches_math_erf(self, x):
        """Approximation stays close to the exact error function."""
        assert erf(x) == pytest.approx(math.erf(x), abs=2e-7)

    def test_known_quantile(self):
        assert norm_cdf(1.96) == pytest.approx(0.9750021, abs=1e-6)


class TestBlackScholesPrice:
    def test_textbook_call(self):
        # S=100, K=100, r=5%, T=1, vol=20%
        assert black_scholes_price("call", 100, 100, 0.05, 1.0, 0.2) == pytest.approx(10.4506, abs=1e-3)

    def test_textbook_put(self):
        assert black_scholes_price("put", 100, 100, 0.05, 1.0, 0.2) == pytest.approx(5.5735, abs=1e-3)

    @pytest.mark.parametrize(
        "underlying,strike,rate,t,vol",
        [
            (100, 100, 0.02, 1.0, 0.2),
            (80, 100, 0.05, 0.25, 0.4),
            (130, 95, 0.0, 2.0, 0.15),
            (100, 120, -0.01, 0.05, 0.6),
        ],
    )
    def test_put_call_parity(self, underlying, strike, rate, t, vol):
        call = black_scholes_price(OptionType.CALL, underlying, strike, rate, t, vol)
        put = black_scholes_price(OptionType.PUT, underlying, strike, rate, t, vol)
        assert call - put == pytest.approx(underlying - strike * math.exp(-rate * t), abs=1e-4)

    def test_call_increases_with_volatility(self):
        low = black_scholes_price("call", 100, 100, 0.02, 0.5, 0.1)
        high = black_scholes_price("call", 100, 100, 0.02, 0.5, 0.4)
        assert high > low

    def test_deep_itm_call_near_intrinsic(self):
        price = black_scholes_price("call", 200, 100, 0.0, 0.1, 0.2)
        assert price == pytest.approx(100.0, abs=1e-3)

    def test_zero_time_rejected(self):
        with pytest.raises(ValueError):
            black_scholes_price("call", 100, 100, 0.02, 0.0, 0.2)

    def test_zero_volatility_rejected(self):
        with pytest.raises(ValueError):
            black_scholes_price("put", 100, 100, 0.02, 1.0, 0.0)

    def test_non_positive_underlying_rejected(self):
        with pytest.raises(ValueError):
            black_scholes_price("call", 0.0, 100, 0.02, 1.0, 0.2)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            black_scholes_price("straddle", 100, 100, 0.02, 1.0, 0.2)


class TestIntrinsicValue:
    def test_call(self):
        assert intrinsic_value("call", 120, 100) == 20
        assert intrinsic_value("call", 80, 100) == 0

    def test_put(self):
        assert intrinsic_value(OptionType.PUT, 80, 100) == 20
        assert intrinsic_value(OptionType.PUT, 120, 100) == 0
