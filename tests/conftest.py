"""Pytest configuration and shared fixtures."""

from datetime import date

import numpy as np
import pytest

from hedgecalc.models import (
    ManualOverrides,
    OptionType,
    Parameters,
    SimulationParams,
    StrategyLeg,
    StrikeMode,
)
from hedgecalc.state import CalculatorState


@pytest.fixture
def params():
    """One-year horizon starting mid-January, spot 100, 2% rate."""
    return Parameters(
        start_date=date(2025, 1, 15),
        months_to_hedge=12,
        interest_rate=2.0,
        total_volume=1_200_000.0,
        spot_price=100.0,
    )


@pytest.fixture
def call_leg():
    return StrategyLeg(
        option_type=OptionType.CALL,
        strike=100.0,
        strike_mode=StrikeMode.PERCENT,
        volatility=20.0,
        quantity=100.0,
    )


@pytest.fixture
def put_leg():
    return StrategyLeg(
        option_type=OptionType.PUT,
        strike=90.0,
        strike_mode=StrikeMode.ABSOLUTE,
        volatility=25.0,
        quantity=50.0,
    )


@pytest.fixture
def no_simulation():
    return SimulationParams(use_simulation=False)


@pytest.fixture
def empty_overrides():
    return ManualOverrides()


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def base_state(params, call_leg, put_leg):
    """Two-leg collar-like strategy, no overrides, simulation off."""
    return CalculatorState(params=params, strategy=[call_leg, put_leg])
