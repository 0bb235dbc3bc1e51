"""Explicit calculator state and the entry points that recompute it.

Every operation returns a new CalculatorState; nothing recomputes in the
background. Callers run one operation to completion before the next.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import date

import numpy as np

from hedgecalc.analysis.payoff import build_payoff_curve
from hedgecalc.analysis.prices import hedge_dates, simulate_real_prices
from hedgecalc.analysis.projection import project_results
from hedgecalc.analysis.scenarios import apply_scenario, default_scenarios
from hedgecalc.config import Settings
from hedgecalc.models import (
    ManualOverrides,
    Parameters,
    PayoffPoint,
    Period,
    SimulationParams,
    StrategyLeg,
    StressScenario,
)

logger = logging.getLogger(__name__)


@dataclass
class CalculatorState:
    params: Parameters
    strategy: list[StrategyLeg] = field(default_factory=list)
    overrides: ManualOverrides = field(default_factory=ManualOverrides)
    simulation: SimulationParams = field(default_factory=SimulationParams)
    results: list[Period] | None = None
    payoff: list[PayoffPoint] = field(default_factory=list)
    active_tab: str = "parameters"
    scenarios: dict[str, StressScenario] = field(default_factory=default_scenarios)
    active_scenario: str | None = None
    base_spot_price: float | None = None


def new_state(settings: Settings | None = None, start_date: date | None = None) -> CalculatorState:
    """Blank state seeded with the configured defaults."""
    if settings is None:
        settings = Settings()
    return CalculatorState(
        params=Parameters(
            start_date=start_date or date.today(),
            months_to_hedge=settings.default_months_to_hedge,
            interest_rate=settings.default_interest_rate,
            total_volume=settings.default_total_volume,
            spot_price=settings.default_spot_price,
        ),
        simulation=SimulationParams(
            use_simulation=False,
            volatility=settings.simulation_volatility,
            drift=settings.simulation_drift,
            num_simulations=settings.simulation_num_paths,
        ),
    )


def make_rng(settings: Settings | None = None) -> np.random.Generator:
    seed = settings.simulation_seed if settings is not None else None
    return np.random.default_rng(seed)


def recompute(state: CalculatorState, rng: np.random.Generator | None = None) -> CalculatorState:
    """Rebuild results and payoff curve from scratch.

    With simulation on, a fresh real-price path is drawn and replaces the
    real-price overrides (one entry per period of the current horizon), so
    the returned state replays identically once simulation is switched off.
    """
    if not state.strategy:
        logger.debug("No strategy legs, clearing results")
        return dataclasses.replace(state, results=None, payoff=[])

    overrides = state.overrides
    simulated = None
    if state.simulation.use_simulation:
        dates = hedge_dates(state.params.start_date, state.params.months_to_hedge)
        simulated = simulate_real_prices(state.params.spot_price, dates, state.simulation, rng)
        overrides = dataclasses.replace(overrides, real_prices=dict(simulated))

    results = project_results(
        state.params, state.strategy, overrides, state.simulation,
        simulated_prices=simulated,
    )
    payoff = build_payoff_curve(state.strategy, state.params.spot_price, state.params.interest_rate)
    return dataclasses.replace(state, overrides=overrides, results=results, payoff=payoff)


# ---------------------------------------------------------------------------
# Strategy edits
# ---------------------------------------------------------------------------


def add_leg(
    state: CalculatorState,
    leg: StrategyLeg | None = None,
    rng: np.random.Generator | None = None,
) -> CalculatorState:
    """Append a leg (default: 100% ATM call at 20% vol) and recompute."""
    strategy = [*state.strategy, leg or StrategyLeg()]
    return recompute(dataclasses.replace(state, strategy=strategy), rng)


def update_leg(
    state: CalculatorState,
    index: int,
    rng: np.random.Generator | None = None,
    **changes,
) -> CalculatorState:
    strategy = list(state.strategy)
    strategy[index] = dataclasses.replace(strategy[index], **changes)
    return recompute(dataclasses.replace(state, strategy=strategy), rng)


def remove_leg(
    state: CalculatorState,
    index: int,
    rng: np.random.Generator | None = None,
) -> CalculatorState:
    strategy = list(state.strategy)
    del strategy[index]
    return recompute(dataclasses.replace(state, strategy=strategy), rng)


# ---------------------------------------------------------------------------
# Stress scenarios
# ---------------------------------------------------------------------------


def apply_stress_test(
    state: CalculatorState,
    key: str,
    rng: np.random.Generator | None = None,
) -> CalculatorState:
    """Activate scenario ``key`` and recompute; unknown keys are a no-op.

    Shocks always apply to the spot in force before the first scenario, so
    switching between scenarios never compounds them.
    """
    initial_spot = state.base_spot_price
    if initial_spot is None:
        initial_spot = state.params.spot_price

    inputs = apply_scenario(
        key, state.scenarios, state.params, state.overrides, state.simulation,
        initial_spot=initial_spot,
    )
    if inputs is None:
        return state

    updated = dataclasses.replace(
        state,
        params=inputs.params,
        overrides=inputs.overrides,
        simulation=inputs.simulation,
        active_scenario=key,
        base_spot_price=initial_spot,
    )
    return recompute(updated, rng)


def clear_scenario(state: CalculatorState, rng: np.random.Generator | None = None) -> CalculatorState:
    """Leave the active scenario: restore the unshocked spot, drop curve overrides."""
    if state.active_scenario is None:
        return state

    params = state.params
    if state.base_spot_price is not None:
        params = dataclasses.replace(params, spot_price=state.base_spot_price)
    overrides = ManualOverrides(implied_volatilities=dict(state.overrides.implied_volatilities))

    updated = dataclasses.replace(
        state,
        params=params,
        overrides=overrides,
        active_scenario=None,
        base_spot_price=None,
    )
    return recompute(updated, rng)
