"""Stress-test scenario catalog and application.

A scenario shocks the spot, replaces the simulation volatility and drift,
and optionally rebuilds one of the price curves from a monthly basis:

- ForwardBasis(b): forward_i = stressed_spot * exp(b * i), simulation on.
- RealBasis(b):    real_i = stressed_spot * exp(b * i), forwards reset to
                   carry only, simulation off.
- NoShift:         curves untouched, simulation on.
"""

import dataclasses
import logging
import math
from dataclasses import dataclass

from hedgecalc.analysis.prices import forward_price, hedge_dates, month_key
from hedgecalc.models import (
    Basis,
    ForwardBasis,
    ManualOverrides,
    NoShift,
    Parameters,
    RealBasis,
    SimulationParams,
    StressScenario,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Built-in catalog
# ---------------------------------------------------------------------------

DEFAULT_SCENARIOS: dict[str, StressScenario] = {
    "base": StressScenario(
        name="Base Case",
        description="Normal market conditions",
        volatility=0.2,
        drift=0.01,
        price_shock=0.0,
        basis=ForwardBasis(0.0),
    ),
    "highVol": StressScenario(
        name="High Volatility",
        description="Double volatility scenario",
        volatility=0.4,
        drift=0.01,
        price_shock=0.0,
        basis=ForwardBasis(0.0),
    ),
    "crash": StressScenario(
        name="Market Crash",
        description="High volatility, negative drift, price shock",
        volatility=0.5,
        drift=-0.03,
        price_shock=-0.2,
        basis=ForwardBasis(0.0),
    ),
    "bull": StressScenario(
        name="Bull Market",
        description="Low volatility, positive drift, upward shock",
        volatility=0.15,
        drift=0.02,
        price_shock=0.1,
        basis=ForwardBasis(0.0),
    ),
    "contango": StressScenario(
        name="Contango",
        description="Forward prices higher than spot (monthly basis in %)",
        volatility=0.2,
        drift=0.01,
        price_shock=0.0,
        basis=ForwardBasis(0.01),
    ),
    "backwardation": StressScenario(
        name="Backwardation",
        description="Forward prices lower than spot (monthly basis in %)",
        volatility=0.2,
        drift=0.01,
        price_shock=0.0,
        basis=ForwardBasis(-0.01),
    ),
    "contangoReal": StressScenario(
        name="Contango (Real Prices)",
        description="Real prices rise above spot (monthly basis in %)",
        volatility=0.2,
        drift=0.01,
        price_shock=0.0,
        basis=RealBasis(0.01),
    ),
    "backwardationReal": StressScenario(
        name="Backwardation (Real Prices)",
        description="Real prices fall below spot (monthly basis in %)",
        volatility=0.2,
        drift=0.01,
        price_shock=0.0,
        basis=RealBasis(-0.01),
    ),
    "custom": StressScenario(
        name="Custom",
        description="User-defined scenario",
        volatility=0.2,
        drift=0.01,
        price_shock=0.0,
        basis=NoShift(),
    ),
}

EDITABLE_FIELDS = frozenset({"name", "description", "volatility", "drift", "price_shock", "basis"})


def default_scenarios() -> dict[str, StressScenario]:
    """Fresh copy of the built-in catalog."""
    return dict(DEFAULT_SCENARIOS)


def get_scenario(catalog: dict[str, StressScenario], key: str) -> StressScenario | None:
    return catalog.get(key)


def update_scenario(
    catalog: dict[str, StressScenario], key: str, **changes
) -> dict[str, StressScenario]:
    """Return a catalog with one entry edited; other entries are untouched.

    Raises:
        KeyError: Unknown scenario key.
        ValueError: Entry not editable, or an unknown field name.
    """
    scenario = catalog[key]
    if not scenario.editable:
        raise ValueError(f"Scenario {key!r} is not editable")
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown scenario fields: {sorted(unknown)}")

    updated = dict(catalog)
    updated[key] = dataclasses.replace(scenario, **changes)
    return updated


def reset_scenario(catalog: dict[str, StressScenario], key: str) -> dict[str, StressScenario]:
    """Restore a single entry to its built-in default."""
    updated = dict(catalog)
    if key in DEFAULT_SCENARIOS:
        updated[key] = DEFAULT_SCENARIOS[key]
    else:
        updated.pop(key, None)
    return updated


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScenarioInputs:
    """Projection inputs after a scenario has been applied."""

    params: Parameters
    overrides: ManualOverrides
    simulation: SimulationParams


def basis_curve(stressed_spot: float, basis: float, months: int) -> list[float]:
    """stressed_spot * exp(basis * i) for i in 0..months-1."""
    return [stressed_spot * math.exp(basis * i) for i in range(months)]


def apply_scenario(
    key: str,
    catalog: dict[str, StressScenario],
    params: Parameters,
    overrides: ManualOverrides,
    simulation: SimulationParams,
    initial_spot: float | None = None,
) -> ScenarioInputs | None:
    """Transform projection inputs according to scenario ``key``.

    Args:
        key: Catalog key.
        catalog: Scenario catalog (possibly edited).
        params: Current parameters.
        overrides: Current manual curves.
        simulation: Current simulation parameters.
        initial_spot: Unshocked spot; defaults to ``params.spot_price``.

    Returns:
        New inputs, or None when ``key`` is not in the catalog.
    """
    scenario = catalog.get(key)
    if scenario is None:
        logger.debug("Unknown scenario %r, ignoring", key)
        return None

    if initial_spot is None:
        initial_spot = params.spot_price
    stressed_spot = initial_spot * (1 + scenario.price_shock)
    basis: Basis = scenario.basis

    new_params = dataclasses.replace(params, spot_price=stressed_spot)
    new_simulation = dataclasses.replace(
        simulation,
        use_simulation=not isinstance(basis, RealBasis),
        volatility=scenario.volatility,
        drift=scenario.drift,
    )
    forwards = dict(overrides.forwards)
    real_prices = dict(overrides.real_prices)

    dates = hedge_dates(params.start_date, params.months_to_hedge)
    keys = [month_key(d) for d in dates]

    if isinstance(basis, ForwardBasis):
        forwards = {}
        if basis.value != 0:
            curve = basis_curve(stressed_spot, basis.value, len(dates))
            forwards = dict(zip(keys, curve))
    elif isinstance(basis, RealBasis):
        real_prices = {}
        if basis.value != 0:
            forwards = {
                k: forward_price(stressed_spot, new_params.rate, params.start_date, d)
                for k, d in zip(keys, dates)
            }
            curve = basis_curve(stressed_spot, basis.value, len(dates))
            real_prices = dict(zip(keys, curve))
    elif not isinstance(basis, NoShift):
        raise TypeError(f"Unsupported basis: {basis!r}")

    logger.info(
        "Applied scenario %s: spot %.4f -> %.4f, basis=%s",
        scenario.name, initial_spot, stressed_spot, basis,
    )
    return ScenarioInputs(
        params=new_params,
        overrides=ManualOverrides(
            forwards=forwards,
            real_prices=real_prices,
            implied_volatilities=dict(overrides.implied_volatilities),
        ),
        simulation=new_simulation,
    )
