"""Core data model for the hedging calculator.

Plain dataclasses shared by every analysis module. Percent-valued inputs
(interest rate, leg volatility, leg quantity) are stored as entered and
converted to fractions at the point of use.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class OptionType(str, Enum):
    CALL = "call"
    PUT = "put"


class StrikeMode(str, Enum):
    PERCENT = "percent"
    ABSOLUTE = "absolute"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass
class Parameters:
    """Hedge horizon and market inputs."""

    start_date: date
    months_to_hedge: int = 12
    interest_rate: float = 2.0  # annualized, percent
    total_volume: float = 1_000_000.0
    spot_price: float = 100.0

    @property
    def rate(self) -> float:
        return self.interest_rate / 100

    @property
    def monthly_volume(self) -> float:
        return self.total_volume / self.months_to_hedge


@dataclass
class StrategyLeg:
    """One option position of a strategy."""

    option_type: OptionType = OptionType.CALL
    strike: float = 100.0
    strike_mode: StrikeMode = StrikeMode.PERCENT
    volatility: float = 20.0  # percent
    quantity: float = 100.0  # percent of monthly volume

    def resolve_strike(self, spot_price: float) -> float:
        if self.strike_mode == StrikeMode.PERCENT:
            return spot_price * (self.strike / 100)
        if self.strike_mode == StrikeMode.ABSOLUTE:
            return self.strike
        raise ValueError(f"Unknown strike mode: {self.strike_mode!r}")

    @property
    def quantity_fraction(self) -> float:
        return self.quantity / 100


@dataclass
class SimulationParams:
    """Real-price simulation switches. numSimulations is carried, never used."""

    use_simulation: bool = False
    volatility: float = 0.3
    drift: float = 0.01
    num_simulations: int = 1000


@dataclass
class ManualOverrides:
    """Per-period overrides keyed by ``"<year>-<month>"``."""

    forwards: dict[str, float] = field(default_factory=dict)
    real_prices: dict[str, float] = field(default_factory=dict)
    implied_volatilities: dict[str, float] = field(default_factory=dict)  # percent


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OptionPrice:
    option_type: OptionType
    price: float
    quantity: float  # fraction
    strike: float
    label: str


@dataclass(frozen=True)
class Period:
    """One projected month."""

    date: date
    label: str
    time_to_maturity: float
    forward: float
    real_price: float
    option_prices: tuple[OptionPrice, ...]
    strategy_price: float
    total_payoff: float
    monthly_volume: float
    hedged_cost: float
    unhedged_cost: float
    delta_pnl: float


@dataclass(frozen=True)
class PayoffPoint:
    price: float
    payoff: float


# ---------------------------------------------------------------------------
# Stress scenarios
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoShift:
    """Scenario leaves both curves alone."""


@dataclass(frozen=True)
class ForwardBasis:
    """Monthly continuously-compounded basis applied to the forward curve."""

    value: float


@dataclass(frozen=True)
class RealBasis:
    """Monthly continuously-compounded basis applied to the real-price curve."""

    value: float


Basis = NoShift | ForwardBasis | RealBasis


@dataclass(frozen=True)
class StressScenario:
    name: str
    description: str
    volatility: float
    drift: float
    price_shock: float = 0.0
    basis: Basis = NoShift()
    editable: bool = True
