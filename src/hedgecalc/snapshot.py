"""Snapshot serialization contract.

The persisted record keeps the calculator's original camelCase layout
(``params``, ``strategy``, ``results``, ``payoffData``, ``manualForwards``,
``realPrices``, ``realPriceParams``, ``activeTab``, ``customScenario``,
``stressTestScenarios``) so saved states load unchanged. Mapping fields are
keyed by ``"<year>-<month>"``.
"""

import calendar
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from hedgecalc.models import (
    ForwardBasis,
    ManualOverrides,
    NoShift,
    OptionPrice,
    OptionType,
    Parameters,
    PayoffPoint,
    Period,
    RealBasis,
    SimulationParams,
    StrategyLeg,
    StrikeMode,
    StressScenario,
)
from hedgecalc.state import CalculatorState


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Inputs ---


class ParamsSchema(CamelModel):
    start_date: date
    months_to_hedge: int = Field(gt=0)
    interest_rate: float
    total_volume: float
    spot_price: float = Field(gt=0)


class LegSchema(CamelModel):
    option_type: Literal["call", "put"] = Field(alias="type")
    strike: float
    strike_type: Literal["percent", "absolute"] = "percent"
    volatility: float
    quantity: float


class RealPriceParamsSchema(CamelModel):
    use_simulation: bool = False
    volatility: float = Field(0.3, ge=0)
    drift: float = 0.01
    num_simulations: int = 1000


class ScenarioSchema(CamelModel):
    name: str
    description: str = ""
    volatility: float
    drift: float
    price_shock: float = 0.0
    forward_basis: float | None = None
    real_basis: float | None = None
    editable: bool = True

    @model_validator(mode="after")
    def _single_basis(self):
        if self.forward_basis is not None and self.real_basis is not None:
            # a zero basis on one side is no shift; keep the other
            if self.real_basis == 0:
                self.real_basis = None
            elif self.forward_basis == 0:
                self.forward_basis = None
            else:
                raise ValueError("forwardBasis and realBasis cannot both be non-zero")
        return self


# --- Outputs ---


class OptionPriceSchema(CamelModel):
    option_type: Literal["call", "put"] = Field(alias="type")
    price: float
    quantity: float
    strike: float
    label: str


class PeriodSchema(CamelModel):
    label: str = Field(alias="date")  # e.g. "January 2025"
    settlement_date: date | None = None  # absent in older records, derived from the label
    time_to_maturity: float
    forward: float
    real_price: float
    option_prices: list[OptionPriceSchema]
    strategy_price: float
    total_payoff: float
    monthly_volume: float
    hedged_cost: float
    unhedged_cost: float
    delta_pnl: float = Field(alias="deltaPnL")


class PayoffPointSchema(CamelModel):
    price: float
    payoff: float


class SnapshotSchema(CamelModel):
    params: ParamsSchema
    strategy: list[LegSchema] = []
    results: list[PeriodSchema] | None = None
    payoff_data: list[PayoffPointSchema] = []
    manual_forwards: dict[str, float] = {}
    real_prices: dict[str, float] = {}
    real_price_params: RealPriceParamsSchema = Field(default_factory=RealPriceParamsSchema)
    active_tab: str = "parameters"
    custom_scenario: ScenarioSchema | None = None
    stress_test_scenarios: dict[str, ScenarioSchema] = {}
    implied_volatilities: dict[str, float] = {}
    active_scenario: str | None = None
    base_spot_price: float | None = None

    @field_validator("manual_forwards", "real_prices", mode="before")
    @classmethod
    def _drop_cleared_cells(cls, value):
        """Cleared cells are stored as "" (or null); like 0 they mean "no override"."""
        if isinstance(value, dict):
            return {k: v for k, v in value.items() if v not in ("", None) and v != 0}
        return value


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def scenario_to_schema(scenario: StressScenario) -> ScenarioSchema:
    basis = scenario.basis
    return ScenarioSchema(
        name=scenario.name,
        description=scenario.description,
        volatility=scenario.volatility,
        drift=scenario.drift,
        price_shock=scenario.price_shock,
        forward_basis=basis.value if isinstance(basis, ForwardBasis) else None,
        real_basis=basis.value if isinstance(basis, RealBasis) else None,
        editable=scenario.editable,
    )


def scenario_from_schema(schema: ScenarioSchema) -> StressScenario:
    if schema.forward_basis is not None:
        basis = ForwardBasis(schema.forward_basis)
    elif schema.real_basis is not None:
        basis = RealBasis(schema.real_basis)
    else:
        basis = NoShift()
    return StressScenario(
        name=schema.name,
        description=schema.description,
        volatility=schema.volatility,
        drift=schema.drift,
        price_shock=schema.price_shock,
        basis=basis,
        editable=schema.editable,
    )


def _period_to_schema(period: Period) -> PeriodSchema:
    return PeriodSchema(
        label=period.label,
        settlement_date=period.date,
        time_to_maturity=period.time_to_maturity,
        forward=period.forward,
        real_price=period.real_price,
        option_prices=[
            OptionPriceSchema(
                option_type=opt.option_type.value,
                price=opt.price,
                quantity=opt.quantity,
                strike=opt.strike,
                label=opt.label,
            )
            for opt in period.option_prices
        ],
        strategy_price=period.strategy_price,
        total_payoff=period.total_payoff,
        monthly_volume=period.monthly_volume,
        hedged_cost=period.hedged_cost,
        unhedged_cost=period.unhedged_cost,
        delta_pnl=period.delta_pnl,
    )


def _settlement_from_label(label: str) -> date:
    """Month-end date for a "January 2025" style label."""
    month_start = datetime.strptime(label, "%B %Y")
    last_day = calendar.monthrange(month_start.year, month_start.month)[1]
    return date(month_start.year, month_start.month, last_day)


def _period_from_schema(schema: PeriodSchema) -> Period:
    settlement = schema.settlement_date
    if settlement is None:
        settlement = _settlement_from_label(schema.label)
    return Period(
        date=settlement,
        label=schema.label,
        time_to_maturity=schema.time_to_maturity,
        forward=schema.forward,
        real_price=schema.real_price,
        option_prices=tuple(
            OptionPrice(
                option_type=OptionType(opt.option_type),
                price=opt.price,
                quantity=opt.quantity,
                strike=opt.strike,
                label=opt.label,
            )
            for opt in schema.option_prices
        ),
        strategy_price=schema.strategy_price,
        total_payoff=schema.total_payoff,
        monthly_volume=schema.monthly_volume,
        hedged_cost=schema.hedged_cost,
        unhedged_cost=schema.unhedged_cost,
        delta_pnl=schema.delta_pnl,
    )


def to_schema(state: CalculatorState) -> SnapshotSchema:
    params = state.params
    custom = state.scenarios.get("custom")
    return SnapshotSchema(
        params=ParamsSchema(
            start_date=params.start_date,
            months_to_hedge=params.months_to_hedge,
            interest_rate=params.interest_rate,
            total_volume=params.total_volume,
            spot_price=params.spot_price,
        ),
        strategy=[
            LegSchema(
                option_type=OptionType(leg.option_type).value,
                strike=leg.strike,
                strike_type=StrikeMode(leg.strike_mode).value,
                volatility=leg.volatility,
                quantity=leg.quantity,
            )
            for leg in state.strategy
        ],
        results=None if state.results is None else [_period_to_schema(p) for p in state.results],
        payoff_data=[PayoffPointSchema(price=p.price, payoff=p.payoff) for p in state.payoff],
        manual_forwards=dict(state.overrides.forwards),
        real_prices=dict(state.overrides.real_prices),
        real_price_params=RealPriceParamsSchema(
            use_simulation=state.simulation.use_simulation,
            volatility=state.simulation.volatility,
            drift=state.simulation.drift,
            num_simulations=state.simulation.num_simulations,
        ),
        active_tab=state.active_tab,
        custom_scenario=scenario_to_schema(custom) if custom is not None else None,
        stress_test_scenarios={k: scenario_to_schema(s) for k, s in state.scenarios.items()},
        implied_volatilities=dict(state.overrides.implied_volatilities),
        active_scenario=state.active_scenario,
        base_spot_price=state.base_spot_price,
    )


def from_schema(schema: SnapshotSchema) -> CalculatorState:
    scenarios = {k: scenario_from_schema(s) for k, s in schema.stress_test_scenarios.items()}
    if schema.custom_scenario is not None:
        scenarios["custom"] = scenario_from_schema(schema.custom_scenario)

    state = CalculatorState(
        params=Parameters(
            start_date=schema.params.start_date,
            months_to_hedge=schema.params.months_to_hedge,
            interest_rate=schema.params.interest_rate,
            total_volume=schema.params.total_volume,
            spot_price=schema.params.spot_price,
        ),
        strategy=[
            StrategyLeg(
                option_type=OptionType(leg.option_type),
                strike=leg.strike,
                strike_mode=StrikeMode(leg.strike_type),
                volatility=leg.volatility,
                quantity=leg.quantity,
            )
            for leg in schema.strategy
        ],
        overrides=ManualOverrides(
            forwards=dict(schema.manual_forwards),
            real_prices=dict(schema.real_prices),
            implied_volatilities=dict(schema.implied_volatilities),
        ),
        simulation=SimulationParams(
            use_simulation=schema.real_price_params.use_simulation,
            volatility=schema.real_price_params.volatility,
            drift=schema.real_price_params.drift,
            num_simulations=schema.real_price_params.num_simulations,
        ),
        results=None if schema.results is None else [_period_from_schema(p) for p in schema.results],
        payoff=[PayoffPoint(price=p.price, payoff=p.payoff) for p in schema.payoff_data],
        active_tab=schema.active_tab,
        active_scenario=schema.active_scenario,
        base_spot_price=schema.base_spot_price,
    )
    if scenarios:
        state.scenarios = {**state.scenarios, **scenarios}
    return state


def dump_snapshot(state: CalculatorState) -> dict[str, Any]:
    return to_schema(state).model_dump(mode="json", by_alias=True)


def load_snapshot(data: dict[str, Any]) -> CalculatorState:
    return from_schema(SnapshotSchema.model_validate(data))


def to_json(state: CalculatorState, indent: int | None = None) -> str:
    return to_schema(state).model_dump_json(by_alias=True, indent=indent)


def from_json(text: str | bytes) -> CalculatorState:
    return from_schema(SnapshotSchema.model_validate_json(text))
