"""Projection, payoff and summary endpoints."""

import numpy as np
from fastapi import APIRouter, Depends, HTTPException

from hedgecalc.analysis.payoff import build_payoff_curve
from hedgecalc.analysis.summary import summarize_by_year, summarize_totals
from hedgecalc.models import OptionType, StrategyLeg, StrikeMode
from hedgecalc.snapshot import LegSchema, PayoffPointSchema, SnapshotSchema, from_schema, to_schema
from hedgecalc.state import CalculatorState, recompute
from hedgecalc.web.dependencies import get_rng
from hedgecalc.web.schemas import (
    ApiResponse,
    CostSummarySchema,
    PayoffData,
    PayoffRequest,
    ProjectionData,
    SummaryData,
)

router = APIRouter(tags=["projection"])


def summary_data(state: CalculatorState) -> SummaryData:
    return SummaryData(
        yearly={
            year: CostSummarySchema.from_summary(s)
            for year, s in summarize_by_year(state.results).items()
        },
        totals=CostSummarySchema.from_summary(summarize_totals(state.results)),
    )


def projection_data(state: CalculatorState) -> ProjectionData:
    return ProjectionData(snapshot=to_schema(state), summary=summary_data(state))


def _leg_from_schema(leg: LegSchema) -> StrategyLeg:
    return StrategyLeg(
        option_type=OptionType(leg.option_type),
        strike=leg.strike,
        strike_mode=StrikeMode(leg.strike_type),
        volatility=leg.volatility,
        quantity=leg.quantity,
    )


@router.post("/projection", response_model=ApiResponse[ProjectionData])
async def post_projection(
    snapshot: SnapshotSchema,
    rng: np.random.Generator = Depends(get_rng),
):
    """Recompute results and payoff curve for a calculator snapshot."""
    try:
        state = recompute(from_schema(snapshot), rng)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ApiResponse(data=projection_data(state))


@router.post("/payoff", response_model=ApiResponse[PayoffData])
async def post_payoff(request: PayoffRequest):
    """Payoff diagram of a strategy at a one-year maturity."""
    strategy = [_leg_from_schema(leg) for leg in request.strategy]
    try:
        points = build_payoff_curve(strategy, request.spot_price, request.interest_rate)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ApiResponse(
        data=PayoffData(points=[PayoffPointSchema(price=p.price, payoff=p.payoff) for p in points])
    )


@router.post("/summary", response_model=ApiResponse[SummaryData])
async def post_summary(snapshot: SnapshotSchema):
    """Yearly and total statistics of the snapshot's stored results."""
    return ApiResponse(data=summary_data(from_schema(snapshot)))
