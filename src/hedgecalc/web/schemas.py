"""Pydantic request/response schemas for the hedgecalc API."""

import math
from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from hedgecalc import __version__
from hedgecalc.analysis.summary import CostSummary
from hedgecalc.snapshot import (
    CamelModel,
    LegSchema,
    PayoffPointSchema,
    ScenarioSchema,
    SnapshotSchema,
)

T = TypeVar("T")


# --- Base schemas ---


class Meta(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ApiResponse(BaseModel, Generic[T]):
    data: T
    meta: Meta = Field(default_factory=Meta)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    service: str = "hedgecalc-api"


# --- Summary schemas ---


class CostSummarySchema(CamelModel):
    hedged_cost: float
    unhedged_cost: float
    delta_pnl: float = Field(alias="deltaPnL")
    cost_reduction_pct: float | None = Field(
        None, description="Delta P&L over |unhedged cost| in percent; null when undefined"
    )

    @classmethod
    def from_summary(cls, summary: CostSummary) -> "CostSummarySchema":
        pct = summary["cost_reduction_pct"]
        return cls(
            hedged_cost=summary["hedged_cost"],
            unhedged_cost=summary["unhedged_cost"],
            delta_pnl=summary["delta_pnl"],
            cost_reduction_pct=None if math.isnan(pct) else pct,
        )


class SummaryData(CamelModel):
    yearly: dict[int, CostSummarySchema]
    totals: CostSummarySchema


class ProjectionData(CamelModel):
    snapshot: SnapshotSchema
    summary: SummaryData


# --- Payoff schemas ---


class PayoffRequest(CamelModel):
    strategy: list[LegSchema]
    spot_price: float = Field(gt=0)
    interest_rate: float = 0.0


class PayoffData(CamelModel):
    points: list[PayoffPointSchema]


# --- Scenario schemas ---


class ScenarioItem(CamelModel):
    key: str
    scenario: ScenarioSchema
