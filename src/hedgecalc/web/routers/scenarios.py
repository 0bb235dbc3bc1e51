"""Stress-test scenario endpoints."""

import numpy as np
from fastapi import APIRouter, Depends, HTTPException

from hedgecalc.analysis.scenarios import default_scenarios
from hedgecalc.snapshot import SnapshotSchema, from_schema, scenario_to_schema
from hedgecalc.state import apply_stress_test
from hedgecalc.web.dependencies import get_rng
from hedgecalc.web.routers.projection import projection_data
from hedgecalc.web.schemas import ApiResponse, ProjectionData, ScenarioItem

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


@router.get("", response_model=ApiResponse[list[ScenarioItem]])
async def list_scenarios():
    """Built-in stress-test catalog with default values."""
    return ApiResponse(
        data=[
            ScenarioItem(key=key, scenario=scenario_to_schema(sc))
            for key, sc in default_scenarios().items()
        ]
    )


@router.post("/{key}/apply", response_model=ApiResponse[ProjectionData])
async def apply_scenario(
    key: str,
    snapshot: SnapshotSchema,
    rng: np.random.Generator = Depends(get_rng),
):
    """Apply scenario ``key`` to a snapshot and return the stressed projection."""
    state = from_schema(snapshot)
    if key not in state.scenarios:
        raise HTTPException(status_code=404, detail=f"No scenario named {key}")
    try:
        state = apply_stress_test(state, key, rng)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ApiResponse(data=projection_data(state))
