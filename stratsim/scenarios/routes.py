"""Saved scenario and comparison API routes."""
from fastapi import APIRouter, Depends
from typing import List

from stratsim.scenarios import schemas
from stratsim.simulation.service import SessionRegistry, get_session_registry

router = APIRouter()


# ============================================================================
# SAVED SCENARIO ROUTES
# ============================================================================

@router.post("/{session_id}/scenarios", response_model=schemas.SavedScenario)
async def save_scenario(
    session_id: str,
    data: schemas.SaveScenarioRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Save the session's latest simulation result for comparison."""
    session = registry.get(session_id)
    return await session.save_current(name=data.name)


@router.get("/{session_id}/scenarios", response_model=List[schemas.ScenarioListItem])
async def list_scenarios(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """List saved scenarios in save order."""
    session = registry.get(session_id)
    return [
        schemas.ScenarioListItem(
            id=s.id,
            name=s.name,
            created_at=s.created_at,
            viability_score=s.result.simulation_summary.viability_score,
            recommended_action=s.result.simulation_summary.recommended_action,
        )
        for s in session.store.list()
    ]


@router.get("/{session_id}/scenarios/{scenario_id}", response_model=schemas.SavedScenario)
async def get_scenario(
    session_id: str,
    scenario_id: int,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Get a saved scenario."""
    return registry.get(session_id).store.get(scenario_id)


@router.delete("/{session_id}/scenarios/{scenario_id}")
async def delete_scenario(
    session_id: str,
    scenario_id: int,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Delete a saved scenario."""
    registry.get(session_id).store.delete(scenario_id)
    return {"message": "Scenario deleted successfully"}


# ============================================================================
# COMPARISON ROUTES
# ============================================================================

@router.post("/{session_id}/comparisons", response_model=schemas.ScenarioComparison)
async def compare_scenarios(
    session_id: str,
    data: schemas.ComparisonRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Compare saved scenarios side by side and pick a winner."""
    return registry.get(session_id).compare(data.scenario_ids)
