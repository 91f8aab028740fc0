"""Simulation API routes."""
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from stratsim.simulation import schemas
from stratsim.simulation.service import SessionRegistry, get_session_registry

router = APIRouter()


@router.post("/{session_id}/simulations", response_model=schemas.SimulationRunResponse)
async def run_simulation(
    session_id: str,
    data: schemas.RunSimulationRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Run a strategy simulation through the Analysis Provider."""
    session = registry.get(session_id)
    simulation_input = schemas.SimulationInput(
        strategy_text=data.strategy_text,
        simulation_type=data.simulation_type,
        external_factors=data.external_factors,
        internal_variables=data.internal_variables,
    )
    completed = await session.run(simulation_input, history=data.historical_context)
    return completed.to_dict()


@router.get("/{session_id}/simulations/current", response_model=schemas.SimulationRunResponse)
async def get_current_simulation(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Get the latest completed simulation for the session."""
    session = registry.get(session_id)
    if session.current is None:
        raise HTTPException(status_code=404, detail="No completed simulation")
    return session.current.to_dict()


@router.get("/{session_id}/simulations/in-flight", response_model=schemas.InFlightResponse)
async def list_in_flight_simulations(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """List runs that can still be abandoned."""
    return schemas.InFlightResponse(run_ids=registry.get(session_id).in_flight)


@router.delete("/{session_id}/simulations/in-flight", response_model=schemas.AbandonResponse)
async def abandon_simulations(
    session_id: str,
    run_id: Optional[str] = Query(None),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Abandon in-flight runs; their late responses will be discarded."""
    session = registry.get(session_id)
    return schemas.AbandonResponse(abandoned_run_ids=session.abandon(run_id))
