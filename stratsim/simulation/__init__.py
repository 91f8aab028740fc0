"""
Simulation Request/Response Contract.

Builds requests for the external Analysis Provider and validates its
responses before they can be saved or compared. The session service lives
in stratsim.simulation.service.
"""

from stratsim.simulation.schemas import (
    HistoricalContext,
    SimulationInput,
    SimulationRequest,
    SimulationResult,
)
from stratsim.simulation.contract import build_request, present_simulation, validate_response
from stratsim.simulation.provider import AnalysisProvider, OpenAIAnalysisProvider

__all__ = [
    "HistoricalContext",
    "SimulationInput",
    "SimulationRequest",
    "SimulationResult",
    "build_request",
    "present_simulation",
    "validate_response",
    "AnalysisProvider",
    "OpenAIAnalysisProvider",
]
