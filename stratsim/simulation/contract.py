"""
Simulation Request/Response Contract.

1. build_request() - validate a SimulationInput, resolve and clamp its
   variables, attach bounded historical context
2. validate_response() - check the provider payload against SimulationResult;
   anything non-conforming is rejected with MalformedAnalysisResponse
3. present_simulation() - expose a validated result in the uniform
   presentation shape
"""
import logging
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from stratsim.config import settings
from stratsim.exceptions import InvalidInput, MalformedAnalysisResponse
from stratsim.schemas.presentation import Insights
from stratsim.simulation.schemas import (
    RECOMMENDED_ACTION_LABELS,
    HistoricalContext,
    SimulationInput,
    SimulationRequest,
    SimulationResult,
)
from stratsim.variables.catalog import EXTERNAL_FACTORS, INTERNAL_VARIABLES, SIMULATION_TYPE_LABELS
from stratsim.variables.engine import resolve_values
from stratsim.variables.schemas import VariableDefinition

logger = logging.getLogger(__name__)


def bound_history(history: Optional[HistoricalContext], limit: int) -> HistoricalContext:
    """Truncate each history list to at most `limit` entries."""
    if history is None:
        return HistoricalContext()
    return HistoricalContext(
        past_strategies=history.past_strategies[:limit],
        past_decisions=history.past_decisions[:limit],
        lessons_learned=history.lessons_learned[:limit],
    )


def build_request(
    data: SimulationInput,
    history: Optional[HistoricalContext] = None,
    external_definitions: Iterable[VariableDefinition] = EXTERNAL_FACTORS,
    internal_definitions: Iterable[VariableDefinition] = INTERNAL_VARIABLES,
    history_limit: Optional[int] = None,
) -> SimulationRequest:
    """
    Assemble the payload for the Analysis Provider.

    Raises:
        InvalidInput: empty strategy text
        UnknownVariable: a factor/variable id with no definition
    """
    strategy_text = data.strategy_text.strip()
    if not strategy_text:
        raise InvalidInput("Describe the strategy to simulate", field="strategy_text")

    limit = history_limit if history_limit is not None else settings.HISTORY_LIMIT

    return SimulationRequest(
        strategy_text=strategy_text,
        simulation_type=data.simulation_type,
        simulation_type_label=SIMULATION_TYPE_LABELS[data.simulation_type],
        external_factors=resolve_values(data.external_factors, external_definitions),
        internal_variables=resolve_values(data.internal_variables, internal_definitions),
        historical_context=bound_history(history, limit),
    )


def validate_response(payload: Any) -> SimulationResult:
    """
    Validate a provider payload against the SimulationResult contract.

    Raises:
        MalformedAnalysisResponse: missing sub-object, out-of-range score,
            unrecognized enum value, or a payload that is not an object
    """
    if not isinstance(payload, dict):
        raise MalformedAnalysisResponse(
            f"Analysis payload must be an object, got {type(payload).__name__}"
        )

    try:
        return SimulationResult.model_validate(payload)
    except ValidationError as e:
        errors = [
            {"loc": ".".join(str(p) for p in err["loc"]), "type": err["type"], "msg": err["msg"]}
            for err in e.errors()
        ]
        logger.warning(f"Rejected analysis payload with {len(errors)} schema error(s)")
        raise MalformedAnalysisResponse(
            "Analysis response does not match the simulation result schema",
            errors=errors,
            details={"errors": errors},
        ) from e


def present_simulation(result: SimulationResult) -> Insights:
    """Expose a simulation result in the uniform presentation shape."""
    summary = result.simulation_summary
    risk_reward = result.risk_reward_analysis
    action_label = RECOMMENDED_ACTION_LABELS[summary.recommended_action]

    return Insights(
        metrics={
            "Viability": f"{summary.viability_score:g}%",
            "Confidence": f"{summary.confidence_level:g}%",
            "Monte Carlo Success": f"{result.monte_carlo_summary.success_rate:g}%",
            "Risk-Adjusted Return": f"{risk_reward.risk_adjusted_return:g}%",
            "Downside Risk": f"{risk_reward.downside_risk:g}%",
            "Upside Potential": f"{risk_reward.upside_potential:g}%",
        },
        recommendation=f"{action_label}: {summary.executive_summary}",
        risks=[r.factor for r in risk_reward.risk_factors],
        opportunities=[o.factor for o in risk_reward.opportunity_factors],
        details=result.model_dump(by_alias=True),
    )
