"""Analysis Provider - external collaborator that turns a request into an analysis.

The provider is opaque to the rest of the engine: it receives a
SimulationRequest and returns the raw JSON object it produced. Shape checking
happens in contract.validate_response().

OpenAIAnalysisProvider:
1. Builds a prompt from the strategy, variables and historical context
2. Calls the chat completions API in JSON mode
3. Returns the decoded JSON object
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from openai import AsyncOpenAI, OpenAIError

from stratsim.config import settings
from stratsim.exceptions import MalformedAnalysisResponse, ProviderUnavailable
from stratsim.simulation.schemas import SimulationRequest
from stratsim.variables.catalog import EXTERNAL_FACTORS, INTERNAL_VARIABLES

logger = logging.getLogger(__name__)


RESULT_FORMAT = """{
  "simulation_summary": {
    "scenario_name": "Name for this scenario",
    "viability_score": 0-100,
    "confidence_level": 0-100,
    "recommended_action": "proceed|proceed_with_caution|defer|abort",
    "executive_summary": "2-3 sentence summary"
  },
  "outcome_projections": {
    "best_case": {"probability": 0-100, "roi": "percentage", "timeline": "months",
                  "description": "what happens", "key_success_factors": ["factor1"]},
    "base_case": {"probability": 0-100, "roi": "percentage", "timeline": "months",
                  "description": "what happens", "assumptions": ["assumption1"]},
    "worst_case": {"probability": 0-100, "roi": "percentage", "timeline": "months",
                   "description": "what happens", "trigger_conditions": ["condition1"]}
  },
  "risk_reward_analysis": {
    "expected_value": "calculated expected value",
    "risk_adjusted_return": 0-100,
    "sharpe_ratio_equivalent": 0-3,
    "downside_risk": 0-100,
    "upside_potential": 0-100,
    "risk_factors": [{"factor": "risk name", "probability": 0-100,
                      "impact": "high|medium|low", "mitigation": "how to mitigate"}],
    "opportunity_factors": [{"factor": "opportunity name", "probability": 0-100,
                             "impact": "high|medium|low", "how_to_capture": "strategy"}]
  },
  "bottleneck_analysis": {
    "critical_bottlenecks": [{"bottleneck": "description", "severity": "critical|high|medium|low",
                              "phase": "when it occurs", "impact": "consequence",
                              "resolution": "how to resolve"}],
    "resource_constraints": [{"resource": "type", "current_capacity": "current state",
                              "required_capacity": "what's needed", "gap": "shortfall",
                              "solution": "how to bridge"}],
    "dependency_chain": ["dependency1 -> dependency2"]
  },
  "unintended_consequences": [{"consequence": "description", "likelihood": 0-100,
                               "severity": "high|medium|low", "type": "positive|negative|neutral",
                               "affected_areas": ["area1"], "prevention_or_enhancement": "how"}],
  "sensitivity_analysis": {
    "most_sensitive_variables": [{"variable": "name", "sensitivity_score": 0-100,
                                  "impact_direction": "positive|negative|bidirectional",
                                  "threshold": "critical value"}],
    "scenario_variations": [{"variation": "what changes", "impact_on_outcome": "description",
                             "probability_shift": "+/- percentage"}]
  },
  "implementation_roadmap": {
    "phases": [{"phase": "name", "duration": "weeks/months", "key_activities": ["activity1"],
                "milestones": ["milestone1"], "decision_gates": ["gate1"],
                "resources_required": "brief description"}],
    "critical_path": ["activity1", "activity2"],
    "early_warning_indicators": ["indicator1"]
  },
  "strategic_recommendations": [{"recommendation": "what to do", "priority": "high|medium|low",
                                 "timing": "when", "expected_impact": "what it achieves",
                                 "dependencies": ["dependency1"]}],
  "monte_carlo_summary": {
    "simulations_run": 1000,
    "success_rate": 0-100,
    "median_outcome": "description",
    "95th_percentile": "best outcomes",
    "5th_percentile": "worst outcomes",
    "variance": 0-100
  }
}"""


def _format_variables(values: Dict[str, float], definitions) -> str:
    labels = {d.id: (d.label, d.unit) for d in definitions}
    lines = []
    for variable_id, value in values.items():
        label, unit = labels.get(variable_id, (variable_id, ""))
        lines.append(f"- {label}: {value:g}{(' ' + unit) if unit else ''}")
    return "\n".join(lines)


def build_prompt(request: SimulationRequest) -> str:
    """Render the analysis prompt for a request."""
    history = json.dumps(request.historical_context.model_dump(exclude_none=True), indent=2)

    return f"""You are a strategic simulation engine. Run a comprehensive simulation for the following strategy:

STRATEGY DESCRIPTION:
"{request.strategy_text}"

SIMULATION TYPE: {request.simulation_type_label}

EXTERNAL FACTORS:
{_format_variables(request.external_factors, EXTERNAL_FACTORS)}

INTERNAL VARIABLES:
{_format_variables(request.internal_variables, INTERNAL_VARIABLES)}

HISTORICAL CONTEXT:
{history}

Return only a JSON object in exactly this format. Every key is required; scores are numbers:
{RESULT_FORMAT}"""


class AnalysisProvider(ABC):
    """Interface for the external analysis collaborator."""

    @abstractmethod
    async def analyze(self, request: SimulationRequest) -> Dict[str, Any]:
        """
        Produce the raw analysis payload for a request.

        Raises:
            ProviderUnavailable: transport failure
            MalformedAnalysisResponse: body is not a JSON object
        """


class OpenAIAnalysisProvider(AnalysisProvider):
    """Analysis Provider backed by the OpenAI chat completions API."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ):
        self._client = client
        self.model = model or settings.OPENAI_MODEL
        self.max_tokens = max_tokens or settings.OPENAI_MAX_TOKENS

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY,
                timeout=settings.OPENAI_TIMEOUT_SECONDS,
                max_retries=0,  # retries are handled by the simulation service
            )
        return self._client

    async def analyze(self, request: SimulationRequest) -> Dict[str, Any]:
        messages = [
            {"role": "system", "content": "You are a precise strategy analyst. Respond with JSON only."},
            {"role": "user", "content": build_prompt(request)},
        ]

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            logger.error(f"Analysis provider call failed: {e}")
            raise ProviderUnavailable(f"Analysis provider call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise MalformedAnalysisResponse("Analysis provider returned an empty response")

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedAnalysisResponse(f"Analysis provider returned invalid JSON: {e}") from e
