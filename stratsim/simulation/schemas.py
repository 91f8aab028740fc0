"""
Simulation Request/Response schemas.

The result models mirror the JSON document returned by the Analysis Provider.
They validate in strict mode: values are rejected, never coerced, and no
missing field is ever synthesized.
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, Strict, StrictInt
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from stratsim.variables.schemas import SimulationType


Number = Annotated[float, Strict()]
Score = Annotated[float, Strict(), Field(ge=0, le=100)]
ImpactLevel = Literal["high", "medium", "low"]
Severity = Literal["critical", "high", "medium", "low"]
RecommendedAction = Literal["proceed", "proceed_with_caution", "defer", "abort"]
ConsequenceType = Literal["positive", "negative", "neutral"]
ImpactDirection = Literal["positive", "negative", "bidirectional"]

RECOMMENDED_ACTION_LABELS: Dict[str, str] = {
    "proceed": "Proceed",
    "proceed_with_caution": "Proceed with Caution",
    "defer": "Defer",
    "abort": "Abort",
}


class ContractModel(BaseModel):
    """Base for provider payload models."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


# ============================================================================
# SUMMARY & PROJECTIONS
# ============================================================================

class SimulationSummary(ContractModel):
    scenario_name: str = Field(..., min_length=1)
    viability_score: Score
    confidence_level: Score
    recommended_action: RecommendedAction
    executive_summary: str


class CaseProjection(ContractModel):
    probability: Score
    roi: str
    timeline: str
    description: str


class BestCase(CaseProjection):
    key_success_factors: List[str]


class BaseCase(CaseProjection):
    assumptions: List[str]


class WorstCase(CaseProjection):
    trigger_conditions: List[str]


class OutcomeProjections(ContractModel):
    best_case: BestCase
    base_case: BaseCase
    worst_case: WorstCase


# ============================================================================
# RISK / REWARD
# ============================================================================

class RiskFactor(ContractModel):
    factor: str
    probability: Score
    impact: ImpactLevel
    mitigation: Optional[str] = None


class OpportunityFactor(ContractModel):
    factor: str
    probability: Score
    impact: ImpactLevel
    how_to_capture: Optional[str] = None


class RiskRewardAnalysis(ContractModel):
    expected_value: Union[Number, str]
    risk_adjusted_return: Score
    sharpe_ratio_equivalent: Optional[Annotated[float, Strict(), Field(ge=0, le=3)]] = None
    downside_risk: Score
    upside_potential: Score
    risk_factors: List[RiskFactor]
    opportunity_factors: List[OpportunityFactor]


# ============================================================================
# BOTTLENECKS & CONSEQUENCES
# ============================================================================

class Bottleneck(ContractModel):
    bottleneck: str
    severity: Severity
    phase: Optional[str] = None
    impact: Optional[str] = None
    resolution: Optional[str] = None


class ResourceConstraint(ContractModel):
    resource: str
    current_capacity: Optional[str] = None
    required_capacity: Optional[str] = None
    gap: Optional[str] = None
    solution: Optional[str] = None


class BottleneckAnalysis(ContractModel):
    critical_bottlenecks: List[Bottleneck]
    resource_constraints: List[ResourceConstraint]
    dependency_chain: List[str]


class UnintendedConsequence(ContractModel):
    consequence: str
    likelihood: Score
    severity: ImpactLevel
    type: ConsequenceType
    affected_areas: Optional[List[str]] = None
    prevention_or_enhancement: Optional[str] = None


# ============================================================================
# SENSITIVITY, ROADMAP, RECOMMENDATIONS
# ============================================================================

class SensitiveVariable(ContractModel):
    variable: str
    sensitivity_score: Score
    impact_direction: ImpactDirection
    threshold: Optional[Union[str, Number]] = None


class ScenarioVariation(ContractModel):
    variation: str
    impact_on_outcome: Optional[str] = None
    probability_shift: Optional[Union[str, Number]] = None


class SensitivityAnalysis(ContractModel):
    most_sensitive_variables: List[SensitiveVariable]
    scenario_variations: List[ScenarioVariation]


class RoadmapPhase(ContractModel):
    phase: str
    duration: str
    key_activities: List[str]
    milestones: Optional[List[str]] = None
    decision_gates: Optional[List[str]] = None
    resources_required: Optional[str] = None


class ImplementationRoadmap(ContractModel):
    phases: List[RoadmapPhase]
    critical_path: List[str]
    early_warning_indicators: List[str]


class StrategicRecommendation(ContractModel):
    recommendation: str
    priority: ImpactLevel
    timing: Optional[str] = None
    expected_impact: Optional[str] = None
    dependencies: Optional[List[str]] = None


class MonteCarloSummary(ContractModel):
    simulations_run: StrictInt = Field(..., ge=0)
    success_rate: Score
    median_outcome: str
    percentile_95: str = Field(..., alias="95th_percentile")
    percentile_5: str = Field(..., alias="5th_percentile")
    variance: Score


class SimulationResult(ContractModel):
    """Full structured output of one analysis run."""
    simulation_summary: SimulationSummary
    outcome_projections: OutcomeProjections
    risk_reward_analysis: RiskRewardAnalysis
    bottleneck_analysis: BottleneckAnalysis
    unintended_consequences: List[UnintendedConsequence]
    sensitivity_analysis: SensitivityAnalysis
    implementation_roadmap: ImplementationRoadmap
    strategic_recommendations: List[StrategicRecommendation]
    monte_carlo_summary: MonteCarloSummary


# ============================================================================
# REQUEST SIDE
# ============================================================================

class SimulationInput(BaseModel):
    """User-specified strategy description plus bounded variable values."""
    strategy_text: str
    simulation_type: SimulationType = SimulationType.STRATEGIC_INITIATIVE
    external_factors: Dict[str, float] = Field(default_factory=dict)
    internal_variables: Dict[str, float] = Field(default_factory=dict)


class PastStrategy(BaseModel):
    title: str
    category: Optional[str] = None
    status: Optional[str] = None
    roi_estimate: Optional[Union[str, float]] = None


class PastDecision(BaseModel):
    title: str
    status: Optional[str] = None
    direction: Optional[str] = None


class HistoricalContext(BaseModel):
    """Prior strategies, decisions and lessons supplied by the history collaborator."""
    past_strategies: List[PastStrategy] = Field(default_factory=list)
    past_decisions: List[PastDecision] = Field(default_factory=list)
    lessons_learned: List[str] = Field(default_factory=list)


class SimulationRequest(BaseModel):
    """Payload sent to the Analysis Provider."""
    strategy_text: str
    simulation_type: SimulationType
    simulation_type_label: str
    external_factors: Dict[str, float]
    internal_variables: Dict[str, float]
    historical_context: HistoricalContext = Field(default_factory=HistoricalContext)


# ============================================================================
# API SCHEMAS
# ============================================================================

class RunSimulationRequest(SimulationInput):
    """Request to run a simulation for a session."""
    historical_context: Optional[HistoricalContext] = None


class SimulationRunResponse(BaseModel):
    """Schema for a completed simulation run."""
    run_id: str
    completed_at: datetime
    inputs: SimulationInput
    result: SimulationResult
    insights: Dict[str, Any]


class AbandonResponse(BaseModel):
    abandoned_run_ids: List[str]


class InFlightResponse(BaseModel):
    """Run ids still awaiting a provider response."""
    run_ids: List[str]
