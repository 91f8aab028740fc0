"""Pydantic schemas for saved scenarios and scenario comparison."""
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from stratsim.simulation.schemas import SimulationInput, SimulationResult


# ============================================================================
# SAVED SCENARIO SCHEMAS
# ============================================================================

class SavedScenario(BaseModel):
    """A named, timestamped simulation result kept for comparison."""
    id: int
    name: str
    result: SimulationResult
    created_at: datetime
    inputs: Optional[SimulationInput] = None

    model_config = {"frozen": True}


class SaveScenarioRequest(BaseModel):
    """Schema for saving the current simulation result."""
    name: Optional[str] = Field(None, max_length=255)


class ScenarioListItem(BaseModel):
    """Compact listing entry for a saved scenario."""
    id: int
    name: str
    created_at: datetime
    viability_score: float
    recommended_action: str


# ============================================================================
# COMPARISON SCHEMAS
# ============================================================================

class ComparisonRequest(BaseModel):
    """Schema for requesting a comparison; defaults to all saved scenarios."""
    scenario_ids: Optional[List[int]] = None


class MetricComparison(BaseModel):
    """One row of the metrics table."""
    key: str
    label: str
    unit: str
    higher_is_better: bool
    values: List[Optional[float]]
    best_indices: List[int] = Field(default_factory=list, description="Empty when any value is missing")


class RiskDigest(BaseModel):
    factor: str
    probability: float
    impact: str


class BottleneckDigest(BaseModel):
    bottleneck: str
    severity: str


class ScenarioDigest(BaseModel):
    """Per-scenario risk / bottleneck / projection aggregation."""
    scenario_id: int
    name: str
    recommended_action: str
    viability_score: float
    success_rate: float
    case_probabilities: Dict[str, float]
    top_risks: List[RiskDigest]
    bottleneck_count: int
    top_bottlenecks: List[BottleneckDigest]
    bottlenecks_by_severity: Dict[str, int]


class ScenarioComparison(BaseModel):
    """Side-by-side comparison of two or more saved scenarios."""
    scenario_ids: List[int]
    metrics: List[MetricComparison]
    digests: List[ScenarioDigest]
    winner_ids: List[int]
    winner_summary: str
