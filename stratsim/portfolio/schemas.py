"""Pydantic schemas for the opportunity portfolio scorer."""
from pydantic import BaseModel, Field
from typing import FrozenSet, List, Optional

from stratsim.schemas.presentation import Insights


class Opportunity(BaseModel):
    """A candidate strategic initiative scored by impact and effort."""
    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    impact: float = Field(..., ge=0, le=10)
    effort: float = Field(..., ge=0, le=10)
    timeframe: str = ""
    revenue_estimate: str = ""
    tags: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = {"frozen": True}

    @property
    def roi(self) -> float:
        """Impact per unit of effort; zero-effort items with impact rank first."""
        if self.effort == 0:
            return float("inf") if self.impact > 0 else 0.0
        return self.impact / self.effort


class PortfolioScoreRequest(BaseModel):
    """Request to score a selection of opportunities."""
    opportunity_ids: List[str] = Field(default_factory=list, description="Catalogue opportunity ids")
    custom_opportunities: List[Opportunity] = Field(default_factory=list)


class PortfolioScoreResponse(BaseModel):
    """Schema for portfolio assessment response."""
    score: float
    execution_risk: str
    resource_requirement: str
    recommendation: str
    sequenced_opportunities: List[Opportunity]
    total_impact: float
    total_effort: float
    avg_roi: float
    insights: Insights


class OpportunityCatalogResponse(BaseModel):
    """Schema for the opportunity catalogue."""
    opportunities: List[Opportunity]
    tags: Optional[List[str]] = None
