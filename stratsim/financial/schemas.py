"""Pydantic schemas for the financial projection model."""
from enum import Enum
from pydantic import BaseModel, Field

from stratsim.schemas.presentation import Insights


class RecommendationBucket(str, Enum):
    """Decision-table outcome for a funding projection."""
    FAVORABLE = "favorable"
    BALANCED = "balanced"
    CAUTIONARY = "cautionary"


class ProjectionRequest(BaseModel):
    """Inputs for a runway / funding projection."""
    current_value: float = Field(..., description="Current ARR in $M")
    target_value: float = Field(..., description="Target ARR in $M")
    burn_rate_per_month: float = Field(..., description="Monthly burn in $K")
    monthly_growth_rate_percent: float = Field(..., description="Monthly growth rate in %")


class ProjectionResponse(BaseModel):
    """Schema for projection response."""
    months_to_target: float
    months_to_target_display: int
    total_burn: float
    required_funding: float
    implied_valuation: float
    burn_multiple: float
    capital_efficiency: str
    recommendation_bucket: RecommendationBucket
    insights: Insights
