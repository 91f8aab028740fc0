"""Financial Projection Model - runway, funding and valuation."""

from stratsim.financial.engine import (
    FUNDING_SAFETY_BUFFER,
    VALUATION_REVENUE_MULTIPLE,
    ProjectionConfig,
    ProjectionResult,
    calculate_projection,
)
from stratsim.financial.schemas import ProjectionRequest, RecommendationBucket

__all__ = [
    "FUNDING_SAFETY_BUFFER",
    "VALUATION_REVENUE_MULTIPLE",
    "ProjectionConfig",
    "ProjectionResult",
    "ProjectionRequest",
    "RecommendationBucket",
    "calculate_projection",
]
