"""Financial projection API routes."""
from fastapi import APIRouter

from stratsim.config import settings
from stratsim.financial import schemas
from stratsim.financial.engine import ProjectionConfig, calculate_projection

router = APIRouter()


def get_projection_config() -> ProjectionConfig:
    """Build the projection policy from settings."""
    return ProjectionConfig(
        funding_safety_buffer=settings.FUNDING_SAFETY_BUFFER,
        valuation_multiple=settings.VALUATION_REVENUE_MULTIPLE,
    )


@router.post("/projection", response_model=schemas.ProjectionResponse)
async def create_projection(data: schemas.ProjectionRequest):
    """Compute time-to-target, funding requirement and recommendation."""
    result = calculate_projection(data, get_projection_config())
    return result.to_dict()
