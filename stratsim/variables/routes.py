"""Variable catalogue API routes."""
from fastapi import APIRouter

from stratsim.variables import schemas
from stratsim.variables.catalog import EXTERNAL_FACTORS, INTERNAL_VARIABLES, SIMULATION_TYPES

router = APIRouter()


@router.get("", response_model=schemas.VariableCatalogResponse)
async def get_variable_catalog():
    """List simulation types and the tunable external/internal variables."""
    return schemas.VariableCatalogResponse(
        simulation_types=SIMULATION_TYPES,
        external_factors=EXTERNAL_FACTORS,
        internal_variables=INTERNAL_VARIABLES,
    )
