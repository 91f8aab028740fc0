"""Pydantic schemas for simulation variables."""
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, Field, model_validator


class VariableCategory(str, Enum):
    """Which side of the simulation a variable describes."""
    EXTERNAL = "external"
    INTERNAL = "internal"


class SimulationType(str, Enum):
    """Fixed categories of strategic action that can be simulated."""
    STRATEGIC_INITIATIVE = "strategic_initiative"
    MARKET_ENTRY = "market_entry"
    PRODUCT_LAUNCH = "product_launch"
    MA_SCENARIO = "ma_scenario"
    COST_OPTIMIZATION = "cost_optimization"
    DIGITAL_TRANSFORMATION = "digital_transformation"
    ORGANIZATIONAL_CHANGE = "organizational_change"


class VariableDefinition(BaseModel):
    """A typed, range-bounded simulation parameter."""
    id: str = Field(..., min_length=1)
    label: str
    category: VariableCategory
    range: Tuple[float, float]
    unit: str = ""
    default: float

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_bounds(self) -> "VariableDefinition":
        low, high = self.range
        if low > high:
            raise ValueError(f"{self.id}: range minimum {low} exceeds maximum {high}")
        if not low <= self.default <= high:
            raise ValueError(f"{self.id}: default {self.default} outside [{low}, {high}]")
        return self

    @property
    def min(self) -> float:
        return self.range[0]

    @property
    def max(self) -> float:
        return self.range[1]


class SimulationTypeInfo(BaseModel):
    """Display metadata for a simulation type."""
    id: SimulationType
    label: str


class VariableCatalogResponse(BaseModel):
    """Schema for the variable catalogue endpoint."""
    simulation_types: List[SimulationTypeInfo]
    external_factors: List[VariableDefinition]
    internal_variables: List[VariableDefinition]
