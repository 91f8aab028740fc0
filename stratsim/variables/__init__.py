"""
Variable Model - typed, range-bounded simulation parameters.

External factors describe the environment (market growth, competition),
internal variables describe the organisation's own levers (investment,
timeline, team size).
"""

from stratsim.variables.schemas import (
    SimulationType,
    VariableCategory,
    VariableDefinition,
)
from stratsim.variables.catalog import (
    EXTERNAL_FACTORS,
    INTERNAL_VARIABLES,
    SIMULATION_TYPES,
    SIMULATION_TYPE_LABELS,
)
from stratsim.variables.engine import (
    clamp,
    defaults,
    get_definition,
    resolve_values,
    update_value,
)

__all__ = [
    "SimulationType",
    "VariableCategory",
    "VariableDefinition",
    "EXTERNAL_FACTORS",
    "INTERNAL_VARIABLES",
    "SIMULATION_TYPES",
    "SIMULATION_TYPE_LABELS",
    "clamp",
    "defaults",
    "get_definition",
    "resolve_values",
    "update_value",
]
