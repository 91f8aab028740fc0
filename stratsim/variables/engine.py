"""
Variable Model - clamping, defaults and immutable value updates.

All functions are pure: value maps are never mutated in place, a new
mapping is returned on every update.
"""
import math
from typing import Dict, Iterable, Mapping, Optional

from stratsim.exceptions import InvalidInput, UnknownVariable
from stratsim.variables.schemas import VariableDefinition


def clamp(definition: VariableDefinition, value: float) -> float:
    """Bound a value to the definition's [min, max] range."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{definition.id}: value must be a number", field=definition.id)
    if math.isnan(value):
        raise InvalidInput(f"{definition.id}: value must not be NaN", field=definition.id)
    return float(min(max(value, definition.min), definition.max))


def defaults(definitions: Iterable[VariableDefinition]) -> Dict[str, float]:
    """Return each definition's default value keyed by id."""
    return {d.id: d.default for d in definitions}


def index_definitions(definitions: Iterable[VariableDefinition]) -> Dict[str, VariableDefinition]:
    """Key definitions by id."""
    return {d.id: d for d in definitions}


def get_definition(
    definitions: Iterable[VariableDefinition],
    variable_id: str,
) -> VariableDefinition:
    """Look up a definition, raising UnknownVariable if absent."""
    for definition in definitions:
        if definition.id == variable_id:
            return definition
    raise UnknownVariable(variable_id)


def update_value(
    values: Mapping[str, float],
    definitions: Iterable[VariableDefinition],
    variable_id: str,
    value: float,
) -> Dict[str, float]:
    """
    Return a copy of `values` with `variable_id` set to the clamped value.

    Raises:
        UnknownVariable: if no definition exists for `variable_id`
    """
    definition = get_definition(definitions, variable_id)
    updated = dict(values)
    updated[variable_id] = clamp(definition, value)
    return updated


def resolve_values(
    overrides: Optional[Mapping[str, float]],
    definitions: Iterable[VariableDefinition],
) -> Dict[str, float]:
    """
    Merge user overrides onto defaults.

    Every override must reference a known definition; each value is clamped
    into range. Definitions without an override take their default.
    """
    by_id = index_definitions(definitions)
    resolved = {variable_id: d.default for variable_id, d in by_id.items()}

    for variable_id, value in (overrides or {}).items():
        definition = by_id.get(variable_id)
        if definition is None:
            raise UnknownVariable(variable_id, details={"known": sorted(by_id)})
        resolved[variable_id] = clamp(definition, value)

    return resolved
