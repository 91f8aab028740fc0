"""
Tests for the Variable Model.

Tests cover clamping, defaults, immutable updates and the catalogue.
"""

import math

import pytest
from pydantic import ValidationError

from stratsim.exceptions import InvalidInput, UnknownVariable
from stratsim.variables import (
    EXTERNAL_FACTORS,
    INTERNAL_VARIABLES,
    SIMULATION_TYPES,
    SimulationType,
    VariableCategory,
    VariableDefinition,
    clamp,
    defaults,
    get_definition,
    resolve_values,
    update_value,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def market_growth():
    return get_definition(EXTERNAL_FACTORS, "market_growth")


# =============================================================================
# Unit Tests - VariableDefinition
# =============================================================================

class TestVariableDefinition:
    """Tests for definition validation."""

    def test_rejects_inverted_range(self):
        with pytest.raises(ValidationError):
            VariableDefinition(
                id="x", label="X", category=VariableCategory.INTERNAL, range=(10, 0), default=5
            )

    def test_rejects_default_outside_range(self):
        with pytest.raises(ValidationError):
            VariableDefinition(
                id="x", label="X", category=VariableCategory.INTERNAL, range=(0, 10), default=11
            )

    def test_catalogue_defaults_within_range(self):
        for definition in EXTERNAL_FACTORS + INTERNAL_VARIABLES:
            assert definition.min <= definition.default <= definition.max

    def test_catalogue_ids_unique(self):
        ids = [d.id for d in EXTERNAL_FACTORS + INTERNAL_VARIABLES]
        assert len(ids) == len(set(ids))

    def test_every_simulation_type_listed(self):
        assert {t.id for t in SIMULATION_TYPES} == set(SimulationType)


# =============================================================================
# Unit Tests - clamp / update_value
# =============================================================================

class TestClamp:
    """Tests for clamping into range."""

    def test_value_in_range_unchanged(self, market_growth):
        assert clamp(market_growth, 12) == 12

    def test_value_above_max(self, market_growth):
        assert clamp(market_growth, 500) == market_growth.max

    def test_value_below_min(self, market_growth):
        assert clamp(market_growth, -500) == market_growth.min

    def test_idempotent(self, market_growth):
        once = clamp(market_growth, 99)
        assert clamp(market_growth, once) == once

    def test_rejects_nan(self, market_growth):
        with pytest.raises(InvalidInput):
            clamp(market_growth, math.nan)

    def test_rejects_non_number(self, market_growth):
        with pytest.raises(InvalidInput):
            clamp(market_growth, "12")


class TestUpdateValue:
    """Tests for immutable value updates."""

    def test_returns_new_mapping(self):
        values = defaults(INTERNAL_VARIABLES)
        updated = update_value(values, INTERNAL_VARIABLES, "team_size", 1000)

        assert updated["team_size"] == 200
        assert values["team_size"] == 25
        assert updated is not values

    def test_unknown_variable(self):
        with pytest.raises(UnknownVariable) as exc_info:
            update_value({}, INTERNAL_VARIABLES, "headcount", 10)
        assert exc_info.value.variable_id == "headcount"


class TestResolveValues:
    """Tests for merging overrides onto defaults."""

    def test_no_overrides_gives_defaults(self):
        assert resolve_values(None, EXTERNAL_FACTORS) == defaults(EXTERNAL_FACTORS)

    def test_overrides_are_clamped(self):
        resolved = resolve_values({"timeline_months": 1}, INTERNAL_VARIABLES)
        assert resolved["timeline_months"] == 3
        assert resolved["investment_level"] == 50

    def test_unknown_override_lists_known_ids(self):
        with pytest.raises(UnknownVariable) as exc_info:
            resolve_values({"weather": 5}, EXTERNAL_FACTORS)
        assert "market_growth" in exc_info.value.details["known"]
