"""
Tests for the Scenario Store and Comparison Engine.
"""

import pytest

from stratsim.exceptions import InvalidInput, ScenarioNotFound
from stratsim.scenarios import ScenarioStore, compare_scenarios, resolve_path
from stratsim.scenarios.comparison import best_indices
from stratsim.simulation import validate_response


@pytest.fixture
def store():
    return ScenarioStore()


# =============================================================================
# Unit Tests - ScenarioStore
# =============================================================================

class TestScenarioStore:
    """Tests for the session scenario store."""

    def test_round_trip_preserves_result(self, store, payload):
        result = validate_response(payload)
        saved = store.save(result)

        assert saved.name == "Enterprise Push"
        assert store.get(saved.id).result.model_dump_json() == result.model_dump_json()

    def test_custom_name(self, store, payload):
        saved = store.save(validate_response(payload), name="  Plan B ")
        assert saved.name == "Plan B"

    def test_ids_are_never_reused(self, store, payload):
        result = validate_response(payload)
        first = store.save(result)
        store.delete(first.id)
        second = store.save(result)

        assert second.id != first.id
        assert len(store) == 1

    def test_list_in_save_order(self, store, make_payload):
        for name in ("A", "B", "C"):
            store.save(validate_response(make_payload(scenario_name=name)))
        assert [s.name for s in store.list()] == ["A", "B", "C"]

    def test_unknown_id(self, store):
        with pytest.raises(ScenarioNotFound):
            store.get(42)
        with pytest.raises(ScenarioNotFound):
            store.delete(42)


# =============================================================================
# Unit Tests - comparison
# =============================================================================

class TestComparison:
    """Tests for side-by-side comparison."""

    def _save(self, store, make_payload, name, **kwargs):
        return store.save(validate_response(make_payload(scenario_name=name, **kwargs)))

    def test_higher_viability_wins(self, store, make_payload):
        a = self._save(store, make_payload, "A", viability=72)
        b = self._save(store, make_payload, "B", viability=85)
        comparison = compare_scenarios([a, b])

        assert comparison.winner_ids == [b.id]
        assert comparison.winner_summary.startswith("B is the strongest option")
        viability = next(m for m in comparison.metrics if m.key == "viability_score")
        assert viability.best_indices == [1]

    def test_lower_downside_is_better(self, store, make_payload):
        a = self._save(store, make_payload, "A", downside=20)
        b = self._save(store, make_payload, "B", downside=35)
        comparison = compare_scenarios([a, b])

        downside = next(m for m in comparison.metrics if m.key == "downside_risk")
        assert downside.best_indices == [0]

    def test_ties_give_joint_winners(self, store, make_payload):
        a = self._save(store, make_payload, "A", viability=80)
        b = self._save(store, make_payload, "B", viability=80)
        comparison = compare_scenarios([a, b])

        assert comparison.winner_ids == [a.id, b.id]
        assert "Joint winners" in comparison.winner_summary

    def test_requires_two_scenarios(self, store, payload):
        only = store.save(validate_response(payload))
        with pytest.raises(InvalidInput):
            compare_scenarios([only])

    def test_digest(self, store, payload):
        a = store.save(validate_response(payload))
        b = store.save(validate_response(payload))
        digest = compare_scenarios([a, b]).digests[0]

        assert digest.bottleneck_count == 2
        assert digest.bottlenecks_by_severity == {"high": 1, "critical": 1}
        assert digest.case_probabilities["base_case"] == 55

    def test_missing_value_has_no_best(self):
        assert best_indices([72.0, None], higher_is_better=True) == []

    def test_resolve_path(self):
        doc = {"a": {"b": 3}}
        assert resolve_path(doc, "a.b") == 3
        assert resolve_path(doc, "a.c") is None
