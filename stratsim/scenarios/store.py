"""Scenario Store - session-scoped, append/delete-only list of saved scenarios."""
import itertools
import logging
from datetime import datetime, timezone
from typing import List, Optional

from stratsim.exceptions import ScenarioNotFound
from stratsim.scenarios.schemas import SavedScenario
from stratsim.simulation.schemas import SimulationInput, SimulationResult

logger = logging.getLogger(__name__)


class ScenarioStore:
    """
    Ordered in-memory collection of saved scenarios for one session.

    Ids come from a monotonic counter and are never reused, even after
    deletion. Stored scenarios are never handed out directly: every read
    returns a deep copy, so callers cannot mutate what was saved.
    """

    def __init__(self):
        self._scenarios: List[SavedScenario] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._scenarios)

    def save(
        self,
        result: SimulationResult,
        name: Optional[str] = None,
        inputs: Optional[SimulationInput] = None,
    ) -> SavedScenario:
        """Append a result; the name defaults to the analysis's scenario name."""
        if not name or not name.strip():
            name = result.simulation_summary.scenario_name.strip() or f"Scenario {len(self._scenarios) + 1}"

        scenario = SavedScenario(
            id=next(self._ids),
            name=name.strip(),
            result=result.model_copy(deep=True),
            created_at=datetime.now(timezone.utc),
            inputs=inputs.model_copy(deep=True) if inputs else None,
        )
        self._scenarios.append(scenario)
        logger.info(f"Saved scenario {scenario.id} '{scenario.name}'")
        return scenario.model_copy(deep=True)

    def get(self, scenario_id: int) -> SavedScenario:
        for scenario in self._scenarios:
            if scenario.id == scenario_id:
                return scenario.model_copy(deep=True)
        raise ScenarioNotFound(scenario_id)

    def list(self) -> List[SavedScenario]:
        return [s.model_copy(deep=True) for s in self._scenarios]

    def delete(self, scenario_id: int) -> None:
        for index, scenario in enumerate(self._scenarios):
            if scenario.id == scenario_id:
                del self._scenarios[index]
                logger.info(f"Deleted scenario {scenario_id}")
                return
        raise ScenarioNotFound(scenario_id)
