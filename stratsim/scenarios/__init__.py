"""
Scenario Store and Comparison Engine.

Saved scenarios live for one session; two or more can be compared metric
by metric with an overall winner chosen by viability score.
"""

from stratsim.scenarios.schemas import SavedScenario, ScenarioComparison
from stratsim.scenarios.store import ScenarioStore
from stratsim.scenarios.comparison import (
    COMPARISON_METRICS,
    ComparisonMetric,
    compare_scenarios,
    resolve_path,
)

__all__ = [
    "SavedScenario",
    "ScenarioComparison",
    "ScenarioStore",
    "COMPARISON_METRICS",
    "ComparisonMetric",
    "compare_scenarios",
    "resolve_path",
]
