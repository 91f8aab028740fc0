"""
Scenario Comparison Engine.

For two or more saved scenarios:
1. Resolve each metric by dotted path into the simulation result
2. Mark the best value per metric (higher or lower is better per metric);
   no best is declared for a metric if any scenario lacks a value
3. Aggregate risks, bottlenecks and case probabilities per scenario
4. Pick the overall winner by highest viability score; tied scenarios are
   all reported as joint winners
"""
from collections import Counter
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from stratsim.exceptions import InvalidInput
from stratsim.scenarios.schemas import (
    BottleneckDigest,
    MetricComparison,
    RiskDigest,
    SavedScenario,
    ScenarioComparison,
    ScenarioDigest,
)

TOP_ITEMS = 3
VIABILITY_PATH = "simulation_summary.viability_score"


@dataclass(frozen=True)
class ComparisonMetric:
    """A numeric metric compared across scenarios."""
    key: str
    label: str
    path: str
    higher_is_better: bool = True
    unit: str = "%"


COMPARISON_METRICS: List[ComparisonMetric] = [
    ComparisonMetric("viability_score", "Viability", VIABILITY_PATH),
    ComparisonMetric("confidence_level", "Confidence", "simulation_summary.confidence_level"),
    ComparisonMetric("success_rate", "Monte Carlo Success Rate", "monte_carlo_summary.success_rate"),
    ComparisonMetric("risk_adjusted_return", "Risk-Adjusted Return", "risk_reward_analysis.risk_adjusted_return"),
    ComparisonMetric("downside_risk", "Downside Risk", "risk_reward_analysis.downside_risk", higher_is_better=False),
    ComparisonMetric("upside_potential", "Upside Potential", "risk_reward_analysis.upside_potential"),
]


def resolve_path(data: Mapping[str, Any], path: str) -> Optional[Any]:
    """Follow a dotted path through nested mappings; None if any step is missing."""
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def _numeric(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def best_indices(values: Sequence[Optional[float]], higher_is_better: bool) -> List[int]:
    """Indices holding the best value; empty if any value is missing."""
    if not values or any(v is None for v in values):
        return []
    target = max(values) if higher_is_better else min(values)
    return [i for i, v in enumerate(values) if v == target]


def compare_metric(metric: ComparisonMetric, documents: Sequence[Mapping[str, Any]]) -> MetricComparison:
    values = [_numeric(resolve_path(doc, metric.path)) for doc in documents]
    return MetricComparison(
        key=metric.key,
        label=metric.label,
        unit=metric.unit,
        higher_is_better=metric.higher_is_better,
        values=values,
        best_indices=best_indices(values, metric.higher_is_better),
    )


def digest_scenario(scenario: SavedScenario) -> ScenarioDigest:
    """Aggregate the risk / bottleneck / projection view of one scenario."""
    result = scenario.result
    projections = result.outcome_projections
    bottlenecks = result.bottleneck_analysis.critical_bottlenecks

    return ScenarioDigest(
        scenario_id=scenario.id,
        name=scenario.name,
        recommended_action=result.simulation_summary.recommended_action,
        viability_score=result.simulation_summary.viability_score,
        success_rate=result.monte_carlo_summary.success_rate,
        case_probabilities={
            "best_case": projections.best_case.probability,
            "base_case": projections.base_case.probability,
            "worst_case": projections.worst_case.probability,
        },
        top_risks=[
            RiskDigest(factor=r.factor, probability=r.probability, impact=r.impact)
            for r in result.risk_reward_analysis.risk_factors[:TOP_ITEMS]
        ],
        bottleneck_count=len(bottlenecks),
        top_bottlenecks=[
            BottleneckDigest(bottleneck=b.bottleneck, severity=b.severity)
            for b in bottlenecks[:TOP_ITEMS]
        ],
        bottlenecks_by_severity=dict(Counter(b.severity for b in bottlenecks)),
    )


def _join_names(names: List[str]) -> str:
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " and " + names[-1]


def winner_summary(winners: List[SavedScenario]) -> str:
    """One-line summary for the overall winner(s)."""
    summary = winners[0].result.simulation_summary
    if len(winners) == 1:
        return (
            f"{winners[0].name} is the strongest option based on viability, risks and projections. "
            f"Viability: {summary.viability_score:g}% | "
            f"MC Success: {winners[0].result.monte_carlo_summary.success_rate:g}%"
        )
    return (
        f"Joint winners: {_join_names([w.name for w in winners])} share the top "
        f"viability score of {summary.viability_score:g}%."
    )


def compare_scenarios(
    scenarios: Sequence[SavedScenario],
    metrics: Sequence[ComparisonMetric] = COMPARISON_METRICS,
) -> ScenarioComparison:
    """
    Compare two or more saved scenarios.

    Raises:
        InvalidInput: fewer than two scenarios
    """
    if len(scenarios) < 2:
        raise InvalidInput("At least two scenarios are required for comparison", field="scenario_ids")

    documents = [s.result.model_dump(by_alias=True) for s in scenarios]
    rows = [compare_metric(metric, documents) for metric in metrics]

    viability = [s.result.simulation_summary.viability_score for s in scenarios]
    top = max(viability)
    winners = [s for s, v in zip(scenarios, viability) if v == top]

    return ScenarioComparison(
        scenario_ids=[s.id for s in scenarios],
        metrics=rows,
        digests=[digest_scenario(s) for s in scenarios],
        winner_ids=[w.id for w in winners],
        winner_summary=winner_summary(winners),
    )
