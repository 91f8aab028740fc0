"""
Opportunity Portfolio Scorer.

Scores a selection of opportunities:
- Portfolio score = min(10, (total impact / total effort) * 1.2)
- Execution risk bucketed by how many initiatives run at once
- Resource requirement bucketed by total effort
- Sequencing by per-item ROI (impact / effort), stable on ties

Selections are immutable: adding or removing an opportunity returns a new
Portfolio, so a score can never be computed against a stale selection.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from stratsim.portfolio.schemas import Opportunity
from stratsim.schemas.presentation import Insights


# Policy constants
PORTFOLIO_SCORE_SCALING = 1.2
MAX_PORTFOLIO_SCORE = 10.0

RESOURCE_REQUIRES_HIRING = "Requires hiring"
RESOURCE_MODERATE_HIRES = "Current team + moderate hires"
RESOURCE_CURRENT_TEAM = "Achievable with current resources"


@dataclass
class ScoringConfig:
    """Policy values and thresholds for portfolio scoring."""
    score_scaling: float = PORTFOLIO_SCORE_SCALING
    max_score: float = MAX_PORTFOLIO_SCORE
    high_risk_min_count: int = 3    # strictly more than this -> High
    medium_risk_min_count: int = 2  # strictly more than this -> Medium
    hiring_min_effort: float = 20
    moderate_hires_min_effort: float = 12


@dataclass(frozen=True)
class Portfolio:
    """An immutable, duplicate-free selection of opportunities in insertion order."""
    opportunities: Tuple[Opportunity, ...] = ()

    @classmethod
    def of(cls, opportunities: Iterable[Opportunity]) -> "Portfolio":
        portfolio = cls()
        for opportunity in opportunities:
            portfolio = portfolio.add(opportunity)
        return portfolio

    def __len__(self) -> int:
        return len(self.opportunities)

    def __iter__(self):
        return iter(self.opportunities)

    def __contains__(self, opportunity_id: object) -> bool:
        return any(o.id == opportunity_id for o in self.opportunities)

    @property
    def ids(self) -> List[str]:
        return [o.id for o in self.opportunities]

    def add(self, opportunity: Opportunity) -> "Portfolio":
        if opportunity.id in self:
            return self
        return Portfolio(self.opportunities + (opportunity,))

    def remove(self, opportunity_id: str) -> "Portfolio":
        return Portfolio(tuple(o for o in self.opportunities if o.id != opportunity_id))

    def toggle(self, opportunity: Opportunity) -> "Portfolio":
        if opportunity.id in self:
            return self.remove(opportunity.id)
        return self.add(opportunity)


@dataclass
class PortfolioAssessment:
    """Result of scoring a portfolio."""
    score: float
    execution_risk: str
    resource_requirement: str
    recommendation: str
    sequenced_opportunities: List[Opportunity] = field(default_factory=list)
    total_impact: float = 0.0
    total_effort: float = 0.0
    avg_roi: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "execution_risk": self.execution_risk,
            "resource_requirement": self.resource_requirement,
            "recommendation": self.recommendation,
            "sequenced_opportunities": [o.model_dump() for o in self.sequenced_opportunities],
            "total_impact": self.total_impact,
            "total_effort": self.total_effort,
            "avg_roi": self.avg_roi,
            "insights": self.to_insights().model_dump(),
        }

    def to_insights(self) -> Insights:
        risks = []
        if self.execution_risk != "Low":
            risks.append(f"{self.execution_risk} execution risk from parallel initiatives")
        if self.resource_requirement != RESOURCE_CURRENT_TEAM:
            risks.append(self.resource_requirement)

        return Insights(
            metrics={
                "Portfolio Score": f"{self.score:.1f}/10",
                "Execution Risk": self.execution_risk,
                "Resource Requirement": self.resource_requirement,
                "Total Impact": f"{self.total_impact:g}",
                "Total Effort": f"{self.total_effort:g}",
            },
            recommendation=self.recommendation,
            risks=risks,
            opportunities=[
                f"{i}. {o.name} ({o.revenue_estimate or 'revenue TBD'})"
                for i, o in enumerate(self.sequenced_opportunities, start=1)
            ],
        )


def sequence_opportunities(opportunities: Iterable[Opportunity]) -> List[Opportunity]:
    """Order opportunities by descending ROI; ties keep their selection order."""
    return sorted(opportunities, key=lambda o: o.roi, reverse=True)


def execution_risk_label(count: int, config: Optional[ScoringConfig] = None) -> str:
    config = config or ScoringConfig()
    if count > config.high_risk_min_count:
        return "High"
    if count > config.medium_risk_min_count:
        return "Medium"
    return "Low"


def resource_requirement_label(total_effort: float, config: Optional[ScoringConfig] = None) -> str:
    config = config or ScoringConfig()
    if total_effort > config.hiring_min_effort:
        return RESOURCE_REQUIRES_HIRING
    if total_effort > config.moderate_hires_min_effort:
        return RESOURCE_MODERATE_HIRES
    return RESOURCE_CURRENT_TEAM


def recommendation_text(count: int) -> str:
    if count == 0:
        return "Select one or more opportunities to evaluate a portfolio."
    if count == 1:
        return (
            "Focus strategy: concentrate resources on a single initiative "
            "and execute it well before expanding."
        )
    if count == 2:
        return (
            "Balanced approach: run the higher-ROI initiative first so it "
            "funds and de-risks the second."
        )
    return (
        f"Prioritization warning: {count} initiatives in parallel will strain focus. "
        "Sequence by ROI and stage the later bets."
    )


def score_portfolio(
    portfolio: Portfolio,
    config: Optional[ScoringConfig] = None,
) -> PortfolioAssessment:
    """Score the current selection. Total over any selection, including empty."""
    config = config or ScoringConfig()
    selected = list(portfolio)

    total_impact = sum(o.impact for o in selected)
    total_effort = sum(o.effort for o in selected)
    avg_roi = total_impact / total_effort if total_effort > 0 else 0.0
    score = min(config.max_score, avg_roi * config.score_scaling)

    return PortfolioAssessment(
        score=round(score, 1),
        execution_risk=execution_risk_label(len(selected), config),
        resource_requirement=resource_requirement_label(total_effort, config),
        recommendation=recommendation_text(len(selected)),
        sequenced_opportunities=sequence_opportunities(selected),
        total_impact=total_impact,
        total_effort=total_effort,
        avg_roi=avg_roi,
    )
