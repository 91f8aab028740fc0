"""
Financial Projection Model - closed-form runway and funding calculator.

Given current ARR, target ARR, monthly burn and a monthly growth rate, computes:
1. Months to target: ln(target / current) / ln(1 + growth / 100)
2. Total burn over that period and the funding required with a safety buffer
3. Implied valuation at target, burn multiple and a capital-efficiency label
4. A recommendation selected from a (months, funding) decision table

Units: ARR and funding in $M, burn in $K per month.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from stratsim.exceptions import InvalidInput
from stratsim.financial.schemas import ProjectionRequest, RecommendationBucket
from stratsim.schemas.presentation import Insights, format_money_millions

logger = logging.getLogger(__name__)


# Policy constants
FUNDING_SAFETY_BUFFER = 1.5
VALUATION_REVENUE_MULTIPLE = 8.0

RECOMMENDATIONS: Dict[RecommendationBucket, str] = {
    RecommendationBucket.FAVORABLE: (
        "Favorable trajectory: the target is reachable quickly on a modest raise. "
        "Prioritize execution speed and raise from a position of strength."
    ),
    RecommendationBucket.BALANCED: (
        "Balanced outlook: the target is achievable with disciplined capital deployment. "
        "Raise in milestone-based tranches and track growth monthly."
    ),
    RecommendationBucket.CAUTIONARY: (
        "Cautionary: the path to target is long or capital-intensive. "
        "Revisit growth assumptions, reduce burn, or stage the raise against milestones."
    ),
}


@dataclass
class ProjectionConfig:
    """Policy values and thresholds for the projection model."""
    funding_safety_buffer: float = FUNDING_SAFETY_BUFFER
    valuation_multiple: float = VALUATION_REVENUE_MULTIPLE

    # Decision table
    favorable_max_months: float = 18
    favorable_max_funding: float = 15
    cautionary_min_months: float = 24
    cautionary_min_funding: float = 20

    # Capital efficiency buckets on required funding ($M)
    excellent_max_funding: float = 10
    good_max_funding: float = 20

    # Risk / opportunity triggers
    high_burn_multiple: float = 2.0
    efficient_burn_multiple: float = 1.0
    aggressive_growth_percent: float = 15.0


@dataclass
class ProjectionResult:
    """Result of a funding projection."""
    months_to_target: float
    total_burn: float  # $K
    required_funding: float  # $M
    implied_valuation: float  # $M
    burn_multiple: float
    capital_efficiency: str
    recommendation_bucket: RecommendationBucket
    recommendation: str
    risks: List[str] = field(default_factory=list)
    opportunities: List[str] = field(default_factory=list)

    @property
    def months_to_target_display(self) -> int:
        return int(round(self.months_to_target))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "months_to_target": self.months_to_target,
            "months_to_target_display": self.months_to_target_display,
            "total_burn": self.total_burn,
            "required_funding": self.required_funding,
            "implied_valuation": self.implied_valuation,
            "burn_multiple": self.burn_multiple,
            "capital_efficiency": self.capital_efficiency,
            "recommendation_bucket": self.recommendation_bucket.value,
            "insights": self.to_insights().model_dump(),
        }

    def to_insights(self) -> Insights:
        return Insights(
            metrics={
                "Time to Target": f"{self.months_to_target_display} months",
                "Required Funding": format_money_millions(self.required_funding),
                "Implied Valuation": format_money_millions(self.implied_valuation),
                "Burn Multiple": f"{self.burn_multiple:.2f}x",
                "Capital Efficiency": self.capital_efficiency,
            },
            recommendation=self.recommendation,
            risks=list(self.risks),
            opportunities=list(self.opportunities),
        )


def _validate(data: ProjectionRequest) -> None:
    for name in ("current_value", "target_value", "burn_rate_per_month", "monthly_growth_rate_percent"):
        value = getattr(data, name)
        if not math.isfinite(value) or value <= 0:
            raise InvalidInput(f"{name} must be a positive number", field=name)

    if data.current_value == data.target_value:
        raise InvalidInput(
            "target_value must differ from current_value",
            field="target_value",
        )
    if data.current_value > data.target_value:
        raise InvalidInput(
            "target_value must be greater than current_value",
            field="target_value",
        )


def calculate_months_to_target(current_value: float, target_value: float, growth_rate_percent: float) -> float:
    """Months of compounding growth needed to move current -> target."""
    rate = math.log1p(growth_rate_percent / 100)
    if rate == 0 or not math.isfinite(rate):
        raise InvalidInput(
            "monthly_growth_rate_percent is too small to reach the target",
            field="monthly_growth_rate_percent",
        )
    return math.log(target_value / current_value) / rate


def capital_efficiency_label(required_funding: float, config: Optional[ProjectionConfig] = None) -> str:
    """Bucket required funding ($M) into Excellent / Good / Moderate."""
    config = config or ProjectionConfig()
    if required_funding < config.excellent_max_funding:
        return "Excellent"
    if required_funding < config.good_max_funding:
        return "Good"
    return "Moderate"


def select_recommendation(
    months_to_target: float,
    required_funding: float,
    config: Optional[ProjectionConfig] = None,
) -> RecommendationBucket:
    """Decision table over (months to target, required funding)."""
    config = config or ProjectionConfig()
    if months_to_target < config.favorable_max_months and required_funding < config.favorable_max_funding:
        return RecommendationBucket.FAVORABLE
    if months_to_target > config.cautionary_min_months or required_funding > config.cautionary_min_funding:
        return RecommendationBucket.CAUTIONARY
    return RecommendationBucket.BALANCED


def _collect_risks(
    data: ProjectionRequest,
    months: float,
    required_funding: float,
    burn_multiple: float,
    config: ProjectionConfig,
) -> List[str]:
    risks = []
    if burn_multiple > config.high_burn_multiple:
        risks.append(f"High burn multiple ({burn_multiple:.1f}x): spend is outpacing revenue")
    if months > config.cautionary_min_months:
        risks.append(f"Extended timeline to target ({round(months)} months) raises execution risk")
    if data.monthly_growth_rate_percent > config.aggressive_growth_percent:
        risks.append(
            f"Sustaining {data.monthly_growth_rate_percent:g}% monthly growth is an aggressive assumption"
        )
    if required_funding > config.cautionary_min_funding:
        risks.append(f"A {format_money_millions(required_funding)} raise may be hard to close in current markets")

    # Sensitivity of the timeline to a two-point drop in growth
    slower_growth = data.monthly_growth_rate_percent - 2
    if slower_growth > 0:
        slower_months = calculate_months_to_target(data.current_value, data.target_value, slower_growth)
        if math.isfinite(slower_months):
            risks.append(
                f"Growth slipping to {slower_growth:g}% monthly extends the timeline to {round(slower_months)} months"
            )
    return risks


def _collect_opportunities(
    months: float,
    implied_valuation: float,
    burn_multiple: float,
    config: ProjectionConfig,
) -> List[str]:
    opportunities = []
    if months < config.favorable_max_months:
        opportunities.append(f"Target reached in {round(months)} months, inside a typical fundraising cycle")
    if burn_multiple < config.efficient_burn_multiple:
        opportunities.append(f"Efficient burn ({burn_multiple:.2f}x) supports a strong fundraising narrative")
    opportunities.append(
        f"Implied valuation of {format_money_millions(implied_valuation)} at target "
        f"({config.valuation_multiple:g}x revenue)"
    )
    return opportunities


def calculate_projection(
    data: ProjectionRequest,
    config: Optional[ProjectionConfig] = None,
) -> ProjectionResult:
    """
    Run the runway / funding projection.

    Raises:
        InvalidInput: non-positive values, or current_value >= target_value
    """
    config = config or ProjectionConfig()
    _validate(data)

    months = calculate_months_to_target(
        data.current_value, data.target_value, data.monthly_growth_rate_percent
    )
    total_burn = data.burn_rate_per_month * months
    required_funding = total_burn / 1000 * config.funding_safety_buffer
    implied_valuation = data.target_value * config.valuation_multiple
    burn_multiple = data.burn_rate_per_month / (data.current_value * 1000 / 12)

    derived = {
        "months_to_target": months,
        "required_funding": required_funding,
        "implied_valuation": implied_valuation,
        "burn_multiple": burn_multiple,
    }
    for name, value in derived.items():
        if not math.isfinite(value):
            raise InvalidInput(f"{name} is out of range for these inputs", field=name)

    bucket = select_recommendation(months, required_funding, config)

    logger.debug(
        f"Projection: {months:.2f} months, funding {required_funding:.2f}M, bucket {bucket.value}"
    )

    return ProjectionResult(
        months_to_target=months,
        total_burn=total_burn,
        required_funding=required_funding,
        implied_valuation=implied_valuation,
        burn_multiple=burn_multiple,
        capital_efficiency=capital_efficiency_label(required_funding, config),
        recommendation_bucket=bucket,
        recommendation=RECOMMENDATIONS[bucket],
        risks=_collect_risks(data, months, required_funding, burn_multiple, config),
        opportunities=_collect_opportunities(months, implied_valuation, burn_multiple, config),
    )
