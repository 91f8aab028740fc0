"""Default opportunity catalogue offered for portfolio selection."""
from typing import Dict, List

from stratsim.portfolio.schemas import Opportunity


DEFAULT_OPPORTUNITIES: List[Opportunity] = [
    Opportunity(
        id="enterprise_tier",
        name="Enterprise Tier Launch",
        description="Package SSO, audit logs and SLAs into a premium enterprise plan.",
        impact=9,
        effort=7,
        timeframe="6-9 months",
        revenue_estimate="$2-4M ARR",
        tags=frozenset({"revenue", "upmarket"}),
    ),
    Opportunity(
        id="marketplace_integrations",
        name="Marketplace Integrations",
        description="List on the major SaaS marketplaces with native integrations.",
        impact=6,
        effort=4,
        timeframe="3-4 months",
        revenue_estimate="$0.5-1M ARR",
        tags=frozenset({"distribution", "partnerships"}),
    ),
    Opportunity(
        id="ai_insights_addon",
        name="AI Insights Add-on",
        description="Paid add-on surfacing automated recommendations from customer data.",
        impact=8,
        effort=6,
        timeframe="4-6 months",
        revenue_estimate="$1-2M ARR",
        tags=frozenset({"product", "revenue"}),
    ),
    Opportunity(
        id="self_serve_onboarding",
        name="Self-Serve Onboarding Revamp",
        description="Rebuild the trial-to-paid funnel to reduce time to first value.",
        impact=7,
        effort=3,
        timeframe="2-3 months",
        revenue_estimate="$0.5-1.5M ARR",
        tags=frozenset({"growth", "conversion"}),
    ),
    Opportunity(
        id="international_expansion",
        name="International Expansion",
        description="Localize the product and open a regional sales presence.",
        impact=8,
        effort=9,
        timeframe="9-12 months",
        revenue_estimate="$3-5M ARR",
        tags=frozenset({"market_entry", "revenue"}),
    ),
    Opportunity(
        id="partner_channel",
        name="Partner Channel Program",
        description="Recruit agencies and resellers with a tiered referral program.",
        impact=5,
        effort=3,
        timeframe="3-6 months",
        revenue_estimate="$0.3-0.8M ARR",
        tags=frozenset({"distribution", "partnerships"}),
    ),
]

OPPORTUNITIES_BY_ID: Dict[str, Opportunity] = {o.id: o for o in DEFAULT_OPPORTUNITIES}
