"""Shared test fixtures and configuration for StratSim tests."""
import copy
from typing import Any, Dict

import pytest


def build_payload(
    scenario_name: str = "Enterprise Push",
    viability: float = 72,
    downside: float = 20,
    success_rate: float = 64,
) -> Dict[str, Any]:
    """A complete, schema-conforming analysis payload."""
    return {
        "simulation_summary": {
            "scenario_name": scenario_name,
            "viability_score": viability,
            "confidence_level": 70,
            "recommended_action": "proceed_with_caution",
            "executive_summary": "Viable with disciplined execution.",
        },
        "outcome_projections": {
            "best_case": {
                "probability": 25, "roi": "180%", "timeline": "12 months",
                "description": "Rapid adoption", "key_success_factors": ["Sales hiring"],
            },
            "base_case": {
                "probability": 55, "roi": "90%", "timeline": "18 months",
                "description": "Steady growth", "assumptions": ["Stable market"],
            },
            "worst_case": {
                "probability": 20, "roi": "-15%", "timeline": "24 months",
                "description": "Slow uptake", "trigger_conditions": ["Recession"],
            },
        },
        "risk_reward_analysis": {
            "expected_value": "$3.2M",
            "risk_adjusted_return": 58,
            "sharpe_ratio_equivalent": 1.4,
            "downside_risk": downside,
            "upside_potential": 75,
            "risk_factors": [
                {"factor": "Competitive response", "probability": 60, "impact": "high",
                 "mitigation": "Lock in annual contracts"},
                {"factor": "Hiring delays", "probability": 40, "impact": "medium"},
            ],
            "opportunity_factors": [
                {"factor": "Upsell to existing base", "probability": 70, "impact": "high"},
            ],
        },
        "bottleneck_analysis": {
            "critical_bottlenecks": [
                {"bottleneck": "Security review backlog", "severity": "high", "phase": "Launch"},
                {"bottleneck": "Sales capacity", "severity": "critical"},
            ],
            "resource_constraints": [{"resource": "Solutions engineers", "gap": "3 FTE"}],
            "dependency_chain": ["SSO -> Audit logs -> Enterprise launch"],
        },
        "unintended_consequences": [
            {"consequence": "SMB churn", "likelihood": 30, "severity": "medium", "type": "negative"},
        ],
        "sensitivity_analysis": {
            "most_sensitive_variables": [
                {"variable": "Market growth", "sensitivity_score": 80,
                 "impact_direction": "positive", "threshold": "5%"},
            ],
            "scenario_variations": [{"variation": "Delayed launch", "probability_shift": "-10%"}],
        },
        "implementation_roadmap": {
            "phases": [{"phase": "Foundation", "duration": "3 months", "key_activities": ["Build SSO"]}],
            "critical_path": ["Build SSO"],
            "early_warning_indicators": ["Pipeline coverage below 3x"],
        },
        "strategic_recommendations": [
            {"recommendation": "Hire two enterprise AEs", "priority": "high"},
        ],
        "monte_carlo_summary": {
            "simulations_run": 1000,
            "success_rate": success_rate,
            "median_outcome": "$2.1M ARR uplift",
            "95th_percentile": "$4.5M ARR uplift",
            "5th_percentile": "$0.2M ARR uplift",
            "variance": 35,
        },
    }


@pytest.fixture
def payload() -> Dict[str, Any]:
    """A fresh valid analysis payload per test."""
    return copy.deepcopy(build_payload())


@pytest.fixture
def make_payload():
    """Factory for valid payloads with overridable headline numbers."""
    return build_payload
