"""Built-in variable and simulation-type catalogue."""
from typing import Dict, List

from stratsim.variables.schemas import (
    SimulationType,
    SimulationTypeInfo,
    VariableCategory,
    VariableDefinition,
)


SIMULATION_TYPE_LABELS: Dict[SimulationType, str] = {
    SimulationType.STRATEGIC_INITIATIVE: "Strategic Initiative",
    SimulationType.MARKET_ENTRY: "Market Entry",
    SimulationType.PRODUCT_LAUNCH: "Product Launch",
    SimulationType.MA_SCENARIO: "M&A Scenario",
    SimulationType.COST_OPTIMIZATION: "Cost Optimization",
    SimulationType.DIGITAL_TRANSFORMATION: "Digital Transformation",
    SimulationType.ORGANIZATIONAL_CHANGE: "Organizational Change",
}

SIMULATION_TYPES: List[SimulationTypeInfo] = [
    SimulationTypeInfo(id=sim_type, label=label)
    for sim_type, label in SIMULATION_TYPE_LABELS.items()
]


def _external(id: str, label: str, low: float, high: float, default: float, unit: str = "") -> VariableDefinition:
    return VariableDefinition(
        id=id, label=label, category=VariableCategory.EXTERNAL,
        range=(low, high), unit=unit, default=default,
    )


def _internal(id: str, label: str, low: float, high: float, default: float, unit: str = "") -> VariableDefinition:
    return VariableDefinition(
        id=id, label=label, category=VariableCategory.INTERNAL,
        range=(low, high), unit=unit, default=default,
    )


EXTERNAL_FACTORS: List[VariableDefinition] = [
    _external("market_growth", "Market Growth", -20, 40, 5, unit="%"),
    _external("competition_intensity", "Competition Intensity", 0, 100, 50),
    _external("regulatory_risk", "Regulatory Risk", 0, 100, 30),
    _external("economic_conditions", "Economic Conditions", -50, 50, 0),
    _external("technology_disruption", "Technology Disruption", 0, 100, 40),
    _external("talent_availability", "Talent Availability", 0, 100, 60),
]

INTERNAL_VARIABLES: List[VariableDefinition] = [
    _internal("investment_level", "Investment Level", 0, 100, 50, unit="M"),
    _internal("timeline_months", "Timeline", 3, 36, 12, unit="months"),
    _internal("team_size", "Team Size", 5, 200, 25, unit="people"),
    _internal("risk_tolerance", "Risk Tolerance", 0, 100, 50),
    _internal("execution_speed", "Execution Speed", 0, 100, 70),
    _internal("resource_allocation", "Resource Allocation", 0, 100, 80, unit="%"),
]
