"""Uniform presentation shape shared by every result producer."""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class Insights(BaseModel):
    """
    Rendering-layer view of any result object.

    Financial projections, portfolio assessments and full simulation results
    all expose this shape so the rendering layer needs no per-producer logic.
    """
    metrics: Dict[str, str] = Field(default_factory=dict, description="Label -> display value")
    recommendation: str = Field(..., description="Headline recommendation text")
    risks: List[str] = Field(default_factory=list)
    opportunities: List[str] = Field(default_factory=list)
    details: Optional[Dict[str, Any]] = Field(None, description="Nested producer-specific payload")


def format_money_millions(value: float) -> str:
    """Format an amount expressed in $M: 2.325 -> '$2.3M', 0.15 -> '$150K'."""
    if abs(value) >= 1000:
        return f"${value / 1000:.1f}B"
    if abs(value) >= 1:
        return f"${value:.1f}M"
    return f"${value * 1000:.0f}K"
