"""Opportunity Portfolio Scorer - impact/effort scoring and sequencing."""

from stratsim.portfolio.schemas import Opportunity
from stratsim.portfolio.catalog import DEFAULT_OPPORTUNITIES, OPPORTUNITIES_BY_ID
from stratsim.portfolio.engine import (
    PORTFOLIO_SCORE_SCALING,
    Portfolio,
    PortfolioAssessment,
    ScoringConfig,
    score_portfolio,
    sequence_opportunities,
)

__all__ = [
    "Opportunity",
    "DEFAULT_OPPORTUNITIES",
    "OPPORTUNITIES_BY_ID",
    "PORTFOLIO_SCORE_SCALING",
    "Portfolio",
    "PortfolioAssessment",
    "ScoringConfig",
    "score_portfolio",
    "sequence_opportunities",
]
