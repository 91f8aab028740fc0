"""Opportunity portfolio API routes."""
from fastapi import APIRouter

from stratsim.config import settings
from stratsim.exceptions import InvalidInput
from stratsim.portfolio import schemas
from stratsim.portfolio.catalog import DEFAULT_OPPORTUNITIES, OPPORTUNITIES_BY_ID
from stratsim.portfolio.engine import Portfolio, ScoringConfig, score_portfolio

router = APIRouter()


@router.get("/opportunities", response_model=schemas.OpportunityCatalogResponse)
async def get_opportunities():
    """List the default opportunity catalogue."""
    tags = sorted({tag for o in DEFAULT_OPPORTUNITIES for tag in o.tags})
    return schemas.OpportunityCatalogResponse(opportunities=DEFAULT_OPPORTUNITIES, tags=tags)


@router.post("/score", response_model=schemas.PortfolioScoreResponse)
async def score_selection(data: schemas.PortfolioScoreRequest):
    """Score a selection of catalogue and/or custom opportunities."""
    portfolio = Portfolio()
    for opportunity_id in data.opportunity_ids:
        opportunity = OPPORTUNITIES_BY_ID.get(opportunity_id)
        if opportunity is None:
            raise InvalidInput(f"Unknown opportunity '{opportunity_id}'", field="opportunity_ids")
        portfolio = portfolio.add(opportunity)
    for opportunity in data.custom_opportunities:
        portfolio = portfolio.add(opportunity)

    assessment = score_portfolio(
        portfolio,
        ScoringConfig(score_scaling=settings.PORTFOLIO_SCORE_SCALING),
    )
    return assessment.to_dict()
