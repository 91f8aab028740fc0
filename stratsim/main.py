"""Main FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stratsim import __version__
from stratsim.config import settings
from stratsim.error_handlers import register_exception_handlers
from stratsim.financial import routes as financial_routes
from stratsim.portfolio import routes as portfolio_routes
from stratsim.scenarios import routes as scenario_routes
from stratsim.simulation import routes as simulation_routes
from stratsim.variables import routes as variable_routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title="StratSim API",
    description="Strategy simulation, financial projection and portfolio scoring",
    version=__version__,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(variable_routes.router, prefix=f"{settings.API_V1_PREFIX}/variables", tags=["Variables"])
app.include_router(financial_routes.router, prefix=f"{settings.API_V1_PREFIX}/financial", tags=["Financial"])
app.include_router(portfolio_routes.router, prefix=f"{settings.API_V1_PREFIX}/portfolio", tags=["Portfolio"])
app.include_router(simulation_routes.router, prefix=f"{settings.API_V1_PREFIX}/sessions", tags=["Simulations"])
app.include_router(scenario_routes.router, prefix=f"{settings.API_V1_PREFIX}/sessions", tags=["Scenarios"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "StratSim API",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "stratsim.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
