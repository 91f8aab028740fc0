"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_ENV: str = "development"
    API_V1_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Frontend
    FRONTEND_URL: str = "http://localhost:3000"

    # OpenAI (Analysis Provider)
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_MAX_TOKENS: int = 4000
    OPENAI_TIMEOUT_SECONDS: float = 90.0

    # Provider retry policy
    PROVIDER_MAX_ATTEMPTS: int = 3
    PROVIDER_INITIAL_BACKOFF_SECONDS: float = 1.0
    PROVIDER_MAX_BACKOFF_SECONDS: float = 30.0

    # Historical context sent with each simulation request
    HISTORY_LIMIT: int = 10

    # Policy constants
    FUNDING_SAFETY_BUFFER: float = 1.5
    VALUATION_REVENUE_MULTIPLE: float = 8.0
    PORTFOLIO_SCORE_SCALING: float = 1.2

    # CORS
    @property
    def ALLOWED_ORIGINS(self) -> List[str]:
        if self.APP_ENV == "development":
            return ["*"]  # Allow all origins in development
        return [self.FRONTEND_URL, "http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True
    )


settings = Settings()
