# app/core/config.py
from functools import lru_cache

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (HS256 signing secret for access tokens)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file; Postgres URLs work too)
      - ENVIRONMENT ("development" exposes stack traces on 500 responses)
      - PAYMENT_SUCCESS_RATE / PAYMENT_LATENCY_SECONDS (mock payment processor)
    """

    PROJECT_NAME: str = "Jewellery Shop API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"

    # Relational store
    DATABASE_URL: str = "sqlite:///./database.sqlite"
    SEED_SAMPLE_DATA: bool = True

    # Token signing / password hashing
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24
    BCRYPT_ROUNDS: int = 10

    # Mock payment gateway
    PAYMENT_SUCCESS_RATE: float = 0.95
    PAYMENT_LATENCY_SECONDS: float = 1.0

    # Receipt
    DELIVERY_DAYS: int = 7

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """
    FastAPI dependency returning the settings the running app was built with.
    """
    return request.app.state.settings
