"""
Application settings for the agent ingestion service.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Hosted relational store (empty = persistence unavailable)
    DATABASE_URL: str = ""
    DATABASE_SERVICE_ROLE: str = ""
    CREATE_TABLES: bool = True

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Sales summary
    SUMMARY_DEFAULT_DAYS: int = 30
    # Known approximation: vouchers beyond this cap are left out of the totals.
    SUMMARY_ROW_LIMIT: int = 5000

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
