"""Northwind API — Configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./northwind.db"
    DATABASE_ECHO: bool = False
    CREATE_TABLES: bool = True  # dev convenience, not a migration tool

    # Read-path policy: degrade failed reads to empty results (False) or answer 503 (True)
    STRICT_READS: bool = False

    # Frontend
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True}


@lru_cache
def get_settings() -> Settings:
    return Settings()
