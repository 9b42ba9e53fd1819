"""
Configuration for the Expense Tracker API.

Values come from environment variables (or a local .env file) and are
validated once at startup.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Expense Tracker API"
    version: str = "1.0.0"
    environment: Literal["development", "production", "test"] = "development"
    port: int = 3000
    log_level: str = "INFO"

    database_url: str = "sqlite:///./expenses.db"

    jwt_secret: str = Field(
        ...,
        min_length=32,
        description="Secret used to sign access tokens",
    )
    jwt_algorithm: str = "HS256"
    jwt_expiration: int = Field(
        default=86400,
        gt=0,
        description="Access token lifetime in seconds",
    )
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    upload_dir: str = "./uploads"
    cors_origins: List[str] = ["*"]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
