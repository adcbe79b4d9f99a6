"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="CASHFLOW_", extra="ignore"
    )

    # Service
    service_name: str = "household-cashflow"
    log_level: str = "INFO"

    # Projection windows
    projection_weeks: int = 8
    upcoming_payment_days: int = 14


settings = Settings()
