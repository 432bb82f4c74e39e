"""Configuration system for roimetrics.

Uses pydantic-settings to load configuration from environment variables
and .env files with sensible defaults for rental property analysis.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables are prefixed with ROIMETRICS_
    (e.g., ROIMETRICS_DSCR_HEALTHY_THRESHOLD).
    """

    model_config = SettingsConfigDict(
        env_prefix="ROIMETRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Financing defaults
    default_loan_term_years: int = Field(
        default=30,
        gt=0,
        description="Loan term used when a form leaves it blank",
    )

    # Underwriting thresholds
    dscr_healthy_threshold: float = Field(
        default=1.2,
        ge=0,
        description="Minimum debt service coverage ratio considered healthy",
    )
    market_ratio_baseline: float = Field(
        default=4.5,
        gt=0,
        description="Market rent-to-price percentage listings are compared against",
    )

    # Reporting
    top_n: int = Field(
        default=10,
        ge=1,
        description="Number of listings highlighted in ranking reports",
    )


# Singleton instance for easy import
config = Settings()
