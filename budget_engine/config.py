"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Service
    service_name: str = "budget-engine"
    log_level: str = "INFO"

    # Aggregation
    pooled_income_frequency: str = "monthly"  # only incomes with this frequency join the pool
    default_savings_goal_percentage: Decimal = Decimal("10")

    # Loan form cross-check
    payment_tolerance: Decimal = Decimal("0.01")


settings = Settings()
