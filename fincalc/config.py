"""
Engine configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Balances at or below this amount are treated as paid off
    balance_epsilon: float = 0.01

    # Avalanche payoff safety bound
    payoff_max_months: int = 600

    # Longest per-period TVM ledger the finance calculator will build
    tvm_schedule_max_periods: int = 12000

    # Newton-Raphson
    newton_max_iterations: int = 100
    newton_tolerance: float = 1e-6
    newton_initial_guess: float = 0.10
    rate_floor: float = 0.0
    rate_ceiling: float = 2.0

    # Federal bracket table used when none is requested explicitly
    tax_year: int = 2025

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        env_prefix = "FINCALC_"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
