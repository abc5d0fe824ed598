"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Optimizer settings loaded from environment variables."""

    food_api_key: str
    food_api_base_url: str = "https://api.studio93.io/food/search"
    food_api_timeout_seconds: float = 30.0
    food_api_max_results: int = 20
    lookup_concurrency: int = 10
    lookup_batch_timeout_seconds: float | None = None
    rebalance_passes: int = 2
    rebalance_tolerance: float = 0.05
    food_lookup_debug: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
