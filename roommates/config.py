"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="ROOMMATES_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Service
    service_name: str = "roommates"
    log_level: str = "INFO"

    # Input handling
    date_format: str = "%m/%d/%Y"

    # Shared-cost estimation gates
    r_squared_threshold: float = 0.70
    mape_threshold: float = 0.20
    implausible_shared_ratio: float = 0.95  # warn (but keep) above this shared/amount_due

    # Weather
    comfort_temperature: float = 70.0  # Fahrenheit, zero point of the temperature index


settings = Settings()
