"""Environment configuration."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Upstream providers
    satellite_api_base_url: str = "http://localhost:8100"
    satellite_api_key: Optional[str] = None
    weather_api_base_url: str = "https://api.open-meteo.com"
    predictor_base_url: str = "http://localhost:8000"

    satellite_timeout: float = 8.0
    weather_timeout: float = 8.0
    predictor_timeout: float = 15.0

    # Weather risk derivation
    weather_forecast_days: int = 16
    heatwave_threshold_c: float = 40.0
    expected_rainfall_mm: float = 100.0  # over the forecast horizon

    # Pricing
    district_avg_premium: float = 5000.0
    default_sum_insured: float = 200000.0
    base_premium_rate: float = 0.025

    # Prediction request defaults
    land_value_per_acre: float = 50000.0
    default_state: str = "Maharashtra"
    soil_fertility_index: float = 0.7

    # Storage
    registry_path: Optional[Path] = None  # JSON file of KCC records
    fraud_db_path: Path = Path("fraud_cases.db")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
