"""Weather forecast client using the Open-Meteo API."""

import httpx
import numpy as np

from farmrisk.config import Settings
from farmrisk.errors import UpstreamDataDegraded
from farmrisk.logger import get_logger
from farmrisk.models.environment import WeatherRisk

logger = get_logger(__name__)


class WeatherClient:
    """Derives drought and heatwave risk from a daily forecast."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None):
        self.forecast_days = settings.weather_forecast_days
        self.heatwave_threshold_c = settings.heatwave_threshold_c
        self.expected_rainfall_mm = settings.expected_rainfall_mm
        self.client = client or httpx.Client(
            base_url=settings.weather_api_base_url,
            timeout=settings.weather_timeout,
        )
        logger.info(f"WeatherClient initialized with base URL: {settings.weather_api_base_url}")

    def fetch(self, lat: float, lng: float) -> WeatherRisk:
        """Fetch the forecast for a coordinate and reduce it to risk metrics.

        Raises:
            UpstreamDataDegraded: on timeout, HTTP error or malformed payload
        """
        logger.debug(f"Fetching weather forecast for ({lat}, {lng})")
        try:
            response = self.client.get(
                "/v1/forecast",
                params={
                    "latitude": lat,
                    "longitude": lng,
                    "daily": "temperature_2m_max,precipitation_sum",
                    "forecast_days": self.forecast_days,
                    "timezone": "auto",
                },
            )
            response.raise_for_status()
            daily = response.json()["daily"]
            risk = self._derive_risk(daily["temperature_2m_max"], daily["precipitation_sum"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise UpstreamDataDegraded(f"Weather fetch failed for ({lat}, {lng}): {e}") from e

        logger.info(
            f"Weather risk: drought_probability={risk.drought_probability:.2f}, "
            f"heatwave_days={risk.heatwave_days}"
        )
        return risk

    def _derive_risk(self, max_temps: list, precipitation: list) -> WeatherRisk:
        """Reduce daily series to drought probability and heatwave day count."""
        # Open-Meteo returns null for days it cannot forecast
        temps = np.array([t for t in max_temps if t is not None], dtype=float)
        rain = np.array([p for p in precipitation if p is not None], dtype=float)
        if temps.size == 0 or rain.size == 0:
            raise ValueError("forecast contains no usable daily values")

        heatwave_days = int(np.count_nonzero(temps >= self.heatwave_threshold_c))

        # Scale expected rainfall to the days actually forecast
        expected = self.expected_rainfall_mm * rain.size / self.forecast_days
        drought_probability = float(np.clip(1 - rain.sum() / expected, 0.0, 1.0))

        return WeatherRisk(
            drought_probability=round(drought_probability, 3),
            heatwave_days=heatwave_days,
        )

    def close(self):
        """Close the HTTP client."""
        logger.debug("Closing WeatherClient")
        self.client.close()
