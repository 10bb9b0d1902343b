"""Environmental data acquisition with per-source fallback."""

from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from farmrisk.errors import UpstreamDataDegraded
from farmrisk.logger import get_logger
from farmrisk.models.environment import EnvironmentalSnapshot, SatelliteReading, WeatherRisk

logger = get_logger(__name__)

FALLBACK_SATELLITE = SatelliteReading(ndvi=0.55, soil_moisture=0.35)
FALLBACK_WEATHER = WeatherRisk(drought_probability=0.30, heatwave_days=3)


class SatelliteSource(Protocol):
    def fetch(self, lat: float, lng: float) -> SatelliteReading: ...


class WeatherSource(Protocol):
    def fetch(self, lat: float, lng: float) -> WeatherRisk: ...


class EnvironmentalDataService:
    """Combine satellite and weather data into one snapshot.

    The two sources are fetched concurrently and fall back independently:
    a satellite outage never forces synthetic weather values, and vice versa.
    """

    def __init__(self, satellite: SatelliteSource, weather: WeatherSource):
        self.satellite = satellite
        self.weather = weather
        logger.info("EnvironmentalDataService initialized")

    def fetch(self, lat: float, lng: float) -> EnvironmentalSnapshot:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="env-fetch") as pool:
            satellite_future = pool.submit(self._fetch_satellite, lat, lng)
            weather_future = pool.submit(self._fetch_weather, lat, lng)
            satellite, satellite_source = satellite_future.result()
            weather, weather_source = weather_future.result()

        snapshot = EnvironmentalSnapshot(
            ndvi=satellite.ndvi,
            soil_moisture=satellite.soil_moisture,
            ndvi_uniformity=satellite.ndvi_uniformity,
            drought_probability=weather.drought_probability,
            heatwave_days=weather.heatwave_days,
            satellite_source=satellite_source,
            weather_source=weather_source,
        )
        logger.info(
            f"Environmental snapshot for ({lat}, {lng}): provenance={snapshot.provenance} "
            f"(satellite={satellite_source}, weather={weather_source})"
        )
        return snapshot

    def _fetch_satellite(self, lat: float, lng: float) -> tuple[SatelliteReading, str]:
        try:
            return self.satellite.fetch(lat, lng), "live"
        except UpstreamDataDegraded as e:
            logger.warning(f"Using fallback satellite data: {e}")
        except Exception as e:
            logger.error(f"Unexpected satellite error, using fallback: {e}", exc_info=True)
        return FALLBACK_SATELLITE, "fallback"

    def _fetch_weather(self, lat: float, lng: float) -> tuple[WeatherRisk, str]:
        try:
            return self.weather.fetch(lat, lng), "live"
        except UpstreamDataDegraded as e:
            logger.warning(f"Using fallback weather data: {e}")
        except Exception as e:
            logger.error(f"Unexpected weather error, using fallback: {e}", exc_info=True)
        return FALLBACK_WEATHER, "fallback"
