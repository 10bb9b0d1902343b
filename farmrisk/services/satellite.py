"""Satellite vegetation and soil index client."""

import httpx
from pydantic import ValidationError

from farmrisk.config import Settings
from farmrisk.errors import UpstreamDataDegraded
from farmrisk.logger import get_logger
from farmrisk.models.environment import SatelliteReading

logger = get_logger(__name__)


class SatelliteClient:
    """Fetches NDVI and soil moisture from the satellite indices provider."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None):
        headers = {}
        if settings.satellite_api_key:
            headers["Authorization"] = f"Bearer {settings.satellite_api_key}"
        self.client = client or httpx.Client(
            base_url=settings.satellite_api_base_url,
            headers=headers,
            timeout=settings.satellite_timeout,
        )
        logger.info(f"SatelliteClient initialized with base URL: {settings.satellite_api_base_url}")

    def fetch(self, lat: float, lng: float) -> SatelliteReading:
        """Fetch indices for a coordinate with a single provider call.

        Raises:
            UpstreamDataDegraded: on timeout, HTTP error or malformed payload
        """
        logger.debug(f"Fetching satellite indices for ({lat}, {lng})")
        try:
            response = self.client.get("/v1/indices", params={"lat": lat, "lon": lng})
            response.raise_for_status()
            data = response.json()

            soil_moisture = float(data["soil_moisture"])
            # Some providers report volumetric moisture as a percentage
            if soil_moisture > 1:
                soil_moisture = soil_moisture / 100

            uniformity = data.get("ndvi_uniformity")
            reading = SatelliteReading(
                ndvi=float(data["ndvi"]),
                soil_moisture=soil_moisture,
                ndvi_uniformity=float(uniformity) if uniformity is not None else None,
            )
        except (httpx.HTTPError, ValueError, KeyError, TypeError, ValidationError) as e:
            raise UpstreamDataDegraded(f"Satellite fetch failed for ({lat}, {lng}): {e}") from e

        logger.info(f"Satellite indices: ndvi={reading.ndvi:.2f}, soil_moisture={reading.soil_moisture:.2f}")
        return reading

    def close(self):
        """Close the HTTP client."""
        logger.debug("Closing SatelliteClient")
        self.client.close()
