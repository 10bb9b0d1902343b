"""Environmental data models."""

from typing import Literal

from pydantic import BaseModel, Field, computed_field

Provenance = Literal["live", "fallback"]


class SatelliteReading(BaseModel):
    """Vegetation and soil indices for a coordinate."""

    ndvi: float = Field(ge=0, le=1, description="Normalized difference vegetation index")
    soil_moisture: float = Field(ge=0, le=1, description="Soil moisture fraction")
    ndvi_uniformity: float | None = Field(
        default=None, ge=0, le=1, description="Spatial NDVI uniformity across the plot, when the provider reports it"
    )


class WeatherRisk(BaseModel):
    """Weather-derived risk metrics for a coordinate."""

    drought_probability: float = Field(ge=0, le=1)
    heatwave_days: int = Field(ge=0)


class EnvironmentalSnapshot(BaseModel):
    """Satellite and weather data for one assessment, tagged by source."""

    ndvi: float = Field(ge=0, le=1)
    soil_moisture: float = Field(ge=0, le=1)
    ndvi_uniformity: float | None = Field(default=None, ge=0, le=1)
    drought_probability: float = Field(ge=0, le=1)
    heatwave_days: int = Field(ge=0)
    satellite_source: Provenance
    weather_source: Provenance

    @computed_field
    @property
    def provenance(self) -> Provenance:
        if "fallback" in (self.satellite_source, self.weather_source):
            return "fallback"
        return "live"
