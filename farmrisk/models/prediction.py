"""Risk prediction data models."""

from typing import Literal

from pydantic import BaseModel, Field

RiskCategory = Literal["low", "medium", "high"]


class PredictionRequest(BaseModel):
    """Normalized input for the risk predictor.

    Fields documented as fractions are always in [0, 1].
    """

    # Farm and operations
    state: str
    crop_type: str
    season: str
    irrigation_type: str
    land_acres: float = Field(gt=0)
    water_source_count: int = Field(ge=0)
    borewell_count: int = Field(ge=0)
    borewell_depth_ft: float = Field(ge=0)
    has_canal_access: bool
    crop_count: int = Field(ge=1)
    has_livestock: bool
    livestock_count: int = Field(ge=0)
    owns_tractor: bool
    has_storage: bool

    # Financial
    kcc_score: int = Field(ge=300, le=900)
    kcc_repayment_rate: float = Field(ge=0, le=1, description="Fraction")
    outstanding_debt_ratio: float = Field(ge=0)
    has_insurance_history: bool

    # Environmental
    rainfall_deficit_pct: float = Field(ge=0, le=1, description="Fraction")
    actual_rainfall_mm: float = Field(ge=0)
    heatwave_days: int = Field(ge=0)
    monsoon_reliability: float = Field(ge=0, le=1, description="Fraction")
    ndvi_score: float = Field(ge=0, le=1, description="Fraction")
    soil_moisture_percent: float = Field(ge=0, le=1, description="Fraction")
    soil_fertility_index: float = Field(ge=0, le=1, description="Fraction")


FRACTION_FIELDS = (
    "kcc_repayment_rate",
    "rainfall_deficit_pct",
    "monsoon_reliability",
    "ndvi_score",
    "soil_moisture_percent",
    "soil_fertility_index",
)


class RiskDriver(BaseModel):
    """A factor contributing to the predicted risk."""

    factor: str
    impact: float | None = None


class RiskPrediction(BaseModel):
    """Risk predictor output."""

    risk_score: float = Field(ge=0, le=100)
    risk_category: RiskCategory
    confidence: float = Field(ge=0, le=1)
    breakdown: dict[str, float] = Field(default_factory=dict, description="Named sub-scores")
    top_risk_drivers: list[RiskDriver] = Field(default_factory=list)


class PredictorHealth(BaseModel):
    """Liveness probe result for the risk predictor."""

    status: Literal["healthy", "unhealthy", "unreachable"]
    message: str
    latency_ms: float | None = None
