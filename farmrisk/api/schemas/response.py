"""API response models."""

from typing import List

from pydantic import BaseModel, Field

from farmrisk.models.assessment import AssessmentResult
from farmrisk.models.fraud import FraudCase


class AssessmentResponse(BaseModel):
    """Response model for a completed assessment."""

    success: bool = Field(default=True)
    data: AssessmentResult = Field(..., description="Full assessment result")


class PredictorHealthResponse(BaseModel):
    """Response model for the risk predictor liveness probe."""

    ml_server: str = Field(..., description="healthy, unhealthy or unreachable")
    message: str
    latency_ms: float | None = None
    timestamp: str = Field(..., description="ISO timestamp of the probe")


class FraudCaseListResponse(BaseModel):
    """Response model for fraud case listing."""

    cases: List[FraudCase]
    total_count: int


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(default="1.0.0", description="API version")
