"""Pricing, suggestion and assessment result data models."""

from typing import Literal

from pydantic import BaseModel, Field

from farmrisk.models.environment import EnvironmentalSnapshot
from farmrisk.models.fraud import FraudFlag, Recommendation
from farmrisk.models.prediction import RiskCategory


class PricingResult(BaseModel):
    """Premium derived from the predicted risk."""

    recommended_premium: float = Field(ge=0)
    district_avg_premium: float = Field(ge=0)
    savings: float = Field(description="District average minus recommended premium")
    savings_percent: float


class Suggestion(BaseModel):
    """A costed farm-improvement action."""

    action: str
    description: str
    impact: Literal["low", "medium", "high"]
    score_increase: int = Field(ge=0, description="Risk-score points gained")
    premium_savings: int = Field(ge=0)
    estimated_cost: float = Field(ge=0)
    govt_subsidy_available: bool
    subsidy_percent: int = Field(ge=0, le=100)
    priority_rank: int = Field(ge=1, description="Lower is more important")


class AssessmentResult(BaseModel):
    """Complete assessment for one farm."""

    assessment_id: str
    farmer_id: str
    farmer_name: str

    final_risk_score: float = Field(ge=0, le=100)
    risk_category: RiskCategory
    confidence_level: float = Field(ge=0, le=1)
    scores: dict[str, float]

    recommended_premium: float
    district_avg_premium: float
    savings_amount: float
    savings_percent: float

    fraud_flags: list[FraudFlag]
    fraud_score: float
    fraud_recommendation: Recommendation
    requires_field_verification: bool
    trust_score: float

    risk_factors: list[str]
    improvement_suggestions: list[Suggestion]
    environmental_data: EnvironmentalSnapshot
    data_sources: list[str]
    processing_time_ms: int = Field(ge=0)
