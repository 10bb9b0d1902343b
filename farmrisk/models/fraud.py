"""Fraud detection data models."""

from typing import Literal

from pydantic import BaseModel, Field

Recommendation = Literal["approve", "field_verify", "reject"]
Severity = Literal["critical", "high", "medium"]


class FraudFlag(BaseModel):
    """A single signal that reported data disagrees with observed data."""

    type: str = Field(description="Kind of inconsistency")
    details: str = Field(description="Human-readable explanation")
    weight: int = Field(default=0, ge=0, le=100, description="Contribution to the fraud score")


class FraudAssessment(BaseModel):
    """Fraud heuristic output."""

    flags: list[FraudFlag] = Field(default_factory=list)
    fraud_score: float = Field(ge=0, le=100)
    recommendation: Recommendation

    @property
    def severity(self) -> Severity | None:
        """Severity used when recording a fraud case; None without flags."""
        if self.recommendation == "reject":
            return "critical"
        if self.recommendation == "field_verify":
            return "high"
        if self.flags:
            return "medium"
        return None

    @property
    def trust_score(self) -> float:
        """Inverse of the fraud score, not clamped at zero."""
        return 50 - self.fraud_score / 2


class FraudCase(BaseModel):
    """Audit record persisted when an assessment raises fraud flags."""

    id: str
    farm_id: str
    farmer_name: str
    phone: str = ""
    severity: Severity
    flags: list[FraudFlag]
    assessment_date: str = Field(description="ISO date (YYYY-MM-DD)")
    fraud_score: float = Field(ge=0, le=100)
    status: Literal["open", "closed"] = "open"
