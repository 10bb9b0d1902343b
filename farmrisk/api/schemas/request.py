"""API request models."""

from farmrisk.models.farm import AssessmentRequest

__all__ = ["AssessmentRequest"]
