"""Data models for FarmRisk."""

from farmrisk.models.farm import AssessmentRequest, FarmRecord, FarmProfile
from farmrisk.models.environment import SatelliteReading, WeatherRisk, EnvironmentalSnapshot
from farmrisk.models.prediction import PredictionRequest, RiskPrediction, RiskDriver, PredictorHealth
from farmrisk.models.fraud import FraudFlag, FraudAssessment, FraudCase
from farmrisk.models.assessment import PricingResult, Suggestion, AssessmentResult

__all__ = [
    "AssessmentRequest",
    "FarmRecord",
    "FarmProfile",
    "SatelliteReading",
    "WeatherRisk",
    "EnvironmentalSnapshot",
    "PredictionRequest",
    "RiskPrediction",
    "RiskDriver",
    "PredictorHealth",
    "FraudFlag",
    "FraudAssessment",
    "FraudCase",
    "PricingResult",
    "Suggestion",
    "AssessmentResult",
]
