"""Services for FarmRisk."""

from farmrisk.services.registry import FarmRegistry
from farmrisk.services.environment import EnvironmentalDataService
from farmrisk.services.request_builder import build_prediction_request
from farmrisk.services.predictor import RiskPredictorClient
from farmrisk.services.fraud_detector import FraudDetector
from farmrisk.services.premium import PremiumCalculator
from farmrisk.services.suggestions import SuggestionEngine
from farmrisk.services.fraud_cases import FraudCaseStore, FraudCaseRecorder

__all__ = [
    "FarmRegistry",
    "EnvironmentalDataService",
    "build_prediction_request",
    "RiskPredictorClient",
    "FraudDetector",
    "PremiumCalculator",
    "SuggestionEngine",
    "FraudCaseStore",
    "FraudCaseRecorder",
]
