"""Orchestrate the farm risk assessment workflow for API."""

import random
import time
import uuid
from typing import Any, AsyncGenerator, Dict, Generator, Optional

from farmrisk.config import Settings
from farmrisk.errors import AssessmentError, FarmNotFoundError, PredictionFailure, RequestValidationError
from farmrisk.logger import get_logger
from farmrisk.models.assessment import AssessmentResult, PricingResult, Suggestion
from farmrisk.models.environment import EnvironmentalSnapshot
from farmrisk.models.farm import AssessmentRequest, FarmProfile, FarmRecord
from farmrisk.models.fraud import FraudAssessment
from farmrisk.models.prediction import RiskPrediction
from farmrisk.services.environment import EnvironmentalDataService
from farmrisk.services.fraud_cases import CaseStore, FraudCaseRecorder, FraudCaseStore
from farmrisk.services.fraud_detector import FraudDetector, FraudHeuristic
from farmrisk.services.predictor import RiskPredictor, RiskPredictorClient
from farmrisk.services.premium import PremiumCalculator
from farmrisk.services.registry import FarmRegistry
from farmrisk.services.request_builder import build_prediction_request
from farmrisk.services.satellite import SatelliteClient
from farmrisk.services.suggestions import SuggestionEngine
from farmrisk.services.weather import WeatherClient

logger = get_logger(__name__)

Step = tuple[str, str]


def public_error_message(error: Exception) -> str:
    """Message safe to return to callers; details stay in the log."""
    if isinstance(error, (RequestValidationError, FarmNotFoundError)):
        return str(error)
    return "Internal server error"


class AssessmentService:
    """Orchestrate registry, environment, prediction, fraud, pricing and suggestions.

    Collaborators default to the HTTP-backed implementations configured by
    ``settings``; pass any of them explicitly to substitute an in-process
    implementation.
    """

    def __init__(
        self,
        settings: Settings,
        registry: Optional[FarmRegistry] = None,
        environment: Optional[EnvironmentalDataService] = None,
        predictor: Optional[RiskPredictor] = None,
        fraud_detector: Optional[FraudHeuristic] = None,
        premium_calculator: Optional[PremiumCalculator] = None,
        suggestion_engine: Optional[SuggestionEngine] = None,
        case_store: Optional[CaseStore] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings
        self._owned_clients = []

        if registry is None:
            if settings.registry_path:
                registry = FarmRegistry.from_file(settings.registry_path)
            else:
                registry = FarmRegistry()
        self.registry = registry

        if environment is None:
            satellite = SatelliteClient(settings)
            weather = WeatherClient(settings)
            self._owned_clients.extend([satellite, weather])
            environment = EnvironmentalDataService(satellite, weather)
        self.environment = environment

        if predictor is None:
            predictor = RiskPredictorClient(settings)
            self._owned_clients.append(predictor)
        self.predictor = predictor

        self.fraud_detector = fraud_detector or FraudDetector(rng)
        self.premium_calculator = premium_calculator or PremiumCalculator(settings.base_premium_rate)
        self.suggestion_engine = suggestion_engine or SuggestionEngine()
        self.fraud_recorder = FraudCaseRecorder(case_store or FraudCaseStore(settings.fraud_db_path))
        logger.info("AssessmentService initialized")

    def assess(self, request: AssessmentRequest) -> AssessmentResult:
        """Run the full assessment pipeline (synchronous).

        Raises:
            RequestValidationError: required fields are missing
            FarmNotFoundError: the farm is not in the registry
            PredictionFailure: the risk predictor failed
        """
        steps = self._pipeline(request)
        try:
            while True:
                next(steps)
        except StopIteration as done:
            return done.value

    async def assess_stream(self, request: AssessmentRequest) -> AsyncGenerator[Dict[str, Any], None]:
        """Run the pipeline, yielding a progress event before each step.

        The final event is either ``complete`` with the full result or
        ``error``; a partial result is never emitted.
        """
        yield {"type": "started", "data": {"farm_id": request.farm_id}}

        try:
            steps = self._pipeline(request)
            while True:
                try:
                    step, message = next(steps)
                except StopIteration as done:
                    result = done.value
                    break
                yield {"type": "progress", "data": {"step": step, "message": message}}

            yield {"type": "complete", "data": result.model_dump(mode="json")}

        except AssessmentError as e:
            logger.warning(f"Streaming assessment failed: {e}")
            yield {"type": "error", "data": {"message": public_error_message(e)}}
        except Exception as e:
            logger.error(f"Error in assessment stream: {e}", exc_info=True)
            yield {"type": "error", "data": {"message": public_error_message(e)}}

    def _pipeline(self, request: AssessmentRequest) -> Generator[Step, None, AssessmentResult]:
        start_time = time.time()

        # Step 1: Validate before any external call
        missing = request.missing_fields()
        if missing:
            logger.warning(f"Rejected assessment request, missing fields: {missing}")
            raise RequestValidationError(missing)

        logger.info(f"Assessing farm {request.farm_id}: {request.crop_type} ({request.season})")

        # Step 2: Registry lookup
        yield "registry", "Looking up farm in KCC registry..."
        record = self.registry.lookup(request.farm_id)
        if record is None:
            raise FarmNotFoundError(request.farm_id)

        # Step 3: Environmental data (falls back per source)
        yield "environment", "Fetching satellite and weather data..."
        snapshot = self.environment.fetch(request.gps_latitude, request.gps_longitude)

        # Step 4: Risk prediction
        yield "prediction", "Scoring farm risk..."
        prediction_request = build_prediction_request(record, request, snapshot, self.settings)
        try:
            prediction = self.predictor.predict(prediction_request)
        except PredictionFailure as e:
            logger.error(f"Assessment aborted for farm {request.farm_id}: {e}", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"Assessment aborted for farm {request.farm_id}, predictor raised: {e}", exc_info=True)
            raise PredictionFailure(f"Risk predictor failed: {e}") from e

        # Step 5: Fraud heuristics
        yield "fraud", "Checking for data inconsistencies..."
        fraud = self.fraud_detector.evaluate(
            farmer_input={
                "land_acres": request.declared_land_acres,
                "irrigation_type": request.irrigation_type,
                "crop_type": request.crop_type,
            },
            registry_data={
                "land_acres": record.land_acres,
                "crops": record.crops,
                "village": record.village,
                "district": record.district,
            },
            environmental_data={
                "ndvi": snapshot.ndvi,
                "soil_moisture": snapshot.soil_moisture,
                "ndvi_uniformity": snapshot.ndvi_uniformity,
            },
            nearby_farms=[],
        )

        # Step 6: Pricing (needs the predicted risk score)
        yield "pricing", "Calculating premium..."
        sum_insured = request.sum_insured or self.settings.default_sum_insured
        pricing = self.premium_calculator.calculate(
            prediction.risk_score, sum_insured, self.settings.district_avg_premium
        )

        # Step 7: Suggestions
        yield "suggestions", "Generating improvement suggestions..."
        suggestions = self.suggestion_engine.generate(
            FarmProfile.from_sources(request, record), pricing.recommended_premium
        )

        # Step 8: Audit trail (best effort)
        if fraud.flags:
            self.fraud_recorder.record(request.farm_id, record, fraud)

        processing_time_ms = int((time.time() - start_time) * 1000)
        result = self._assemble(
            request, record, snapshot, prediction, fraud, pricing, suggestions, processing_time_ms
        )
        logger.info(
            f"Assessment {result.assessment_id} complete in {processing_time_ms}ms: "
            f"risk={result.final_risk_score:.1f}, fraud={result.fraud_score:.0f}"
        )
        return result

    def _assemble(
        self,
        request: AssessmentRequest,
        record: FarmRecord,
        snapshot: EnvironmentalSnapshot,
        prediction: RiskPrediction,
        fraud: FraudAssessment,
        pricing: PricingResult,
        suggestions: list[Suggestion],
        processing_time_ms: int,
    ) -> AssessmentResult:
        risk_factors = [d.factor for d in prediction.top_risk_drivers]
        risk_factors += [f.details for f in fraud.flags]

        return AssessmentResult(
            assessment_id=f"assess_{uuid.uuid4().hex}",
            farmer_id=f"farmer_{request.farm_id}",
            farmer_name=record.farmer_name,
            final_risk_score=prediction.risk_score,
            risk_category=prediction.risk_category,
            confidence_level=prediction.confidence,
            scores=prediction.breakdown,
            recommended_premium=pricing.recommended_premium,
            district_avg_premium=pricing.district_avg_premium,
            savings_amount=pricing.savings,
            savings_percent=pricing.savings_percent,
            fraud_flags=fraud.flags,
            fraud_score=fraud.fraud_score,
            fraud_recommendation=fraud.recommendation,
            requires_field_verification=fraud.recommendation == "field_verify",
            trust_score=fraud.trust_score,
            risk_factors=risk_factors,
            improvement_suggestions=suggestions,
            environmental_data=snapshot,
            data_sources=[
                "KCC Registry",
                f"Satellite Indices ({snapshot.satellite_source})",
                f"Weather Forecast ({snapshot.weather_source})",
                "Risk Prediction Engine",
            ],
            processing_time_ms=processing_time_ms,
        )

    def close(self):
        """Clean up resources."""
        for client in self._owned_clients:
            try:
                client.close()
            except Exception as e:
                logger.warning(f"Error closing {type(client).__name__}: {e}")
        logger.info("AssessmentService resources closed")
