"""Risk predictor client for the remote ML scoring server."""

import time
from typing import Protocol

import httpx
from pydantic import ValidationError

from farmrisk.config import Settings
from farmrisk.errors import PredictionFailure
from farmrisk.logger import get_logger
from farmrisk.models.prediction import PredictionRequest, PredictorHealth, RiskPrediction

logger = get_logger(__name__)


class RiskPredictor(Protocol):
    """Anything that can turn a prediction request into a risk prediction."""

    def predict(self, request: PredictionRequest) -> RiskPrediction: ...

    def health(self) -> PredictorHealth: ...


class RiskPredictorClient:
    """Calls the ML scoring server over HTTP."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None):
        self.base_url = settings.predictor_base_url
        self.client = client or httpx.Client(
            base_url=settings.predictor_base_url,
            timeout=settings.predictor_timeout,
        )
        logger.info(f"RiskPredictorClient initialized with base URL: {self.base_url}")

    def predict(self, request: PredictionRequest) -> RiskPrediction:
        """Score a prediction request.

        Raises:
            PredictionFailure: if the server is unreachable, times out, returns
                an error status or a payload that is not a valid prediction
        """
        logger.info(f"Requesting risk prediction for {request.crop_type} ({request.land_acres} acres)")
        start = time.time()
        try:
            response = self.client.post("/predict", json=request.model_dump())
            response.raise_for_status()
            prediction = RiskPrediction.model_validate(response.json())
        except httpx.TimeoutException as e:
            raise PredictionFailure(f"Risk predictor timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise PredictionFailure(
                f"Risk predictor returned HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise PredictionFailure(f"Risk predictor unreachable: {e}") from e
        except (ValueError, ValidationError) as e:
            raise PredictionFailure(f"Risk predictor returned an invalid payload: {e}") from e

        elapsed = time.time() - start
        logger.info(
            f"Risk prediction: score={prediction.risk_score:.1f}, category={prediction.risk_category}, "
            f"confidence={prediction.confidence:.2f} ({elapsed:.2f}s)"
        )
        return prediction

    def health(self) -> PredictorHealth:
        """Probe the scoring server. Never raises."""
        start = time.time()
        try:
            response = self.client.get("/health")
            latency_ms = round((time.time() - start) * 1000, 1)
        except httpx.HTTPError as e:
            logger.warning(f"Risk predictor health check failed: {e}")
            return PredictorHealth(status="unreachable", message=f"Cannot reach {self.base_url}")

        if response.is_success:
            return PredictorHealth(status="healthy", message="Risk predictor is responding", latency_ms=latency_ms)

        logger.warning(f"Risk predictor unhealthy: HTTP {response.status_code}")
        return PredictorHealth(
            status="unhealthy",
            message=f"Risk predictor returned HTTP {response.status_code}",
            latency_ms=latency_ms,
        )

    def close(self):
        """Close the HTTP client."""
        logger.debug("Closing RiskPredictorClient")
        self.client.close()
