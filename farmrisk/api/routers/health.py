"""Risk predictor liveness endpoint."""

from datetime import datetime, timezone
from typing import Iterator

from fastapi import APIRouter, Depends

from farmrisk.api.schemas.response import PredictorHealthResponse
from farmrisk.config import Settings, get_settings
from farmrisk.logger import get_logger
from farmrisk.services.predictor import RiskPredictorClient

logger = get_logger(__name__)
router = APIRouter()


def get_predictor(settings: Settings = Depends(get_settings)) -> Iterator[RiskPredictorClient]:
    """Dependency to get a RiskPredictorClient instance."""
    predictor = RiskPredictorClient(settings)
    try:
        yield predictor
    finally:
        predictor.close()


@router.get("/ml-health", response_model=PredictorHealthResponse)
async def ml_health(predictor: RiskPredictorClient = Depends(get_predictor)):
    """Probe the remote risk predictor."""
    health = predictor.health()
    logger.info(f"Risk predictor health: {health.status}")
    return PredictorHealthResponse(
        ml_server=health.status,
        message=health.message,
        latency_ms=health.latency_ms,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
