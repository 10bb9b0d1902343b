"""Farm risk assessment endpoints."""

import json
from typing import Iterator

from fastapi import APIRouter, HTTPException, Depends
from sse_starlette.sse import EventSourceResponse

from farmrisk.api.schemas.request import AssessmentRequest
from farmrisk.api.schemas.response import AssessmentResponse
from farmrisk.api.services.assessment_service import AssessmentService
from farmrisk.config import Settings, get_settings
from farmrisk.errors import FarmNotFoundError, RequestValidationError
from farmrisk.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


def get_assessment_service(settings: Settings = Depends(get_settings)) -> Iterator[AssessmentService]:
    """Dependency to get an AssessmentService instance."""
    service = AssessmentService(settings)
    try:
        yield service
    finally:
        service.close()


def get_streaming_service(settings: Settings = Depends(get_settings)) -> AssessmentService:
    """Dependency for streaming; the event generator closes the service."""
    return AssessmentService(settings)


@router.post("", response_model=AssessmentResponse)
async def create_assessment(
    request: AssessmentRequest, service: AssessmentService = Depends(get_assessment_service)
):
    """
    Assess credit/insurance risk for a registered farm.

    - **farm_id**, **crop_type**, **season**, **gps_latitude**, **gps_longitude**: required
    - **irrigation_type**, **borewell_count**, **has_canal_access**, ...: farm operations
    - **sum_insured**: insured sum used for premium pricing
    """
    try:
        logger.info(f"Received assessment request for farm {request.farm_id}")

        result = service.assess(request)

        logger.info(f"Assessment request completed: {result.assessment_id}")
        return AssessmentResponse(data=result)

    except RequestValidationError as e:
        logger.warning(f"Validation error: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except FarmNotFoundError as e:
        logger.warning(str(e))
        raise HTTPException(status_code=404, detail="Farm ID not found")
    except Exception as e:
        logger.error(f"Error assessing farm {request.farm_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/stream")
async def create_assessment_stream(
    request: AssessmentRequest, service: AssessmentService = Depends(get_streaming_service)
):
    """
    Assess a farm with real-time progress updates via SSE.

    Returns Server-Sent Events (SSE):
    - **started**: Initial event with the farm id
    - **progress**: Emitted before each pipeline step
    - **complete**: Final event with the full assessment
    - **error**: Replaces **complete** if the assessment fails
    """
    logger.info(f"Received streaming assessment request for farm {request.farm_id}")

    async def event_generator():
        try:
            async for event in service.assess_stream(request):
                yield {"event": event["type"], "data": json.dumps(event["data"])}
        finally:
            service.close()

    return EventSourceResponse(event_generator())
