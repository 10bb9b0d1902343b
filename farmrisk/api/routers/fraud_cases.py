"""Fraud case audit endpoints."""

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Depends

from farmrisk.api.schemas.response import FraudCaseListResponse
from farmrisk.config import Settings, get_settings
from farmrisk.logger import get_logger
from farmrisk.models.fraud import FraudCase
from farmrisk.services.fraud_cases import FraudCaseStore

logger = get_logger(__name__)
router = APIRouter()


def get_case_store(settings: Settings = Depends(get_settings)) -> FraudCaseStore:
    """Dependency to get FraudCaseStore instance."""
    return FraudCaseStore(settings.fraud_db_path)


@router.get("", response_model=FraudCaseListResponse)
async def list_fraud_cases(
    limit: int = 100,
    severity: Optional[Literal["critical", "high", "medium"]] = None,
    store: FraudCaseStore = Depends(get_case_store),
):
    """
    List recorded fraud cases, most recent first.

    - **limit**: Maximum number of cases (default: 100)
    - **severity**: Only cases of this severity
    """
    try:
        cases = store.list_cases(limit=limit, severity=severity)
        return FraudCaseListResponse(cases=cases, total_count=len(cases))
    except Exception as e:
        logger.error(f"Error listing fraud cases: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list fraud cases")


@router.get("/{case_id}", response_model=FraudCase)
async def get_fraud_case(case_id: str, store: FraudCaseStore = Depends(get_case_store)):
    """Get a single fraud case."""
    try:
        case = store.get(case_id)
        if not case:
            raise HTTPException(status_code=404, detail="Fraud case not found")
        return case

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting fraud case {case_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to get fraud case")
