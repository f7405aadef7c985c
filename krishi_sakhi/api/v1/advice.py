"""API endpoints for the advisor.

Provides:
  - POST /advice — run one utterance through the orchestration layer
  - GET /advice/status — configuration state of the advisor
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from krishi_sakhi.advisor.errors import ConfigurationError
from krishi_sakhi.advisor.messages import user_message
from krishi_sakhi.advisor.service import AdvisorService, get_advisor
from krishi_sakhi.schemas.advice import AdviceRequest, AdviceResponse, AdvisorStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/advice", tags=["advice"])


@router.post("", response_model=AdviceResponse)
async def ask_advisor(
    body: AdviceRequest,
    advisor: AdvisorService = Depends(get_advisor),
):
    """Return the advisor's reply, or a safe guidance message for any failure outcome."""
    try:
        result = await advisor.advise(body.utterance)
    except ConfigurationError as e:
        logger.error("Advice requested but advisor is not configured: %s", e)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e

    return AdviceResponse(
        outcome=result.kind.value,
        ok=result.ok,
        text=result.text,
        message=user_message(result),
        language=result.language.value if result.language else None,
        model=result.model,
    )


@router.get("/status", response_model=AdvisorStatus)
async def advisor_status(advisor: AdvisorService = Depends(get_advisor)):
    return AdvisorStatus(
        configured=advisor.is_configured(),
        models=list(advisor.model_candidates),
        min_interval_ms=advisor.throttle.min_interval_ms,
    )
