"""Health check endpoints."""

from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...domain.services.credibility_service import CredibilityService
from ...domain.services.export_service import APP_VERSION
from ...infrastructure.dependencies import get_credibility_service

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    ai_providers: Dict[str, bool]
    fallback_mode: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(
    credibility_service: CredibilityService = Depends(get_credibility_service),
) -> HealthResponse:
    """Check service health and whether the hosted model is reachable.

    Returns:
        Health status of the AI provider
    """
    ai_status = {}
    if credibility_service.ai is not None:
        ai_status[credibility_service.ai.provider_name] = credibility_service.ai.is_available

    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        ai_providers=ai_status,
        fallback_mode=not credibility_service.remote_available,
    )
