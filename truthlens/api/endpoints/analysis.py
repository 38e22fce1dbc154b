"""Credibility analysis API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from ...domain.models.analysis import AnalysisRequest, AnalysisResult
from ...domain.models.session import AppState
from ...domain.services.credibility_service import CredibilityService
from ...domain.services.export_service import export_result, result_filename, to_json
from ...domain.services.score_interpreter import credibility_label
from ...infrastructure.dependencies import get_app_state, get_credibility_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


class AnalysisResponse(BaseModel):
    """Response model for a credibility analysis."""

    request: AnalysisRequest
    result: AnalysisResult
    label: str = Field(..., description="Display label for the score")
    notice: Optional[str] = Field(None, description="Informational notice (fallback mode)")
    is_current: bool = Field(True, description="False if a newer analysis superseded this one")


def _respond(request: AnalysisRequest, result: AnalysisResult, is_current: bool = True) -> AnalysisResponse:
    return AnalysisResponse(
        request=request,
        result=result,
        label=credibility_label(result.confidence),
        notice=result.notice,
        is_current=is_current,
    )


@router.post("", response_model=AnalysisResponse)
async def analyze_content(
    request: AnalysisRequest,
    app_state: AppState = Depends(get_app_state),
    credibility_service: CredibilityService = Depends(get_credibility_service),
) -> AnalysisResponse:
    """Assess the credibility of text, a URL or a video link.

    Args:
        request: Validated analysis request

    Returns:
        Analysis result with display label and fallback notice
    """
    logger.info(f"🧠 Starting analysis of {request.kind.value} content...")
    request_id = app_state.begin_analysis(request)
    result = await credibility_service.analyze(request, request_id=request_id)
    is_current = app_state.complete_analysis(result)
    logger.info(f"✅ Analysis completed: {result.confidence}% ({'remote' if result.used_remote_model else 'fallback'})")
    return _respond(request, result, is_current)


@router.get("/current", response_model=AnalysisResponse)
async def get_current_analysis(app_state: AppState = Depends(get_app_state)) -> AnalysisResponse:
    """Get the current analysis result."""
    if app_state.current_result is None or app_state.current_request is None:
        raise HTTPException(status_code=404, detail="No analysis results available")
    return _respond(app_state.current_request, app_state.current_result)


@router.delete("/current", status_code=204)
async def reset_analysis(app_state: AppState = Depends(get_app_state)) -> Response:
    """Reset the current analysis."""
    app_state.reset_analysis()
    logger.info("🔄 Analysis reset")
    return Response(status_code=204)


@router.get("/current/export")
async def export_current_analysis(app_state: AppState = Depends(get_app_state)) -> Response:
    """Export the current analysis as a JSON document."""
    if app_state.current_result is None or app_state.current_request is None:
        raise HTTPException(status_code=404, detail="No analysis results to export")

    document = export_result(app_state.current_request, app_state.current_result)
    logger.info("📤 Results exported")
    return Response(
        content=to_json(document),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{result_filename()}"'},
    )
