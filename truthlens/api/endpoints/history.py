"""Analysis history API endpoints."""

import logging
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from ...domain.models.session import HistoryEntry
from ...domain.services.export_service import export_history_entry, history_filename
from ...domain.services.history_service import (
    HistoryEntryNotFoundError,
    HistoryService,
    NoCurrentAnalysisError,
    confidence_badge,
)
from ...domain.services.session_service import NotAuthenticatedError
from ...infrastructure.dependencies import get_history_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


class HistoryItemResponse(BaseModel):
    """A history entry with its display badge."""

    entry: HistoryEntry
    badge: str


def _item(entry: HistoryEntry) -> HistoryItemResponse:
    return HistoryItemResponse(entry=entry, badge=confidence_badge(entry.confidence))


def _http_error(error: Exception) -> HTTPException:
    if isinstance(error, NotAuthenticatedError):
        return HTTPException(status_code=401, detail=str(error))
    if isinstance(error, HistoryEntryNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, NoCurrentAnalysisError):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=500, detail=f"{type(error).__name__}: {error}")


@router.post("", response_model=HistoryItemResponse)
async def save_current_analysis(
    history_service: HistoryService = Depends(get_history_service),
) -> HistoryItemResponse:
    """Save the current analysis to the logged-in user's history."""
    try:
        return _item(history_service.save_current())
    except (NotAuthenticatedError, NoCurrentAnalysisError) as e:
        raise _http_error(e)


@router.get("", response_model=List[HistoryItemResponse])
async def list_history(
    search: str = "",
    kind: Literal["all", "text", "url", "video"] = "all",
    history_service: HistoryService = Depends(get_history_service),
) -> List[HistoryItemResponse]:
    """List saved analyses filtered by search term and content kind."""
    try:
        return [_item(entry) for entry in history_service.list_entries(search=search, kind=kind)]
    except NotAuthenticatedError as e:
        raise _http_error(e)


@router.get("/{entry_id}", response_model=HistoryItemResponse)
async def view_history_entry(
    entry_id: str,
    history_service: HistoryService = Depends(get_history_service),
) -> HistoryItemResponse:
    """View a saved analysis; it becomes the current analysis."""
    try:
        return _item(history_service.view_entry(entry_id))
    except (NotAuthenticatedError, HistoryEntryNotFoundError) as e:
        raise _http_error(e)


@router.get("/{entry_id}/export")
async def export_history(
    entry_id: str,
    history_service: HistoryService = Depends(get_history_service),
) -> Response:
    """Export a saved analysis as a JSON document."""
    try:
        entry = history_service.get_entry(entry_id)
    except (NotAuthenticatedError, HistoryEntryNotFoundError) as e:
        raise _http_error(e)

    logger.info(f"📤 History item exported: {entry.title}")
    return Response(
        content=export_history_entry(entry),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{history_filename(entry)}"'},
    )


@router.delete("/{entry_id}", status_code=204)
async def delete_history_entry(
    entry_id: str,
    history_service: HistoryService = Depends(get_history_service),
) -> Response:
    """Delete a saved analysis."""
    try:
        history_service.delete_entry(entry_id)
    except (NotAuthenticatedError, HistoryEntryNotFoundError) as e:
        raise _http_error(e)
    return Response(status_code=204)


@router.delete("", status_code=204)
async def clear_history(history_service: HistoryService = Depends(get_history_service)) -> Response:
    """Clear all saved analyses of the logged-in user."""
    try:
        history_service.clear()
    except NotAuthenticatedError as e:
        raise _http_error(e)
    return Response(status_code=204)
