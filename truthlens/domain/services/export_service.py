"""Export of analysis results to JSON documents and back."""

import time
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.analysis import AnalysisRequest, AnalysisResult, FactCheckStats, SourceStats
from ..models.session import HistoryEntry

APP_NAME = "TruthLens with Groq AI"
APP_VERSION = "0.1.0"


class ExportDocument(BaseModel):
    """Serialized analysis result with request metadata."""

    timestamp: datetime = Field(default_factory=datetime.utcnow, description="When the export was made")
    input_type: str
    input_content: str
    confidence: int = Field(..., ge=0, le=100)
    source_stats: SourceStats
    fact_check_stats: FactCheckStats
    issues: List[str]
    narrative: str
    ai_powered: bool
    stats_are_synthetic: bool = True
    source: str
    model: Optional[str] = None
    notice: Optional[str] = None
    request_id: str
    analyzed_at: datetime
    app: str = APP_NAME
    version: str = APP_VERSION


def export_result(request: AnalysisRequest, result: AnalysisResult) -> ExportDocument:
    """Build the export document of an analysis."""
    return ExportDocument(
        input_type=request.kind.value,
        input_content=request.content,
        confidence=result.confidence,
        source_stats=result.source_stats,
        fact_check_stats=result.fact_check_stats,
        issues=result.issues,
        narrative=result.narrative,
        ai_powered=result.used_remote_model,
        stats_are_synthetic=result.stats_are_synthetic,
        source=result.source,
        model=result.model,
        notice=result.notice,
        request_id=result.request_id,
        analyzed_at=result.analyzed_at,
    )


def to_json(document: ExportDocument) -> str:
    """Serialize an export document as indented JSON."""
    return document.model_dump_json(indent=2)


def parse_export(data: str) -> AnalysisResult:
    """Re-parse an exported document into an analysis result.

    Raises:
        pydantic.ValidationError: If the document is malformed
    """
    document = ExportDocument.model_validate_json(data)
    return AnalysisResult(
        confidence=document.confidence,
        narrative=document.narrative,
        source_stats=document.source_stats,
        fact_check_stats=document.fact_check_stats,
        issues=document.issues,
        used_remote_model=document.ai_powered,
        stats_are_synthetic=document.stats_are_synthetic,
        source=document.source,
        model=document.model,
        notice=document.notice,
        request_id=document.request_id,
        analyzed_at=document.analyzed_at,
    )


def export_history_entry(entry: HistoryEntry) -> str:
    """Serialize a saved history entry as indented JSON."""
    return entry.model_dump_json(indent=2)


def result_filename() -> str:
    """Suggested download name for an exported result."""
    return f"truthlens-analysis-{int(time.time() * 1000)}.json"


def history_filename(entry: HistoryEntry) -> str:
    """Suggested download name for an exported history entry."""
    return f"truthlens-{entry.kind.value}-{int(time.time() * 1000)}.json"
