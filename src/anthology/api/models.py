"""Pydantic models for API request/response."""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

from ..collection import Item
from ..ingestion import FileOutcome, IngestionResult


class ItemInfo(BaseModel):
    """An item as shown in the collection list."""

    id: str
    position: int = Field(..., description="1-based position in the collection")
    title: str
    source_name: str = Field(..., description="Original filename")
    word_count: int
    added_at: datetime
    preview: str = Field(..., description="First 100 characters of the text")

    @classmethod
    def from_item(cls, item: Item, position: int) -> "ItemInfo":
        return cls(
            id=item.id,
            position=position,
            title=item.title,
            source_name=item.source_name,
            word_count=item.word_count,
            added_at=item.added_at,
            preview=item.preview(),
        )


class SessionInfo(BaseModel):
    """Information about an anthology session."""

    session_id: str
    created_at: datetime
    last_activity: datetime
    item_count: int


class CollectionResponse(BaseModel):
    """Current state of a session's collection."""

    session_id: str
    item_count: int
    total_words: int
    items: list[ItemInfo] = Field(default_factory=list)


class FileOutcomeInfo(BaseModel):
    """Outcome of one uploaded file."""

    source_name: str
    outcome: str = Field(..., description="accepted / skipped-duplicate / error")
    item: Optional[ItemInfo] = None
    message: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: FileOutcome, position: Optional[int] = None) -> "FileOutcomeInfo":
        return cls(
            source_name=outcome.source_name,
            outcome=outcome.status.value,
            item=ItemInfo.from_item(outcome.item, position) if outcome.item and position else None,
            message=outcome.message,
            error_type=outcome.error_type,
        )


class IngestResponse(BaseModel):
    """Response model for document upload."""

    session_id: str
    accepted: int
    skipped: int
    errors: int
    summary: str
    report: list[FileOutcomeInfo] = Field(default_factory=list)
    latency_ms: int

    @classmethod
    def from_result(
        cls,
        session_id: str,
        result: IngestionResult,
        first_position: int,
        latency_ms: int,
    ) -> "IngestResponse":
        report = []
        position = first_position
        for outcome in result.report:
            if outcome.item is not None:
                report.append(FileOutcomeInfo.from_outcome(outcome, position))
                position += 1
            else:
                report.append(FileOutcomeInfo.from_outcome(outcome))
        return cls(
            session_id=session_id,
            accepted=result.accepted_count,
            skipped=result.skipped_count,
            errors=result.error_count,
            summary=result.summary(),
            report=report,
            latency_ms=latency_ms,
        )


class MoveRequest(BaseModel):
    """Request model for reordering. Indices are 0-based."""

    from_index: int
    to_index: int


class MutationResponse(BaseModel):
    """Result of a move/remove/clear request."""

    changed: bool
    message: str
    collection: CollectionResponse


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., description="Service status: healthy/unhealthy")
    version: str = Field(default="1.0.0", description="API version")
    timestamp: datetime
    components: dict = Field(default_factory=dict, description="Component health status")
