"""FastAPI application exposing an anthology session to a browser UI."""

import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..export import BuilderConfig, CombinedDocumentBuilder, EXPORT_FORMATS
from ..ingestion import DocumentConverter, DocumentIngestor, Upload
from .models import (
    CollectionResponse,
    HealthResponse,
    IngestResponse,
    ItemInfo,
    MoveRequest,
    MutationResponse,
    SessionInfo,
)
from .session_store import Session, SessionStore

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Process-level settings, read from the environment."""
    session_ttl_minutes: int = 60
    max_sessions: int = 1000
    document_title: str = "A Collection of Poems"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            session_ttl_minutes=int(os.getenv("ANTHOLOGY_SESSION_TTL_MINUTES", "60")),
            max_sessions=int(os.getenv("ANTHOLOGY_MAX_SESSIONS", "1000")),
            document_title=os.getenv("ANTHOLOGY_DOCUMENT_TITLE", "A Collection of Poems"),
        )


def _collection_response(session: Session) -> CollectionResponse:
    items = session.collection.snapshot()
    return CollectionResponse(
        session_id=session.session_id,
        item_count=len(items),
        total_words=session.collection.total_word_count,
        items=[ItemInfo.from_item(item, i) for i, item in enumerate(items, start=1)],
    )


def create_app(
    config: Optional[AppConfig] = None,
    converter: Optional[DocumentConverter] = None,
    store: Optional[SessionStore] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    config = config or AppConfig.from_env()
    store = store or SessionStore(
        ttl_minutes=config.session_ttl_minutes,
        max_sessions=config.max_sessions,
    )
    ingestor = DocumentIngestor(converter=converter)
    builder = CombinedDocumentBuilder(BuilderConfig(document_title=config.document_title))

    app = FastAPI(
        title="Poem Anthology API",
        description="Assemble uploaded poems into one combined document",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_session_or_404(session_id: str) -> Session:
        session = store.get_session(session_id)
        if not session:
            raise HTTPException(status_code=404, detail="Session not found")
        return session

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check():
        """Check API health."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(timezone.utc),
            components={
                "api": "healthy",
                "sessions": store.session_count,
                "converter": type(ingestor.converter).__name__,
            },
        )

    @app.post("/sessions", response_model=SessionInfo, tags=["Sessions"])
    async def create_session():
        """Start a new, empty anthology."""
        session = store.create_session()
        logger.info(f"Created session {session.session_id}")
        return SessionInfo(
            session_id=session.session_id,
            created_at=session.created_at,
            last_activity=session.last_activity,
            item_count=session.item_count,
        )

    @app.get("/sessions/{session_id}", response_model=CollectionResponse, tags=["Sessions"])
    async def get_collection(session_id: str):
        """Items in collection order."""
        return _collection_response(get_session_or_404(session_id))

    @app.delete("/sessions/{session_id}", tags=["Sessions"])
    async def delete_session(session_id: str):
        if not store.delete_session(session_id):
            raise HTTPException(status_code=404, detail="Session not found")
        return {"deleted": True}

    @app.post("/sessions/{session_id}/documents", response_model=IngestResponse, tags=["Documents"])
    async def upload_documents(session_id: str, files: list[UploadFile] = File(...)):
        """
        Convert and add uploaded documents.

        - Files are processed in upload order
        - Duplicates and unreadable files are reported, not fatal
        - Accepted documents are appended to the collection
        """
        start_time = time.time()
        session = get_session_or_404(session_id)

        uploads = [Upload(name=f.filename or "document", data=await f.read()) for f in files]

        async with session.ingest_lock:
            first_position = len(session.collection) + 1
            result = await ingestor.ingest(uploads, existing=session.collection.snapshot())
            result.apply_to(session.collection)

        latency_ms = int((time.time() - start_time) * 1000)
        return IngestResponse.from_result(session.session_id, result, first_position, latency_ms)

    @app.post("/sessions/{session_id}/items/move", response_model=MutationResponse, tags=["Collection"])
    async def move_item(session_id: str, request: MoveRequest):
        """Move an item to a new position; other items shift."""
        session = get_session_or_404(session_id)
        moved = session.collection.move_to(request.from_index, request.to_index)
        if moved:
            message = f'Moved "{moved.title}" from position {request.from_index + 1} to {request.to_index + 1}'
        else:
            message = "Nothing to move"
        return MutationResponse(changed=moved is not None, message=message, collection=_collection_response(session))

    @app.delete("/sessions/{session_id}/items/{index}", response_model=MutationResponse, tags=["Collection"])
    async def remove_item(session_id: str, index: int):
        """Remove the item at a 0-based index."""
        session = get_session_or_404(session_id)
        removed = session.collection.remove_at(index)
        message = f'Removed "{removed.title}"' if removed else "Nothing to remove"
        return MutationResponse(changed=removed is not None, message=message, collection=_collection_response(session))

    @app.delete("/sessions/{session_id}/items", response_model=MutationResponse, tags=["Collection"])
    async def clear_items(session_id: str):
        """Remove every item."""
        session = get_session_or_404(session_id)
        changed = not session.collection.is_empty
        session.collection.clear()
        return MutationResponse(changed=changed, message="All poems cleared!", collection=_collection_response(session))

    @app.get("/sessions/{session_id}/export", tags=["Export"])
    async def export_collection(session_id: str, fmt: str = Query(default="html", alias="format")):
        """Download the combined document (html or mht)."""
        session = get_session_or_404(session_id)
        if session.collection.is_empty:
            raise HTTPException(status_code=400, detail="No poems to download!")
        if fmt not in EXPORT_FORMATS:
            raise HTTPException(status_code=400, detail=f"Unsupported export format: {fmt}")

        document = builder.export(session.collection.snapshot(), fmt=fmt)
        return Response(
            content=document.content,
            media_type=document.media_type,
            headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
        )

    return app
