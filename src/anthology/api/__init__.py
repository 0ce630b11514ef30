"""API module for the poem anthology."""

from .models import CollectionResponse, IngestResponse, ItemInfo, MoveRequest, HealthResponse
from .app import AppConfig, create_app
from .session_store import Session, SessionStore

__all__ = [
    "CollectionResponse",
    "IngestResponse",
    "ItemInfo",
    "MoveRequest",
    "HealthResponse",
    "AppConfig",
    "create_app",
    "Session",
    "SessionStore",
]
