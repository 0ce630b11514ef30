"""
Poem anthology compiler.

Components:
- TitleExtractor: Infer a display title from converted markup
- DuplicateDetector: Reject documents already present in the collection
- PoemCollection: Ordered, reorderable store of accepted items
- DocumentIngestor: Convert, validate and deduplicate a batch of uploads
- CombinedDocumentBuilder: Render the collection into one exportable document
"""

from .collection import (
    Item,
    PoemCollection,
    TitleExtractor,
    DuplicateDetector,
    Candidate,
)
from .ingestion import (
    DocumentConverter,
    MammothConverter,
    DocumentIngestor,
    IngestorConfig,
    IngestionResult,
    FileOutcome,
    OutcomeStatus,
    Upload,
)
from .export import CombinedDocumentBuilder, BuilderConfig, CombinedDocument
from .exceptions import AnthologyError, ConversionError, EmptyContentError

__version__ = "1.0.0"

__all__ = [
    "Item",
    "PoemCollection",
    "TitleExtractor",
    "DuplicateDetector",
    "Candidate",
    "DocumentConverter",
    "MammothConverter",
    "DocumentIngestor",
    "IngestorConfig",
    "IngestionResult",
    "FileOutcome",
    "OutcomeStatus",
    "Upload",
    "CombinedDocumentBuilder",
    "BuilderConfig",
    "CombinedDocument",
    "AnthologyError",
    "ConversionError",
    "EmptyContentError",
]
