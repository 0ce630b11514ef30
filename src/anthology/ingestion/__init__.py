"""
Document ingestion module.

Components:
- DocumentConverter: Interface for turning uploads into markup
- MammothConverter: .docx to HTML via mammoth
- DocumentIngestor: Convert, validate, title and deduplicate a batch
"""

from .document_converter import DocumentConverter, MammothConverter, ConversionResult
from .document_ingestor import (
    DocumentIngestor,
    IngestorConfig,
    IngestionResult,
    FileOutcome,
    OutcomeStatus,
    Upload,
)

__all__ = [
    "DocumentConverter",
    "MammothConverter",
    "ConversionResult",
    "DocumentIngestor",
    "IngestorConfig",
    "IngestionResult",
    "FileOutcome",
    "OutcomeStatus",
    "Upload",
]
