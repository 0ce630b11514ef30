"""
Export module.

Components:
- CombinedDocumentBuilder: Table of contents + items as one HTML document
- to_mhtml: Package the HTML as a Word-compatible web archive
"""

from .combined_builder import (
    CombinedDocumentBuilder,
    BuilderConfig,
    CombinedDocument,
    ToCEntry,
    EXPORT_FORMATS,
)
from .mhtml import to_mhtml

__all__ = [
    "CombinedDocumentBuilder",
    "BuilderConfig",
    "CombinedDocument",
    "ToCEntry",
    "EXPORT_FORMATS",
    "to_mhtml",
]
