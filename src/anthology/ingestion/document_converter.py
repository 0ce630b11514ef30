"""
Document Converter - turns uploaded Word documents into HTML.

The ingestor only depends on the DocumentConverter interface:
    convert(data: bytes) -> ConversionResult | str
Implementations may return a ConversionResult, a bare markup string, or an
awaitable of either.
"""

import io
import logging
from dataclasses import dataclass, field

import mammoth

from ..exceptions import ConversionError
from ..markup import preserve_formatting

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Converted representation of one document."""
    markup: str
    messages: list[str] = field(default_factory=list)  # Converter warnings


class DocumentConverter:
    """Base class for converters. Subclasses override convert()."""

    def convert(self, data: bytes) -> ConversionResult:
        raise NotImplementedError


class MammothConverter(DocumentConverter):
    """
    Convert .docx bytes to HTML using mammoth.

    Usage:
        converter = MammothConverter()
        result = converter.convert(Path("poem.docx").read_bytes())
    """

    def __init__(self, preserve_spacing: bool = True):
        """
        Args:
            preserve_spacing: Keep repeated spaces and line breaks visible
                in the stored markup
        """
        self.preserve_spacing = preserve_spacing
        logger.info(f"MammothConverter initialized (preserve_spacing={preserve_spacing})")

    def convert(self, data: bytes) -> ConversionResult:
        if not data:
            raise ConversionError("Document is empty")

        try:
            result = mammoth.convert_to_html(io.BytesIO(data))
        except Exception as e:
            raise ConversionError(f"Could not read document: {e}") from e

        html = result.value or ""
        messages = [str(m.message) for m in result.messages]
        for message in messages:
            logger.debug(f"mammoth: {message}")

        if not html.strip():
            raise ConversionError("No content extracted from document")

        if self.preserve_spacing:
            html = preserve_formatting(html)

        return ConversionResult(markup=html, messages=messages)
