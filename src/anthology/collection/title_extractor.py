"""
Title extraction for converted documents.

Title sources, first match wins:
1. First h1/h2 heading with usable text
2. First line of the first paragraph
3. The upload's filename, cleaned up
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from ..markup import element_text, parse_markup
from .models import MAX_TITLE_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Poem"
ELLIPSIS = "..."
HEADING_TAGS = ["h1", "h2"]
DOCUMENT_SUFFIX = re.compile(r"\.(docx?|odt|rtf|html?|txt|md)$", re.IGNORECASE)


def _usable(text: str) -> bool:
    return 0 < len(text) <= MAX_TITLE_LENGTH


class TitleExtractor:
    """
    Infer a human-readable title from converted markup.

    Usage:
        extractor = TitleExtractor()
        title = extractor.extract("<h1>Ode</h1><p>...</p>", "ode.docx")
    """

    def __init__(self, default_title: str = DEFAULT_TITLE):
        self.default_title = default_title

    def extract(self, markup: str, fallback_name: str) -> str:
        """Return a non-empty title of at most 150 characters. Never fails."""
        soup = parse_markup(markup)

        title = (
            self._from_headings(soup)
            or self._from_first_paragraph(soup)
            or self._from_filename(fallback_name)
        )

        title = re.sub(r"\s+", " ", title).strip()
        if len(title) > MAX_TITLE_LENGTH:
            title = title[:MAX_TITLE_LENGTH - len(ELLIPSIS)] + ELLIPSIS

        if not title:
            logger.debug(f"Title for {fallback_name!r} defaulted to {self.default_title!r}")
            title = self.default_title
        return title

    def _from_headings(self, soup: BeautifulSoup) -> Optional[str]:
        for heading in soup.find_all(HEADING_TAGS):
            text = element_text(heading).strip()
            if _usable(text):
                logger.debug(f"Title found from <{heading.name}>: {text!r}")
                return text
        return None

    def _from_first_paragraph(self, soup: BeautifulSoup) -> Optional[str]:
        paragraph = soup.find("p")
        if paragraph is None:
            return None
        first_line = element_text(paragraph).strip().split("\n")[0].strip()
        if _usable(first_line):
            logger.debug(f"Title found from first paragraph line: {first_line!r}")
            return first_line
        return None

    def _from_filename(self, fallback_name: str) -> str:
        name = DOCUMENT_SUFFIX.sub("", fallback_name or "")
        title = re.sub(r"[_-]", " ", name).strip()
        logger.debug(f"Title falling back to cleaned filename: {title!r}")
        return title


_default_extractor = TitleExtractor()


def extract_title(markup: str, fallback_name: str) -> str:
    """Module-level shortcut using the default extractor."""
    return _default_extractor.extract(markup, fallback_name)
