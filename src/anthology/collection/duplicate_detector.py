"""Duplicate detection for incoming documents."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .models import Item

logger = logging.getLogger(__name__)

# Content at or below this length only matches by title
MIN_CONTENT_MATCH_LENGTH = 50


@dataclass
class Candidate:
    """A converted document that has not been admitted yet."""
    title: str
    plain_text: str


class DuplicateDetector:
    """
    Decide whether a candidate duplicates an item already collected.

    A candidate is a duplicate when either:
    - its title equals an existing title, ignoring case
    - its trimmed text is longer than 50 characters and equals an existing
      item's trimmed text exactly
    """

    def __init__(self, min_content_match_length: int = MIN_CONTENT_MATCH_LENGTH):
        self.min_content_match_length = min_content_match_length

    def find_duplicate(self, candidate: Candidate, existing: Iterable[Item]) -> Optional[Item]:
        """Return the first existing item the candidate duplicates, or None."""
        title_key = candidate.title.casefold()
        text = candidate.plain_text.strip()
        check_content = len(text) > self.min_content_match_length

        for item in existing:
            if item.title.casefold() == title_key:
                logger.debug(f"Title match: {candidate.title!r} ~ {item.title!r}")
                return item
            if check_content and item.plain_text.strip() == text:
                logger.debug(f"Content match: {candidate.title!r} ~ {item.title!r}")
                return item
        return None

    def is_duplicate(self, candidate: Candidate, existing: Iterable[Item]) -> bool:
        return self.find_duplicate(candidate, existing) is not None


def is_duplicate(candidate: Candidate, existing: Iterable[Item]) -> bool:
    """Check a candidate with the default thresholds."""
    return DuplicateDetector().is_duplicate(candidate, existing)
