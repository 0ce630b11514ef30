"""Item model for accepted anthology entries."""

from dataclasses import dataclass, field
from datetime import datetime

MAX_TITLE_LENGTH = 150
MIN_CONTENT_LENGTH = 10
PREVIEW_LENGTH = 100


def count_words(text: str) -> int:
    """Count whitespace-delimited non-empty tokens."""
    return len(text.split())


@dataclass(frozen=True)
class Item:
    """An accepted document in the collection. Never mutated after creation."""
    id: str
    title: str
    plain_text: str  # Trimmed text used for matching and previews
    markup: str  # Converted HTML, reproduced verbatim on export
    source_name: str  # Original filename
    added_at: datetime
    word_count: int = field(init=False)

    def __post_init__(self):
        if not self.title or len(self.title) > MAX_TITLE_LENGTH:
            raise ValueError(f"Item title must be 1..{MAX_TITLE_LENGTH} characters: {self.title!r}")
        if len(self.plain_text) < MIN_CONTENT_LENGTH:
            raise ValueError(f"Item text must be at least {MIN_CONTENT_LENGTH} characters")
        # Frozen dataclass: computed once at creation
        object.__setattr__(self, "word_count", count_words(self.plain_text))

    def preview(self, length: int = PREVIEW_LENGTH) -> str:
        """Short text preview for list display."""
        if len(self.plain_text) > length:
            return self.plain_text[:length] + "..."
        return self.plain_text

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "source_name": self.source_name,
            "word_count": self.word_count,
            "added_at": self.added_at.isoformat(),
            "preview": self.preview(),
        }
