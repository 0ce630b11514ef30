"""
Collection module: the anthology's items and the rules that govern them.

Components:
- Item: An accepted document entry
- TitleExtractor: Infer titles from converted markup
- DuplicateDetector: Title/content duplicate checks
- PoemCollection: Ordered store with move/remove/clear
"""

from .models import Item, count_words, MAX_TITLE_LENGTH
from .title_extractor import TitleExtractor, extract_title, DEFAULT_TITLE
from .duplicate_detector import DuplicateDetector, Candidate, is_duplicate
from .poem_collection import PoemCollection

__all__ = [
    "Item",
    "count_words",
    "MAX_TITLE_LENGTH",
    "TitleExtractor",
    "extract_title",
    "DEFAULT_TITLE",
    "DuplicateDetector",
    "Candidate",
    "is_duplicate",
    "PoemCollection",
]
