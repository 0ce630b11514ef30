"""
Poem Collection - the ordered store of accepted items.

Order determines display order and export order. Items are never edited in
place; reordering only changes positions.
"""

import logging
from typing import Iterable, Iterator, Optional

from .models import Item

logger = logging.getLogger(__name__)


class PoemCollection:
    """
    Array-backed ordered collection of items.

    Out-of-range indices are silently ignored so a host can forward user
    gestures without checking bounds first.

    Usage:
        collection = PoemCollection()
        collection.extend(result.accepted)
        collection.move_to(0, 2)
        items = collection.snapshot()
    """

    def __init__(self, items: Optional[Iterable[Item]] = None):
        self._items: list[Item] = list(items or [])

    def append(self, item: Item):
        """Add an item to the end."""
        self._items.append(item)
        logger.info(f"Added {item.title!r} at position {len(self._items)}")

    def extend(self, items: Iterable[Item]):
        """Append items in order."""
        for item in items:
            self.append(item)

    def move_to(self, from_index: int, to_index: int) -> Optional[Item]:
        """
        Move the item at from_index so it occupies to_index.

        Items in between shift by one position. Returns the moved item,
        or None when the move is a no-op.
        """
        size = len(self._items)
        if size < 2 or from_index == to_index:
            return None
        if not (0 <= from_index < size and 0 <= to_index < size):
            logger.warning(f"Ignoring move with invalid indices {from_index} -> {to_index} (size={size})")
            return None

        item = self._items.pop(from_index)
        self._items.insert(to_index, item)
        logger.info(f"Moved {item.title!r} from position {from_index + 1} to {to_index + 1}")
        return item

    def remove_at(self, index: int) -> Optional[Item]:
        """Delete the item at index. Returns it, or None if out of range."""
        if not 0 <= index < len(self._items):
            logger.warning(f"Ignoring remove with invalid index {index} (size={len(self._items)})")
            return None
        item = self._items.pop(index)
        logger.info(f"Removed {item.title!r}")
        return item

    def clear(self):
        """Remove every item."""
        count = len(self._items)
        self._items = []
        logger.info(f"Cleared {count} items")

    def snapshot(self) -> tuple[Item, ...]:
        """Current items in order, as an immutable view."""
        return tuple(self._items)

    def index_of(self, item_id: str) -> Optional[int]:
        """Position of the item with the given id, or None."""
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    @property
    def total_word_count(self) -> int:
        return sum(item.word_count for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(tuple(self._items))

    def __getitem__(self, index: int) -> Item:
        return self._items[index]

    def __repr__(self) -> str:
        return f"PoemCollection(items={len(self._items)}, words={self.total_word_count})"
