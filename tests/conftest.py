import itertools
from datetime import datetime, timezone

import pytest

from anthology.collection import Item
from anthology.exceptions import ConversionError
from anthology.ingestion import ConversionResult, DocumentConverter

FIXED_TIME = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


class FakeConverter(DocumentConverter):
    """Treats upload bytes as UTF-8 HTML; b"corrupt" fails like a bad .docx."""

    def __init__(self):
        self.calls = []

    def convert(self, data: bytes) -> ConversionResult:
        self.calls.append(data)
        if data == b"corrupt":
            raise ConversionError("Could not read document: File is not a zip file")
        return ConversionResult(markup=data.decode("utf-8"))


class AsyncFakeConverter(FakeConverter):
    async def convert(self, data: bytes) -> ConversionResult:
        return FakeConverter.convert(self, data)


@pytest.fixture
def converter():
    return FakeConverter()


@pytest.fixture
def clock():
    return lambda: FIXED_TIME


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def make_item():
    counter = itertools.count(1)

    def _make(title="Poem", text=None, markup=None, source_name=None):
        n = next(counter)
        text = text or f"Lines of verse number {n} for {title}"
        return Item(
            id=f"item-{n}",
            title=title,
            plain_text=text,
            markup=markup or f"<p>{text}</p>",
            source_name=source_name or f"{title.lower()}.docx",
            added_at=FIXED_TIME,
        )

    return _make
