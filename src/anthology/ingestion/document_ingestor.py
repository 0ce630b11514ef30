"""
Document Ingestor - Orchestrates conversion, titling and deduplication.

Pipeline, per upload:
1. Conversion → HTML markup via the configured DocumentConverter
2. Validation → reject documents with too little text
3. Title extraction → TitleExtractor
4. Deduplication → against the collection and earlier uploads in the batch
5. Acceptance → a new Item

Uploads are processed one at a time. Control is yielded to the event loop
between uploads so a host can report progress or cancel the batch. Nothing is
added to a collection here: the caller applies IngestionResult when ready.
"""

import asyncio
import inspect
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Optional

from ..collection import Candidate, DuplicateDetector, Item, PoemCollection, TitleExtractor
from ..exceptions import ConversionError, EmptyContentError
from ..markup import markup_to_text
from .document_converter import DocumentConverter, MammothConverter

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    ACCEPTED = "accepted"
    SKIPPED_DUPLICATE = "skipped-duplicate"
    ERROR = "error"


@dataclass
class Upload:
    """A raw uploaded document."""
    name: str
    data: bytes


@dataclass
class FileOutcome:
    """What happened to one upload."""
    source_name: str
    status: OutcomeStatus
    item: Optional[Item] = None
    message: Optional[str] = None
    error_type: Optional[str] = None  # "ConversionError" or "EmptyContentError"
    processing_time_ms: float = 0

    def to_dict(self) -> dict:
        return {
            "source_name": self.source_name,
            "outcome": self.status.value,
            "item": self.item.to_dict() if self.item else None,
            "message": self.message,
            "error_type": self.error_type,
        }


@dataclass
class IngestionResult:
    """Result of ingesting a batch. Inert until applied to a collection."""
    accepted: list[Item] = field(default_factory=list)
    report: list[FileOutcome] = field(default_factory=list)
    cancelled: bool = False

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.report if o.status == OutcomeStatus.SKIPPED_DUPLICATE)

    @property
    def error_count(self) -> int:
        return sum(1 for o in self.report if o.status == OutcomeStatus.ERROR)

    @property
    def errors(self) -> list[FileOutcome]:
        return [o for o in self.report if o.status == OutcomeStatus.ERROR]

    def apply_to(self, collection: PoemCollection):
        """Append the accepted items to a collection, in upload order."""
        collection.extend(self.accepted)

    def summary(self) -> str:
        """One-line, user-facing description of the batch."""
        if self.accepted_count > 0:
            n = self.accepted_count
            message = f"Successfully processed {n} new poem{'s' if n > 1 else ''}!"
            if self.skipped_count > 0:
                s = self.skipped_count
                message += f" ({s} duplicate{'s' if s > 1 else ''} skipped)"
        elif self.skipped_count > 0:
            message = "All uploaded poems were duplicates or had no new content."
        else:
            message = "No new poems found in the uploaded documents!"

        if self.error_count > 0:
            message += f" {self.error_count} file(s) had errors."
        if self.cancelled:
            message += " Processing was cancelled."
        return message


@dataclass
class IngestorConfig:
    """Configuration for document ingestion."""
    min_content_length: int = 10  # Shorter plain text is rejected


ProgressCallback = Callable[[int, int, FileOutcome], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class DocumentIngestor:
    """
    Turn a batch of uploads into accepted items and a per-file report.

    Usage:
        ingestor = DocumentIngestor()
        result = await ingestor.ingest(uploads, existing=collection)
        result.apply_to(collection)
    """

    def __init__(
        self,
        converter: Optional[DocumentConverter] = None,
        config: Optional[IngestorConfig] = None,
        title_extractor: Optional[TitleExtractor] = None,
        duplicate_detector: Optional[DuplicateDetector] = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ):
        """
        Initialize the ingestor.

        Args:
            converter: Document converter (defaults to MammothConverter)
            config: Ingestion thresholds
            title_extractor: Title heuristics
            duplicate_detector: Duplicate rule
            clock: Source of acceptance timestamps
            id_factory: Source of item ids; must never repeat
        """
        self.converter = converter or MammothConverter()
        self.config = config or IngestorConfig()
        self.title_extractor = title_extractor or TitleExtractor()
        self.duplicate_detector = duplicate_detector or DuplicateDetector()
        self.clock = clock
        self.id_factory = id_factory

    async def ingest(
        self,
        uploads: Iterable[Upload],
        existing: Iterable[Item] = (),
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> IngestionResult:
        """
        Ingest uploads sequentially.

        Args:
            uploads: Documents in the order they should be added
            existing: Items already in the collection (snapshot taken now)
            cancel_event: Checked before each upload; when set, the batch
                stops and returns what was gathered so far
            on_progress: Called as (done, total, outcome) after each upload

        Returns:
            IngestionResult with accepted items and one outcome per
            processed upload
        """
        uploads = list(uploads)
        known = list(existing)
        result = IngestionResult()
        total = len(uploads)

        logger.info(f"Ingesting {total} documents against {len(known)} existing items")

        for i, upload in enumerate(uploads):
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                logger.info(f"Ingestion cancelled after {i}/{total} documents")
                break

            outcome = await self._ingest_one(upload, known)
            result.report.append(outcome)
            if outcome.status == OutcomeStatus.ACCEPTED:
                known.append(outcome.item)
                result.accepted.append(outcome.item)

            if on_progress is not None:
                on_progress(i + 1, total, outcome)

            # Let the host update progress before the next conversion
            await asyncio.sleep(0)

        logger.info(
            f"Ingestion finished: accepted={result.accepted_count}, "
            f"duplicates={result.skipped_count}, errors={result.error_count}"
        )
        return result

    async def _ingest_one(self, upload: Upload, known: list[Item]) -> FileOutcome:
        start_time = time.time()

        def elapsed_ms() -> float:
            return (time.time() - start_time) * 1000

        try:
            markup = await self._convert(upload)
            plain_text = markup_to_text(markup)
            if len(plain_text) < self.config.min_content_length:
                raise EmptyContentError("Document appears to be empty or too short after extraction")
        except (ConversionError, EmptyContentError) as e:
            logger.warning(f"Skipping {upload.name}: {e}")
            return FileOutcome(
                source_name=upload.name,
                status=OutcomeStatus.ERROR,
                message=str(e),
                error_type=type(e).__name__,
                processing_time_ms=elapsed_ms(),
            )

        title = self.title_extractor.extract(markup, upload.name)

        duplicate = self.duplicate_detector.find_duplicate(Candidate(title=title, plain_text=plain_text), known)
        if duplicate is not None:
            logger.warning(f"Duplicate poem skipped: {title!r} from {upload.name!r} (matches {duplicate.title!r})")
            return FileOutcome(
                source_name=upload.name,
                status=OutcomeStatus.SKIPPED_DUPLICATE,
                message=f'Duplicate of "{duplicate.title}" ({duplicate.source_name})',
                processing_time_ms=elapsed_ms(),
            )

        item = Item(
            id=self.id_factory(),
            title=title,
            plain_text=plain_text,
            markup=markup,
            source_name=upload.name,
            added_at=self.clock(),
        )
        logger.info(f"Accepted {item.title!r} from {upload.name!r} ({item.word_count} words)")
        return FileOutcome(
            source_name=upload.name,
            status=OutcomeStatus.ACCEPTED,
            item=item,
            processing_time_ms=elapsed_ms(),
        )

    async def _convert(self, upload: Upload) -> str:
        """Run the converter, isolating any failure as a ConversionError."""
        try:
            result = self.converter.convert(upload.data)
            if inspect.isawaitable(result):
                result = await result
            if isinstance(result, str):
                return result
            return result.markup or ""
        except ConversionError:
            raise
        except Exception as e:
            raise ConversionError(f"Failed to extract content from {upload.name!r}: {e}") from e
