import asyncio

import pytest

from anthology.collection import PoemCollection
from anthology.ingestion import (
    DocumentIngestor,
    IngestorConfig,
    OutcomeStatus,
    Upload,
)

from .conftest import FIXED_TIME, AsyncFakeConverter

ODE = "<h1>Ode to Autumn</h1><p>Season of mists and mellow fruitfulness,<br />close bosom-friend</p>"
RAVEN = "<h1>The Raven</h1><p>Once upon a midnight dreary, while I pondered, weak and weary</p>"


def html_upload(name, markup):
    return Upload(name=name, data=markup.encode("utf-8"))


@pytest.fixture
def ingestor(converter, clock, id_factory):
    return DocumentIngestor(converter=converter, clock=clock, id_factory=id_factory)


def run(coro):
    return asyncio.run(coro)


def test_accepts_valid_document(ingestor):
    result = run(ingestor.ingest([html_upload("ode.docx", ODE)]))

    assert result.accepted_count == 1
    outcome = result.report[0]
    assert outcome.status == OutcomeStatus.ACCEPTED
    item = outcome.item
    assert item is result.accepted[0]
    assert item.id == "id-1"
    assert item.title == "Ode to Autumn"
    assert item.source_name == "ode.docx"
    assert item.markup == ODE
    assert item.added_at == FIXED_TIME
    assert item.plain_text.startswith("Ode to Autumn")
    assert item.word_count == len(item.plain_text.split())


def test_conversion_error_is_reported_and_batch_continues(ingestor):
    uploads = [Upload("broken.docx", b"corrupt"), html_upload("ode.docx", ODE)]
    result = run(ingestor.ingest(uploads))

    assert [o.status for o in result.report] == [OutcomeStatus.ERROR, OutcomeStatus.ACCEPTED]
    assert result.report[0].error_type == "ConversionError"
    assert "zip" in result.report[0].message


def test_unexpected_converter_failure_is_isolated(clock, id_factory):
    class Exploding:
        def convert(self, data):
            raise RuntimeError("boom")

    ingestor = DocumentIngestor(converter=Exploding(), clock=clock, id_factory=id_factory)
    result = run(ingestor.ingest([html_upload("a.docx", ODE)]))
    assert result.report[0].status == OutcomeStatus.ERROR
    assert result.report[0].error_type == "ConversionError"
    assert "boom" in result.report[0].message


def test_nine_characters_is_too_short(ingestor):
    result = run(ingestor.ingest([html_upload("tiny.docx", "<p>123456789</p>")]))
    outcome = result.report[0]
    assert outcome.status == OutcomeStatus.ERROR
    assert outcome.error_type == "EmptyContentError"
    assert result.accepted == []


def test_ten_characters_is_enough(ingestor):
    result = run(ingestor.ingest([html_upload("ten.docx", "<p>1234567890</p>")]))
    assert result.report[0].status == OutcomeStatus.ACCEPTED


def test_markup_only_document_is_empty(ingestor):
    result = run(ingestor.ingest([html_upload("blank.docx", "<p> </p><p>&nbsp;</p>")]))
    assert result.report[0].error_type == "EmptyContentError"


def test_intra_batch_duplicate_title(ingestor):
    other = "<h1>ODE TO AUTUMN</h1><p>Where are the songs of spring? Ay, where are they?</p>"
    result = run(ingestor.ingest([html_upload("a.docx", ODE), html_upload("b.docx", other)]))

    assert [o.status for o in result.report] == [OutcomeStatus.ACCEPTED, OutcomeStatus.SKIPPED_DUPLICATE]
    assert result.skipped_count == 1
    assert "Ode to Autumn" in result.report[1].message


def test_second_batch_is_skipped_when_first_is_kept(ingestor):
    collection = PoemCollection()

    first = run(ingestor.ingest([html_upload("raven.docx", RAVEN)], existing=collection.snapshot()))
    first.apply_to(collection)
    second = run(ingestor.ingest([html_upload("raven.docx", RAVEN)], existing=collection.snapshot()))

    assert first.report[0].status == OutcomeStatus.ACCEPTED
    assert second.report[0].status == OutcomeStatus.SKIPPED_DUPLICATE
    assert len(collection) == 1


def test_ingest_does_not_touch_the_collection(ingestor):
    collection = PoemCollection()
    result = run(ingestor.ingest([html_upload("ode.docx", ODE)], existing=collection))
    assert len(collection) == 0
    result.apply_to(collection)
    assert [i.title for i in collection] == ["Ode to Autumn"]


def test_outcomes_follow_upload_order(ingestor):
    uploads = [
        html_upload("1.docx", RAVEN),
        Upload("2.docx", b"corrupt"),
        html_upload("3.docx", RAVEN),
        html_upload("4.docx", ODE),
    ]
    result = run(ingestor.ingest(uploads))
    assert [o.source_name for o in result.report] == ["1.docx", "2.docx", "3.docx", "4.docx"]
    assert [i.title for i in result.accepted] == ["The Raven", "Ode to Autumn"]
    assert [i.id for i in result.accepted] == ["id-1", "id-2"]


def test_progress_callback_sees_every_upload(ingestor):
    seen = []
    uploads = [html_upload("a.docx", ODE), Upload("b.docx", b"corrupt")]
    run(ingestor.ingest(uploads, on_progress=lambda done, total, o: seen.append((done, total, o.status))))
    assert seen == [(1, 2, OutcomeStatus.ACCEPTED), (2, 2, OutcomeStatus.ERROR)]


def test_cancellation_between_uploads(ingestor):
    cancel = asyncio.Event()
    uploads = [html_upload("a.docx", ODE), html_upload("b.docx", RAVEN)]

    def on_progress(done, total, outcome):
        cancel.set()

    async def go():
        return await ingestor.ingest(uploads, cancel_event=cancel, on_progress=on_progress)

    result = run(go())
    assert result.cancelled
    assert len(result.report) == 1
    assert [i.title for i in result.accepted] == ["Ode to Autumn"]
    assert "cancelled" in result.summary()


def test_async_converter_is_awaited(clock, id_factory):
    ingestor = DocumentIngestor(converter=AsyncFakeConverter(), clock=clock, id_factory=id_factory)
    result = run(ingestor.ingest([html_upload("ode.docx", ODE)]))
    assert result.accepted[0].title == "Ode to Autumn"


def test_converts_one_upload_at_a_time(clock, id_factory):
    in_flight = []
    peak = []

    class SlowConverter:
        async def convert(self, data):
            in_flight.append(data)
            peak.append(len(in_flight))
            await asyncio.sleep(0)
            in_flight.pop()
            return type("R", (), {"markup": data.decode("utf-8")})()

    ingestor = DocumentIngestor(converter=SlowConverter(), clock=clock, id_factory=id_factory)
    run(ingestor.ingest([html_upload("a.docx", ODE), html_upload("b.docx", RAVEN)]))
    assert max(peak) == 1


def test_custom_minimum_length(converter, clock, id_factory):
    ingestor = DocumentIngestor(
        converter=converter, config=IngestorConfig(min_content_length=40), clock=clock, id_factory=id_factory
    )
    result = run(ingestor.ingest([html_upload("a.docx", "<p>Twenty characters.</p>")]))
    assert result.report[0].error_type == "EmptyContentError"


@pytest.mark.parametrize(
    "uploads,expected",
    [
        ([html_upload("a.docx", ODE)], "Successfully processed 1 new poem!"),
        (
            [html_upload("a.docx", ODE), html_upload("b.docx", RAVEN), html_upload("c.docx", ODE)],
            "Successfully processed 2 new poems! (1 duplicate skipped)",
        ),
        ([Upload("x.docx", b"corrupt")], "No new poems found in the uploaded documents! 1 file(s) had errors."),
    ],
)
def test_summary_messages(ingestor, uploads, expected):
    assert run(ingestor.ingest(uploads)).summary() == expected


def test_summary_when_everything_was_a_duplicate(ingestor):
    first = run(ingestor.ingest([html_upload("a.docx", ODE)]))
    again = run(ingestor.ingest([html_upload("a.docx", ODE)], existing=first.accepted))
    assert again.summary() == "All uploaded poems were duplicates or had no new content."


def test_converter_may_return_plain_markup(clock, id_factory):
    class StringConverter:
        def convert(self, data):
            return data.decode("utf-8")

    ingestor = DocumentIngestor(converter=StringConverter(), clock=clock, id_factory=id_factory)
    result = run(ingestor.ingest([html_upload("ode.docx", ODE)]))
    assert result.error_count == 0
    assert result.accepted[0].title == "Ode to Autumn"
