import pytest

from anthology.collection import DEFAULT_TITLE, TitleExtractor, extract_title


@pytest.fixture
def extractor():
    return TitleExtractor()


def test_first_heading_wins(extractor):
    markup = "<p>Opening line</p><h2>Second Level</h2><h1>Top Level</h1>"
    assert extractor.extract(markup, "file.docx") == "Second Level"


def test_only_two_highest_heading_levels(extractor):
    markup = "<h3>Minor heading</h3><p>First line<br />second line</p>"
    assert extractor.extract(markup, "file.docx") == "First line"


def test_skips_empty_and_overlong_headings(extractor):
    markup = f"<h1>   </h1><h1>{'x' * 151}</h1><h2>The Raven</h2>"
    assert extractor.extract(markup, "file.docx") == "The Raven"


def test_heading_of_exactly_150_characters_is_accepted(extractor):
    heading = "y" * 150
    assert extractor.extract(f"<h1>{heading}</h1>", "file.docx") == heading


def test_first_line_of_first_paragraph(extractor):
    markup = "<p>Shall I compare thee<br />to a summer's day?</p><p>Later</p>"
    assert extractor.extract(markup, "sonnet.docx") == "Shall I compare thee"


def test_long_first_line_falls_back_to_filename(extractor):
    markup = f"<p>{'word ' * 40}</p>"
    assert extractor.extract(markup, "my_long-poem.docx") == "my long poem"


def test_filename_fallback_without_heading_or_paragraph(extractor):
    assert extractor.extract("<ul><li>item</li></ul>", "Winter_Evening-Draft.DOCX") == "Winter Evening Draft"


def test_whitespace_is_collapsed(extractor):
    markup = "<h1>  The\n   Waste\t Land </h1>"
    assert extractor.extract(markup, "f.docx") == "The Waste Land"


def test_nbsp_only_heading_is_ignored(extractor):
    markup = "<h1>&nbsp;&nbsp;</h1><p>Real title</p>"
    assert extractor.extract(markup, "f.docx") == "Real title"


def test_long_filename_is_truncated_with_ellipsis(extractor):
    title = extractor.extract("", "a" * 200 + ".docx")
    assert len(title) == 150
    assert title.endswith("...")
    assert title[:147] == "a" * 147


@pytest.mark.parametrize("name", ["", ".docx", "___", " - "])
def test_default_title_when_nothing_usable(extractor, name):
    assert extractor.extract("", name) == DEFAULT_TITLE


@pytest.mark.parametrize(
    "markup,name",
    [
        ("", "x.docx"),
        ("<h1></h1>", ""),
        ("<p>" + "z" * 500 + "</p>", "q" * 400),
        ("<div>no blocks</div>", "poem.docx"),
        ("<h2>Fine</h2>", "ignored.docx"),
    ],
)
def test_result_is_always_non_empty_and_bounded(extractor, markup, name):
    title = extractor.extract(markup, name)
    assert 0 < len(title) <= 150


def test_module_shortcut():
    assert extract_title("<h1>Ozymandias</h1>", "x.docx") == "Ozymandias"
