"""
Markup helpers shared by title extraction and ingestion.

Converted documents arrive as HTML fragments. These helpers parse them with
BeautifulSoup and derive plain text without depending on a rendering engine.
"""

import re

from bs4 import BeautifulSoup, Tag

BLOCK_TAGS = [
    "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "li", "tr", "div", "blockquote", "pre", "table", "ul", "ol",
]


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse an HTML fragment."""
    return BeautifulSoup(markup or "", "html.parser")


def element_text(element: Tag) -> str:
    """Text of an element with <br> rendered as line breaks."""
    parts = []
    for node in element.descendants:
        if isinstance(node, Tag):
            if node.name == "br":
                parts.append("\n")
        else:
            parts.append(str(node))
    return "".join(parts)


def markup_to_text(markup: str) -> str:
    """
    Strip structural markup and return trimmed plain text.

    Block elements end with a line break so words in adjacent paragraphs
    are not glued together.
    """
    soup = parse_markup(markup)
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.append("\n")
    text = soup.get_text()
    text = text.replace("\xa0", " ")
    return text.strip()


def preserve_formatting(html: str) -> str:
    """
    Keep poem spacing visible once the markup is rendered.

    - Runs of two or more spaces become &nbsp; runs
    - Leading spaces on a line become &nbsp; (indentation)
    - Newlines become <br>
    - Consecutive paragraphs get a top margin
    """
    formatted = re.sub(r" {2,}", lambda m: "&nbsp;" * len(m.group(0)), html)
    formatted = re.sub(r"^( +)", lambda m: "&nbsp;" * len(m.group(1)), formatted, flags=re.M)
    formatted = formatted.replace("\n", "<br>")
    formatted = re.sub(r"</p>\s*<p>", '</p><p style="margin-top: 1em;">', formatted)
    return formatted
