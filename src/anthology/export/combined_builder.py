"""
Combined Document Builder - Renders the collection as one HTML document.

The document contains:
1. A header with collection statistics
2. A table of contents linking to each item (omitted when empty)
3. One section per item, in collection order, with its stored markup

Output depends only on the items, their order and the generation time,
so identical inputs always produce identical documents.
"""

import html
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..collection import Item
from .mhtml import to_mhtml

logger = logging.getLogger(__name__)

STYLESHEET = """
body {
    font-family: 'Times New Roman', serif;
    line-height: 1.6;
    margin: 40px;
}
h1 { text-align: center; }
.collection-stats { text-align: center; color: #555; }
.table-of-contents h2 { text-align: center; margin-bottom: 20px; font-size: 2em; color: #333; }
.table-of-contents ol { list-style-type: decimal; margin-left: 20px; line-height: 1.8; }
.table-of-contents a { color: #007bff; text-decoration: none; }
.poem { margin-bottom: 50px; }
.poem-title { font-size: 18px; font-weight: bold; text-align: center; margin-bottom: 20px; }
.poem-meta { text-align: center; color: #777; font-size: 0.9em; }
.poem-content { font-family: 'Courier New', monospace; line-height: 1.4; }
.poem-content p { margin-bottom: 0; }
.page-break { page-break-after: always; }
.empty-state { text-align: center; color: #777; }
"""


@dataclass
class BuilderConfig:
    """Configuration for the combined document."""
    document_title: str = "A Collection of Poems"
    toc_heading: str = "Table of Contents"
    filename_stem: str = "Combined_Poems_Collection"
    empty_message: str = "This collection has no poems yet."
    language: str = "en"


@dataclass
class ToCEntry:
    """A single entry in the table of contents."""
    position: int  # 1-based
    anchor: str
    title: str


@dataclass
class CombinedDocument:
    """An export artifact ready to be saved or downloaded."""
    filename: str
    media_type: str
    content: str


EXPORT_FORMATS = {
    "html": ("html", "text/html"),
    "mht": ("mht", "multipart/related"),
}


def anchor_for(position: int) -> str:
    """Anchor id for the item at a 1-based position."""
    return f"item-{position}"


def _esc(text: str) -> str:
    return html.escape(text, quote=True)


class CombinedDocumentBuilder:
    """
    Build the exportable anthology document.

    Usage:
        builder = CombinedDocumentBuilder()
        html_text = builder.build(collection.snapshot())
        doc = builder.export(collection.snapshot(), fmt="mht")
    """

    def __init__(self, config: Optional[BuilderConfig] = None):
        self.config = config or BuilderConfig()

    def table_of_contents(self, items: Sequence[Item]) -> list[ToCEntry]:
        """ToC entries in collection order."""
        return [
            ToCEntry(position=i, anchor=anchor_for(i), title=item.title)
            for i, item in enumerate(items, start=1)
        ]

    def get_stats(self, items: Sequence[Item], generated_at: datetime) -> dict:
        """Aggregate statistics shown in the document header."""
        return {
            "item_count": len(items),
            "total_words": sum(item.word_count for item in items),
            "generated_at": generated_at,
        }

    def build(self, items: Sequence[Item], generated_at: Optional[datetime] = None) -> str:
        """
        Render items into one self-contained HTML document.

        Args:
            items: Items in collection order
            generated_at: Generation timestamp (defaults to now)

        Returns:
            The complete HTML document
        """
        items = list(items)
        generated_at = generated_at or datetime.now(timezone.utc)
        stats = self.get_stats(items, generated_at)
        cfg = self.config

        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{_esc(cfg.language)}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{_esc(cfg.document_title)}</title>",
            f"<style>{STYLESHEET}</style>",
            "</head>",
            "<body>",
            f"<h1>{_esc(cfg.document_title)}</h1>",
            self._build_stats(stats),
        ]

        if items:
            parts.append(self._build_toc(self.table_of_contents(items)))
            for i, item in enumerate(items, start=1):
                parts.append(self._build_item(item, i))
                if i < len(items):
                    parts.append('<div class="page-break"></div>')
        else:
            parts.append(f'<p class="empty-state">{_esc(cfg.empty_message)}</p>')

        parts.extend(["</body>", "</html>", ""])

        logger.info(f"Built combined document: {stats['item_count']} items, {stats['total_words']} words")
        return "\n".join(parts)

    def export(
        self,
        items: Sequence[Item],
        fmt: str = "html",
        generated_at: Optional[datetime] = None,
    ) -> CombinedDocument:
        """Build and package the document as html or mht."""
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {sorted(EXPORT_FORMATS)})")

        extension, media_type = EXPORT_FORMATS[fmt]
        content = self.build(items, generated_at=generated_at)
        if fmt == "mht":
            content = to_mhtml(content)

        return CombinedDocument(
            filename=f"{self.config.filename_stem}.{extension}",
            media_type=media_type,
            content=content,
        )

    def _build_stats(self, stats: dict) -> str:
        count = stats["item_count"]
        words = stats["total_words"]
        generated = stats["generated_at"].strftime("%Y-%m-%d %H:%M")
        return (
            f'<p class="collection-stats">{count} poem{"" if count == 1 else "s"} · '
            f'{words} word{"" if words == 1 else "s"} · Generated {generated}</p>'
        )

    def _build_toc(self, entries: list[ToCEntry]) -> str:
        lines = [
            '<nav class="table-of-contents">',
            f"<h2>{_esc(self.config.toc_heading)}</h2>",
            "<ol>",
        ]
        for entry in entries:
            lines.append(f'<li><a href="#{entry.anchor}">{_esc(entry.title)}</a></li>')
        lines.extend(["</ol>", "</nav>", '<div class="page-break"></div>'])
        return "\n".join(lines)

    def _build_item(self, item: Item, position: int) -> str:
        added = item.added_at.strftime("%Y-%m-%d")
        return "\n".join([
            f'<section class="poem" id="{anchor_for(position)}">',
            f'<h2 class="poem-title">{_esc(item.title)}</h2>',
            f'<p class="poem-meta">From: {_esc(item.source_name)} · '
            f'{item.word_count} words · Added {added}</p>',
            '<div class="poem-content">',
            item.markup,
            "</div>",
            "</section>",
        ])
