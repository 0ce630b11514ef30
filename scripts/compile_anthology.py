#!/usr/bin/env python3
"""
Anthology CLI - Combine Word documents into one poem collection.

Usage:
    python scripts/compile_anthology.py poems/                     # All .docx in a directory
    python scripts/compile_anthology.py a.docx b.docx --format mht # Explicit order, Word archive
    python scripts/compile_anthology.py poems/ --out out/book.html # Custom output path
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from anthology import (
    BuilderConfig,
    CombinedDocumentBuilder,
    DocumentIngestor,
    MammothConverter,
    PoemCollection,
    Upload,
)
from anthology.export import EXPORT_FORMATS


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def collect_files(sources: list[str]) -> list[Path]:
    """Expand directories to their .docx files, keeping argument order."""
    files = []
    for source in sources:
        path = Path(source)
        if path.is_dir():
            files.extend(sorted(p for p in path.glob("*.docx") if not p.name.startswith("~$")))
        elif path.is_file():
            files.append(path)
        else:
            print(f"  ! Not found: {source}")
    return files


def ingest_files(ingestor: DocumentIngestor, files: list[Path], collection: PoemCollection):
    """Ingest files in order with a progress bar, then add accepted poems."""
    uploads = [Upload(name=p.name, data=p.read_bytes()) for p in files]

    with tqdm(total=len(uploads), desc="Processing", unit="file") as bar:
        def on_progress(done, total, outcome):
            bar.set_postfix_str(outcome.source_name[:30])
            bar.update(1)

        result = asyncio.run(
            ingestor.ingest(uploads, existing=collection.snapshot(), on_progress=on_progress)
        )

    result.apply_to(collection)
    return result


def print_report(result):
    print(f"\n{'='*60}")
    print("INGESTION SUMMARY")
    print(f"{'='*60}")
    print(f"  Accepted:   {result.accepted_count} files")
    print(f"  Duplicates: {result.skipped_count} files")
    print(f"  Errors:     {result.error_count} files")
    print(f"\n  {result.summary()}")

    if result.errors:
        print("\nFailed files:")
        for outcome in result.errors:
            print(f"  - {outcome.source_name}: {outcome.message}")


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description="Combine Word documents into one poem collection")
    parser.add_argument("sources", nargs="+", help=".docx files or directories, in collection order")
    parser.add_argument("--out", help="Output file (default: Combined_Poems_Collection.<format>)")
    parser.add_argument("--format", choices=sorted(EXPORT_FORMATS), default="html", help="Export format")
    parser.add_argument("--title", help="Document title (default: $ANTHOLOGY_DOCUMENT_TITLE)")
    parser.add_argument("--raw-spacing", action="store_true", help="Do not preserve repeated spaces/line breaks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args()
    setup_logging(args.verbose)

    files = collect_files(args.sources)
    if not files:
        print("No .docx files found.")
        sys.exit(1)

    ingestor = DocumentIngestor(converter=MammothConverter(preserve_spacing=not args.raw_spacing))
    collection = PoemCollection()
    result = ingest_files(ingestor, files, collection)
    print_report(result)

    if collection.is_empty:
        print("\nNothing to export.")
        sys.exit(1)

    config = BuilderConfig()
    title = args.title or os.getenv("ANTHOLOGY_DOCUMENT_TITLE")
    if title:
        config.document_title = title
    document = CombinedDocumentBuilder(config).export(collection.snapshot(), fmt=args.format)

    output = Path(args.out) if args.out else Path(document.filename)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8", newline="") as f:
        f.write(document.content)

    print(f"\nWrote {len(collection)} poems ({collection.total_word_count} words) to {output}")


if __name__ == "__main__":
    main()
