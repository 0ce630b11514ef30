#!/usr/bin/env python3
"""Run the Poem Anthology API server."""

import argparse
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

import uvicorn
from dotenv import load_dotenv


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description="Run Poem Anthology API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    print(f"""
Poem Anthology API
  POST   /sessions                        - Start a collection
  POST   /sessions/{{id}}/documents         - Upload .docx files
  POST   /sessions/{{id}}/items/move        - Reorder
  DELETE /sessions/{{id}}/items/{{index}}     - Remove one poem
  DELETE /sessions/{{id}}/items             - Clear
  GET    /sessions/{{id}}/export?format=html - Download combined document

  Docs: http://{args.host}:{args.port}/docs
    """)

    # Sessions live in process memory, so a single worker only
    uvicorn.run(
        "anthology.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
    )


if __name__ == "__main__":
    main()
