"""CLI entrypoint for docseed."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .clients import DocsClient, DriveClient
from .config import ensure_dotenv_loaded
from .errors import DocumentError
from .logger import Logger
from .types import CONTENT_FORMATS, CreationRequest
from .workflow import DocumentCreator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docseed", description="Create Google Docs, optionally seeded with content")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the MCP server over stdio")

    create = sub.add_parser("create", help="Create a single document and print it as JSON")
    create.add_argument("title", help="Title for the new document")
    create.add_argument("--parent", dest="parent", help="Folder ID to create the document in (default: Drive root)")
    content = create.add_mutually_exclusive_group()
    content.add_argument("--content", help="Initial content")
    content.add_argument("--content-file", dest="content_file", help="Read initial content from file ('-' for stdin)")
    create.add_argument("--format", dest="content_format", choices=CONTENT_FORMATS, default="markdown",
                        help="How to interpret initial content (default: markdown)")
    create.add_argument("--log-json", dest="log_json", help="Write JSON logs to file (default: .docseed-log.jsonl)")
    create.add_argument("--no-log-json", action="store_true", help="Disable JSONL logging")
    create.add_argument("--quiet", action="store_true", help="Suppress human-readable logs")
    return parser


def _read_content(parsed: argparse.Namespace) -> Optional[str]:
    if parsed.content_file == "-":
        return sys.stdin.read()
    if parsed.content_file:
        return Path(parsed.content_file).read_text(encoding="utf8")
    return parsed.content


def run_create(parsed: argparse.Namespace) -> int:
    if not parsed.title:
        print("Error: title must not be empty", file=sys.stderr)
        return 2
    try:
        content = _read_content(parsed)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    request = CreationRequest(
        title=parsed.title,
        parent_folder_id=parsed.parent,
        initial_content=content,
        content_format=parsed.content_format,
    )
    logger = Logger(
        log_json_path=parsed.log_json,
        enable_human_logs=not parsed.quiet,
        enable_file_logs=not parsed.no_log_json,
    )
    creator = DocumentCreator(drive=DriveClient(), docs=DocsClient(), logger=logger)
    try:
        document = creator.create(request)
    except DocumentError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(document.to_dict(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    # Load .env early before parsing args
    ensure_dotenv_loaded()
    parsed = build_parser().parse_args(argv)
    if parsed.command == "serve":
        from .mcp import main as serve

        serve()
        return
    sys.exit(run_create(parsed))


if __name__ == "__main__":
    main()
