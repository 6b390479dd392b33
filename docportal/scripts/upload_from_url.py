"""
Remote document ingestion script.

Asks the Document Engine to fetch a document from a URL, overwriting any
existing engine document with the same id. No metadata row is created:
the document is reachable through the engine only.

Dependencies: argparse, python-dotenv, docportal.boundary.document_engine
System role: Operator tool for seeding the Document Engine

Usage:
    python -m docportal.scripts.upload_from_url [document_id] url [title]
    python -m docportal.scripts.upload_from_url url [title]
"""

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Sequence

from dotenv import load_dotenv

from docportal.boundary.document_engine.client import DocumentEngineClient, UrlUploadOptions
from docportal.configs.document_engine import DocumentEngineSettings
from docportal.core.exceptions import DocPortalException, DocumentEngineError
from docportal.observability.logger import configure_logging

logger = logging.getLogger(__name__)

USAGE = """Usage: python -m docportal.scripts.upload_from_url [document-id] [document-url] [title]
       python -m docportal.scripts.upload_from_url [document-url] [title]
       python -m docportal.scripts.upload_from_url [document-url]"""


@dataclass
class UploadTarget:
    """Resolved ingestion arguments."""

    document_id: str | None
    url: str | None
    title: str | None


def resolve_arguments(values: Sequence[str], env: Mapping[str, str]) -> UploadTarget:
    """
    Resolve positional arguments, falling back to DOCUMENT_* variables.

    Three values are (id, url, title). Two values are (url, title) when the
    first looks like a URL, otherwise (id, url). One value is the url.
    """
    env_id = env.get("DOCUMENT_ID") or None
    env_url = env.get("DOCUMENT_URL") or None
    env_title = env.get("DOCUMENT_TITLE") or None

    if len(values) >= 3:
        return UploadTarget(values[0] or env_id, values[1] or env_url, values[2] or env_title)
    if len(values) == 2:
        if values[0].startswith("http"):
            return UploadTarget(env_id, values[0] or env_url, values[1] or env_title)
        return UploadTarget(values[0] or env_id, values[1] or env_url, env_title)
    if len(values) == 1:
        return UploadTarget(env_id, values[0] or env_url, env_title)
    return UploadTarget(env_id, env_url, env_title)


async def upload(target: UploadTarget, settings: DocumentEngineSettings) -> str:
    """
    Ingest ``target.url`` into the engine.

    Returns:
        str: Engine document id
    """
    client = DocumentEngineClient(settings, require_signing_key=False)
    try:
        return await client.upload_from_url(
            UrlUploadOptions(url=target.url or "", document_id=target.document_id, title=target.title)
        )
    finally:
        await client.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m docportal.scripts.upload_from_url",
        description="Upload a document to the Document Engine from a URL without persisting metadata",
    )
    parser.add_argument(
        "values",
        nargs="*",
        metavar="ARG",
        help="[document-id] document-url [title]",
    )
    return parser


def main(argv: Sequence[str] | None = None, env: Mapping[str, str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    target = resolve_arguments(args.values, os.environ if env is None else env)

    if not target.url:
        print("Error: Document URL is required", file=sys.stderr)
        print(USAGE)
        return 1

    configure_logging("INFO")
    print(f"Uploading document from URL: {target.url}")
    print(f"Document ID: {target.document_id or '(server will generate)'}")
    if target.title:
        print(f"Title: {target.title}")

    try:
        document_id = asyncio.run(upload(target, DocumentEngineSettings()))
    except DocumentEngineError as e:
        print("Error uploading document:", file=sys.stderr)
        print(f"Status: {e.status_code}", file=sys.stderr)
        if e.response_text:
            print(f"Response: {e.response_text}", file=sys.stderr)
        return 1
    except DocPortalException as e:
        print(f"Error uploading document: {e}", file=sys.stderr)
        return 1

    print("Document uploaded successfully!")
    print(f"Document ID: {document_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
