"""Fetch → extract → normalize → render pipeline for one tool call."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .config import CONVERSATION_URL_MARKERS
from .errors import InvalidUrlError, NoConversationDataError, ShareChatError
from .extractor import extract_conversation
from .fetcher import fetch_page
from .formatters import render
from .models import ConversationRecord, WindowSpec
from .parser import normalize

logger = logging.getLogger(__name__)


def validate_url(url: str) -> None:
    if not any(marker in url for marker in CONVERSATION_URL_MARKERS):
        raise InvalidUrlError(url)


def load_conversation(
    url: str,
    client: httpx.Client | None = None,
    log: logging.Logger | None = None,
    base_time: int | None = None,
) -> ConversationRecord:
    """Fetch a share page and return its conversation as a record."""
    log = log or logger
    validate_url(url)

    log.info("Fetching conversation from: %s", url)
    html = fetch_page(url, client=client)

    payload = extract_conversation(html, log)
    if payload is None:
        raise NoConversationDataError()

    record = normalize(payload, base_time=base_time)
    log.info(
        "Loaded %s conversation with %d nodes", record.source, len(record.nodes)
    )
    return record


def fetch_conversation_text(
    url: str,
    output_format: str = "markdown",
    include_metadata: bool = True,
    max_messages: int | None = None,
    skip_messages: int | None = None,
    start_index: int | None = None,
    end_index: int | None = None,
    client: httpx.Client | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Run the whole pipeline and return the rendered payload.

    Failures never raise: they come back as ``Error: <message>``.
    """
    log = log or logger
    try:
        spec = WindowSpec(
            max_messages=max_messages,
            skip_messages=skip_messages,
            start_index=start_index,
            end_index=end_index,
        )
        record = load_conversation(url, client=client, log=log)
        return render(record, output_format, include_metadata, spec)
    except ShareChatError as e:
        log.error("Error fetching conversation: %s", e.message)
        return f"Error: {e.message}"
    except ValidationError as e:
        log.error("Invalid range options: %s", e)
        return f"Error: Invalid range options: {e}"
    except Exception as e:
        log.exception("Unexpected error while processing %s", url)
        return f"Error: {str(e) or 'Unknown error occurred'}"
