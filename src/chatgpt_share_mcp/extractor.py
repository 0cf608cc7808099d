"""Locate conversation data inside a ChatGPT share page."""

from __future__ import annotations

import json
import logging
from typing import Any

from bs4 import BeautifulSoup

from . import config
from .heuristics import extract_messages, has_cjk_run
from .models import ExtractedConversation, HeuristicPayload, StructuredPayload

logger = logging.getLogger(__name__)


def parse_page(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def page_title(soup: BeautifulSoup) -> str:
    """Document title without the leading "ChatGPT - " label."""
    if soup.title is None:
        return ""
    return soup.title.get_text().replace(config.TITLE_PREFIX, "", 1)


def extract_structured(
    soup: BeautifulSoup, log: logging.Logger | None = None
) -> StructuredPayload | None:
    """Return the ``__NEXT_DATA__`` conversation object, untouched, if present."""
    log = log or logger
    script = soup.select_one(config.NEXT_DATA_SELECTOR)
    if script is None:
        return None

    text = script.string or ""
    if not text:
        return None

    log.info("Using legacy __NEXT_DATA__ method")
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError:
        log.warning("__NEXT_DATA__ is not valid JSON, falling back to script mining")
        return None

    for key in config.NEXT_DATA_PATH:
        if not isinstance(data, dict):
            return None
        data = data.get(key)

    if not data or not isinstance(data, dict):
        log.info("__NEXT_DATA__ holds no conversation")
        return None
    return StructuredPayload(conversation=data)


def is_candidate_script(text: str) -> bool:
    """Large router-state script that appears to contain conversation text."""
    return (
        len(text) > config.MIN_SCRIPT_LENGTH
        and config.ROUTER_CONTEXT_MARKER in text
        and has_cjk_run(text)
    )


def extract_heuristic(
    soup: BeautifulSoup, log: logging.Logger | None = None
) -> HeuristicPayload | None:
    """Mine the first eligible router-state script for messages."""
    log = log or logger
    log.info("Attempting new React Router method")
    try:
        for script in soup.find_all("script"):
            text = script.string or ""
            if not is_candidate_script(text):
                continue

            log.info("Found conversation text in script (%d chars)", len(text))
            candidates = extract_messages(text, log)
            return HeuristicPayload(title=page_title(soup), candidates=candidates)
    except Exception:
        log.warning("Error scanning page scripts", exc_info=True)
    return None


def extract_conversation(
    html: str, log: logging.Logger | None = None
) -> ExtractedConversation | None:
    """Structured payload first, heuristic mining second; ``None`` if neither finds data."""
    log = log or logger
    try:
        soup = parse_page(html)
    except Exception:
        log.warning("Failed to parse page HTML", exc_info=True)
        return None

    payload = extract_structured(soup, log)
    if payload is not None:
        return payload
    return extract_heuristic(soup, log)
