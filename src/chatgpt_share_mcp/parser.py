"""Normalize extracted conversation data into a ConversationRecord."""

from __future__ import annotations

import logging
import time
from typing import Any

from .models import (
    Candidate,
    ConversationRecord,
    ExtractedConversation,
    MessageNode,
    Role,
)

logger = logging.getLogger(__name__)


def _extract_parts(content: Any) -> list[str]:
    """Extract text parts from message content, filtering non-strings."""
    if not isinstance(content, dict):
        return []
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, str)]


def _as_epoch(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_node(node_id: str, node: dict[str, Any], known_ids: set[str]) -> MessageNode:
    """Build a MessageNode from one ``mapping`` entry.

    Parent and child references that point outside the mapping are dropped.
    """
    msg_data = node.get("message") or {}
    author = msg_data.get("author") or {}

    parent = node.get("parent")
    children = node.get("children") or []

    return MessageNode(
        id=node_id,
        role=Role.parse(author.get("role")),
        content_parts=_extract_parts(msg_data.get("content")),
        created_at=_as_epoch(msg_data.get("create_time")),
        parent_id=parent if parent in known_ids else None,
        child_ids=[child for child in children if child in known_ids],
    )


def parse_conversation(conv: dict[str, Any], source: str = "structured") -> ConversationRecord:
    """Parse a wire-form conversation (``mapping`` plus metadata) into a record."""
    mapping = conv.get("mapping") or {}
    if not isinstance(mapping, dict):
        logger.warning("Conversation mapping is not an object, ignoring it")
        mapping = {}

    known_ids = set(mapping)
    nodes: dict[str, MessageNode] = {}
    for node_id, node in mapping.items():
        if not isinstance(node, dict):
            logger.debug("Skipping malformed node %s", node_id)
            continue
        nodes[node_id] = parse_node(node_id, node, known_ids)

    title = conv.get("title")
    return ConversationRecord(
        title=title if isinstance(title, str) else None,
        created_at=_as_epoch(conv.get("create_time")),
        updated_at=_as_epoch(conv.get("update_time")),
        nodes=nodes,
        source=source,
        raw=conv,
    )


def build_heuristic_conversation(
    title: str, candidates: list[Candidate], base_time: int | None = None
) -> dict[str, Any]:
    """Lay mined candidates out as a linear ``mapping`` document.

    Ids are ``msg_0 .. msg_n``; each message is one second after the previous
    one so the creation time reproduces discovery order.
    """
    if base_time is None:
        base_time = int(time.time())

    mapping: dict[str, Any] = {}
    last = len(candidates) - 1
    for index, candidate in enumerate(candidates):
        message_id = f"msg_{index}"
        mapping[message_id] = {
            "id": message_id,
            "message": {
                "id": message_id,
                "author": {"role": candidate.role.value},
                "content": {"content_type": "text", "parts": [candidate.content]},
                "create_time": base_time + index,
            },
            "parent": f"msg_{index - 1}" if index > 0 else None,
            "children": [f"msg_{index + 1}"] if index < last else [],
        }

    return {
        "title": title,
        "create_time": base_time,
        "update_time": base_time,
        "mapping": mapping,
    }


def normalize(payload: ExtractedConversation, base_time: int | None = None) -> ConversationRecord:
    if payload.kind == "structured":
        return parse_conversation(payload.conversation, source="structured")
    conv = build_heuristic_conversation(payload.title, payload.candidates, base_time)
    return parse_conversation(conv, source="heuristic")


def message_chain(record: ConversationRecord) -> list[MessageNode]:
    """Renderable nodes ordered by creation time (missing times sort first)."""
    renderable = [node for node in record.nodes.values() if node.is_renderable]
    return sorted(renderable, key=lambda node: node.created_at or 0.0)
