"""Render a conversation as Markdown, plain text or a JSON envelope."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Callable

from .errors import UnknownFormatError
from .models import ConversationRecord, MessageWindow, WindowSpec
from .parser import message_chain
from .window import select_window


def _format_iso(ts: float) -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _elision_notice(window: MessageWindow) -> str | None:
    if not window.is_elided:
        return None
    skipped, truncated = window.skipped, window.truncated
    if skipped > 0 and truncated > 0:
        return f"... ({skipped} messages skipped before, {truncated} messages truncated after)"
    if skipped > 0:
        return f"... ({skipped} messages skipped before)"
    if truncated > 0:
        return f"... ({truncated} more messages truncated)"
    return None


def format_markdown(
    record: ConversationRecord, include_metadata: bool, window: MessageWindow
) -> str:
    lines: list[str] = []

    if include_metadata:
        lines.append("# ChatGPT Conversation\n\n")
        if record.title:
            lines.append(f"**Title:** {record.title}\n\n")
        if record.created_at:
            lines.append(f"**Created:** {_format_iso(record.created_at)}\n\n")
        if record.updated_at:
            lines.append(f"**Updated:** {_format_iso(record.updated_at)}\n\n")
        lines.append("---\n\n")

    for msg in window.messages:
        role = msg.role.value.capitalize()
        lines.append(f"## {role}\n\n{msg.text}\n\n")

    notice = _elision_notice(window)
    if notice:
        lines.append(f"\n*{notice}*\n")

    return "".join(lines)


def format_text(
    record: ConversationRecord, include_metadata: bool, window: MessageWindow
) -> str:
    lines: list[str] = []

    if include_metadata:
        lines.append("ChatGPT Conversation\n")
        lines.append("=====================\n\n")
        if record.title:
            lines.append(f"Title: {record.title}\n")
        if record.created_at:
            lines.append(f"Created: {_format_iso(record.created_at)}\n")
        if record.updated_at:
            lines.append(f"Updated: {_format_iso(record.updated_at)}\n")
        lines.append("\n")

    for msg in window.messages:
        lines.append(f"{msg.role.value.upper()}:\n{msg.text}\n\n")

    notice = _elision_notice(window)
    if notice:
        lines.append(f"\n{notice}\n")

    return "".join(lines)


def format_json(record: ConversationRecord) -> str:
    """Full conversation plus a metadata summary; range options do not apply."""
    raw = record.raw
    mapping = raw.get("mapping")
    result = {
        "conversation": raw,
        "metadata": {
            "title": raw.get("title"),
            "create_time": raw.get("create_time"),
            "update_time": raw.get("update_time"),
            "message_count": len(mapping) if isinstance(mapping, dict) else 0,
        },
    }
    return json.dumps(result, indent=2, ensure_ascii=False)


WindowedFormatter = Callable[[ConversationRecord, bool, MessageWindow], str]

WINDOWED_FORMATTERS: dict[str, WindowedFormatter] = {
    "markdown": format_markdown,
    "text": format_text,
}


def render(
    record: ConversationRecord,
    output_format: str,
    include_metadata: bool = True,
    spec: WindowSpec | None = None,
) -> str:
    if output_format == "json":
        return format_json(record)

    formatter = WINDOWED_FORMATTERS.get(output_format)
    if formatter is None:
        raise UnknownFormatError(output_format)

    window = select_window(message_chain(record), spec or WindowSpec())
    return formatter(record, include_metadata, window)
