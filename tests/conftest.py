"""Shared fixtures: synthetic share pages and conversations."""

from __future__ import annotations

import json
from typing import Any

import pytest

from chatgpt_share_mcp.models import ConversationRecord, MessageNode, Role
from chatgpt_share_mcp.parser import parse_conversation

# Double-escaped newline as it appears inside the router script source
NL = "\\\\n"
PARAGRAPH_END = NL + NL


def router_script(*literals: str) -> str:
    """A React Router state script holding ``literals`` as quoted strings."""
    padding = "/*" + "a" * 10_050 + "*/"
    body = ", ".join(f'"{literal}"' for literal in literals)
    return f"window.__reactRouterContext = {{}};{padding} window.__state = [{body}];"


def share_page(*scripts: str, title: str = "ChatGPT - カメラ品質の相談") -> str:
    tags = "".join(scripts)
    return f"<html><head><title>{title}</title></head><body>{tags}</body></html>"


def script_tag(content: str, **attrs: str) -> str:
    rendered = "".join(f' {key}="{value}"' for key, value in attrs.items())
    return f"<script{rendered}>{content}</script>"


def next_data_tag(conversation: dict[str, Any]) -> str:
    data = {"props": {"pageProps": {"conversation": conversation}}}
    return script_tag(json.dumps(data), id="__NEXT_DATA__", type="application/json")


@pytest.fixture
def structured_conversation() -> dict[str, Any]:
    return {
        "title": "Barcode scanner quality",
        "create_time": 1700000000,
        "update_time": 1700000600,
        "mapping": {
            "root": {"id": "root", "message": None, "parent": None, "children": ["sys"]},
            "sys": {
                "id": "sys",
                "message": {
                    "author": {"role": "system"},
                    "content": {"content_type": "text", "parts": [""]},
                    "create_time": None,
                },
                "parent": "root",
                "children": ["u1"],
            },
            "u1": {
                "id": "u1",
                "message": {
                    "author": {"role": "user"},
                    "content": {"content_type": "text", "parts": ["How do I grade camera quality?"]},
                    "create_time": 1700000100,
                },
                "parent": "sys",
                "children": ["a1", "ghost"],
            },
            "a1": {
                "id": "a1",
                "message": {
                    "author": {"role": "assistant"},
                    "content": {
                        "content_type": "text",
                        "parts": ["Measure sharpness.", {"asset_pointer": "file-1"}, "Then brightness."],
                    },
                    "create_time": 1700000200,
                },
                "parent": "u1",
                "children": [],
            },
        },
    }


def make_record(count: int, **kwargs: Any) -> ConversationRecord:
    """A linear record of ``count`` alternating user/assistant messages."""
    nodes = {}
    for i in range(count):
        node_id = f"m{i}"
        nodes[node_id] = MessageNode(
            id=node_id,
            role=Role.USER if i % 2 == 0 else Role.ASSISTANT,
            content_parts=[f"message {i}"],
            created_at=1000.0 + i,
            parent_id=f"m{i - 1}" if i > 0 else None,
            child_ids=[f"m{i + 1}"] if i < count - 1 else [],
        )
    kwargs.setdefault("raw", {"mapping": {}})
    return ConversationRecord(nodes=nodes, **kwargs)


@pytest.fixture
def structured_record(structured_conversation: dict[str, Any]) -> ConversationRecord:
    return parse_conversation(structured_conversation)
