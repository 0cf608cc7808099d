"""Tests for the MCP tool registration."""

import asyncio

from chatgpt_share_mcp.server import fetch_chatgpt_conversation, mcp


def test_tool_is_registered_with_arguments() -> None:
    tools = asyncio.run(mcp.list_tools())
    tool = next(t for t in tools if t.name == "fetch-chatgpt-conversation")

    assert set(tool.inputSchema["properties"]) == {
        "url",
        "format",
        "include_metadata",
        "max_messages",
        "skip_messages",
        "start_index",
        "end_index",
    }
    assert tool.inputSchema["required"] == ["url"]


def test_tool_returns_error_payload_for_bad_url() -> None:
    result = fetch_chatgpt_conversation("https://example.com/share/abc")
    assert result.startswith("Error: Invalid ChatGPT shared conversation URL.")
