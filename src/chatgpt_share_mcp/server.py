"""FastMCP server exposing the shared-conversation fetch tool."""

from __future__ import annotations

import logging
import sys
from typing import Annotated, Literal

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from .config import LOG_LEVEL
from .pipeline import fetch_conversation_text

# Log to stderr only, stdout is the MCP JSON-RPC transport
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)

logger = logging.getLogger("chatgpt_share_mcp")

mcp = FastMCP(
    "chatgpt-share-mcp",
    instructions=(
        "Read ChatGPT conversations from their share links. "
        "Use fetch-chatgpt-conversation with a https://chatgpt.com/share/<id> "
        "or https://chatgpt.com/c/<id> URL. For long conversations, page through "
        "them with max_messages and skip_messages, or start_index and end_index."
    ),
)


@mcp.tool(name="fetch-chatgpt-conversation")
def fetch_chatgpt_conversation(
    url: Annotated[
        str,
        Field(
            description=(
                "ChatGPT shared conversation URL (e.g., "
                "https://chatgpt.com/c/686cc57f-feb0-800c-8d46-6f8374ad59e4 or "
                "https://chatgpt.com/share/686cc8c4-d56c-800c-a558-5372306bfd77)"
            )
        ),
    ],
    format: Annotated[
        Literal["json", "markdown", "text"],
        Field(description="Output format: json (raw data), markdown (formatted), or text (plain text)"),
    ] = "markdown",
    include_metadata: Annotated[
        bool,
        Field(description="Include conversation metadata (title, creation date, etc.)"),
    ] = True,
    max_messages: Annotated[
        int | None,
        Field(ge=1, le=1000, description="Maximum number of messages to return (for large conversations)"),
    ] = None,
    skip_messages: Annotated[
        int | None,
        Field(ge=0, description="Number of messages to skip from the beginning (for pagination)"),
    ] = None,
    start_index: Annotated[
        int | None,
        Field(
            ge=0,
            description="Start index for message range (0-based, overrides skip_messages if provided)",
        ),
    ] = None,
    end_index: Annotated[
        int | None,
        Field(
            ge=0,
            description="End index for message range (0-based, exclusive, overrides max_messages if provided)",
        ),
    ] = None,
) -> str:
    """Fetch a shared ChatGPT conversation and render it.

    Returns Markdown or plain text for the selected message range, or a JSON
    document with the full conversation and a metadata summary. Errors are
    returned as text starting with "Error:".
    """
    return fetch_conversation_text(
        url,
        output_format=format,
        include_metadata=include_metadata,
        max_messages=max_messages,
        skip_messages=skip_messages,
        start_index=start_index,
        end_index=end_index,
        log=logger,
    )
