"""Exceptions raised while fetching and rendering a shared conversation.

Every error carries a human-readable message; the pipeline turns it into an
``Error: <message>`` payload instead of letting it reach the MCP transport.
"""

from __future__ import annotations

from .config import CONVERSATION_URL_MARKERS


class ShareChatError(Exception):
    """Base class for all pipeline errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidUrlError(ShareChatError):
    """The URL does not point at a shared ChatGPT conversation."""

    def __init__(self, url: str) -> None:
        super().__init__(
            "Invalid ChatGPT shared conversation URL. URL should be in format: "
            "https://chatgpt.com/c/<conversation-id> or "
            "https://chatgpt.com/share/<conversation-id>"
        )
        self.url = url
        self.accepted_markers = CONVERSATION_URL_MARKERS


class FetchError(ShareChatError):
    """Network failure, timeout or non-2xx response."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to fetch conversation: {detail}")
        self.detail = detail


class NoConversationDataError(ShareChatError):
    """Neither the structured nor the heuristic extractor found anything."""

    def __init__(self) -> None:
        super().__init__(
            "Failed to fetch conversation: No conversation data found in either "
            "__NEXT_DATA__ or React Router format"
        )


class UnknownFormatError(ShareChatError):
    def __init__(self, output_format: str) -> None:
        super().__init__(f"Unknown format: {output_format}")
        self.output_format = output_format
