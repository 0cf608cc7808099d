"""Data models for shared conversations and render requests."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

OutputFormat = Literal["json", "markdown", "text"]


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> Role:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class MessageNode(BaseModel):
    id: str
    role: Role = Role.UNKNOWN
    content_parts: list[str] = []
    created_at: float | None = None
    parent_id: str | None = None
    child_ids: list[str] = []

    @property
    def text(self) -> str:
        return "\n".join(self.content_parts)

    @property
    def is_renderable(self) -> bool:
        """A node renders only if at least one content part has visible text."""
        return any(part.strip() for part in self.content_parts)


class ConversationRecord(BaseModel):
    """Canonical conversation: node mapping plus metadata.

    ``raw`` keeps the wire-form conversation object (``mapping`` plus metadata
    fields) that the JSON output returns as-is.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    created_at: float | None = None
    updated_at: float | None = None
    nodes: dict[str, MessageNode] = {}
    source: Literal["structured", "heuristic"] = "structured"
    raw: dict[str, Any] = {}


class WindowSpec(BaseModel):
    max_messages: int | None = Field(default=None, ge=1, le=1000)
    skip_messages: int | None = Field(default=None, ge=0)
    start_index: int | None = Field(default=None, ge=0)
    end_index: int | None = Field(default=None, ge=0)


class MessageWindow(BaseModel):
    messages: list[MessageNode] = []
    total: int = 0
    skipped: int = 0
    truncated: int = 0

    @property
    def is_elided(self) -> bool:
        return len(self.messages) < self.total


class Candidate(BaseModel):
    role: Role
    content: str


class StructuredPayload(BaseModel):
    kind: Literal["structured"] = "structured"
    conversation: dict[str, Any]


class HeuristicPayload(BaseModel):
    kind: Literal["heuristic"] = "heuristic"
    title: str = ""
    candidates: list[Candidate] = []


ExtractedConversation = Union[StructuredPayload, HeuristicPayload]
