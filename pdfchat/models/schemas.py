from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class StreamState(str, Enum):
    """Conversation-level streaming flag."""

    IDLE = "idle"
    STREAMING = "streaming"


class ChatMessage(BaseModel):
    """A role-tagged message as sent over the wire.

    Attributes:
        role: The speaker identifier (user, assistant, or system).
        content: The message text.
    """

    model_config = ConfigDict(extra="ignore")

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Request payload for ``POST /api/chat``.

    Attributes:
        messages: Conversation so far, oldest first.
        pdf_content: Extracted document text, sent as ``pdfContent``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    messages: list[ChatMessage]
    pdf_content: str | None = Field(default=None, alias="pdfContent")


class ErrorResponse(BaseModel):
    """Structured failure body returned by the relay."""

    error: str
    details: str | None = None


class Message(BaseModel):
    """A message stored in a conversation log.

    Only the trailing assistant message has its ``content`` extended, while
    a stream is in flight.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_chat_message(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)


class AttachedDocument(BaseModel):
    """Extracted text currently grounding the conversation.

    Attributes:
        filename: Original file name shown to the user.
        text: Extracted plain text.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    text: str
