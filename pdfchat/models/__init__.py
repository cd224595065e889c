"""Pydantic models and error types shared across the application.

Provides type safety and validation for the relay endpoint and the
client-side conversation.

Models:
    - ChatMessage: Role-tagged message on the wire
    - ChatRequest: Incoming ``/api/chat`` payload
    - ErrorResponse: ``{error, details}`` failure body
    - Message: Stored conversation entry with id and timestamp
    - AttachedDocument: Extracted PDF text grounding the conversation
"""

from pdfchat.models.errors import (
    ChatError,
    ConfigurationError,
    DocumentRejectedError,
    ExtractionError,
    InvalidInput,
    ProviderError,
    RelayError,
)
from pdfchat.models.schemas import (
    AttachedDocument,
    ChatMessage,
    ChatRequest,
    ErrorResponse,
    Message,
    Role,
    StreamState,
)

__all__ = [
    "AttachedDocument",
    "ChatError",
    "ChatMessage",
    "ChatRequest",
    "ConfigurationError",
    "DocumentRejectedError",
    "ErrorResponse",
    "ExtractionError",
    "InvalidInput",
    "Message",
    "ProviderError",
    "RelayError",
    "Role",
    "StreamState",
]
