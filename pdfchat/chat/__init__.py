"""Client-side conversation handling.

Responsibilities:
    - Message log with append-only ordering
    - Idle/streaming state machine with cancellation
    - Attached document state and its announcements
    - HTTP client for the relay's data stream

Knows nothing about rendering; the UI drives it.
"""

from pdfchat.chat.client import RelayClient
from pdfchat.chat.conversation import Conversation

__all__ = ["Conversation", "RelayClient"]
