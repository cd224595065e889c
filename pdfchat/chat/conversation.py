"""Client-side conversation state.

One ``Conversation`` owns the message log, the streaming flag and the
attached document for a single chat. It is independent of the view: the
NiceGUI page only calls its methods and redraws on change.
"""

import asyncio
import logging
import math
from collections.abc import AsyncIterator, Callable, Sequence

from pdfchat.chat.client import RelayClient
from pdfchat.models.errors import ChatError, DocumentRejectedError
from pdfchat.models.schemas import AttachedDocument, ChatMessage, Message, Role, StreamState

logger = logging.getLogger(__name__)

RelayFn = Callable[[Sequence[ChatMessage], str | None], AsyncIterator[str]]

ATTACHED_NOTICE = (
    '📄 PDF "{filename}" has been uploaded successfully! I can now answer questions '
    "about its content. The document contains {size_k}k characters of text."
)
DETACHED_NOTICE = (
    "📄 PDF has been removed. You can now have a general conversation "
    "or upload a new PDF document."
)


def _size_in_thousands(text: str) -> int:
    # Half-up rounding
    return math.floor(len(text) / 1000 + 0.5)


class Conversation:
    """Append-only chat log with an idle/streaming state machine.

    Args:
        relay: Callable streaming reply fragments for ``(messages, document_text)``.
               Defaults to ``RelayClient().stream``.
        on_change: Called after every mutation, including each streamed chunk.
    """

    def __init__(
        self,
        relay: RelayFn | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._relay = relay or RelayClient().stream
        self._on_change = on_change
        self._messages: list[Message] = []
        self._document: AttachedDocument | None = None
        self._state = StreamState.IDLE
        self._task: asyncio.Task[None] | None = None

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def document(self) -> AttachedDocument | None:
        return self._document

    @property
    def document_text(self) -> str | None:
        return self._document.text if self._document else None

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def is_streaming(self) -> bool:
        return self._state is StreamState.STREAMING

    def history(self) -> list[ChatMessage]:
        """The log as ``{role, content}`` pairs, in send order."""
        return [m.to_chat_message() for m in self._messages]

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _append(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self._messages.append(message)
        self._notify()
        return message

    async def submit(self, text: str) -> Message | None:
        """Send a user message and stream the assistant's reply into the log.

        No-op when ``text`` is blank or a stream is already in flight.

        Args:
            text: The user's message.

        Returns:
            The assistant message (possibly partial after a cancel), or None
            when nothing was sent or no output arrived.

        Raises:
            ChatError: If the relay fails. State is back to idle and any
                streamed partial output is kept.
        """
        if not text or not text.strip() or self.is_streaming:
            return None

        self._append(Role.USER, text)
        payload = self.history()
        document_text = self.document_text

        self._state = StreamState.STREAMING
        reply = self._append(Role.ASSISTANT, "")
        self._task = asyncio.create_task(self._pump(reply, payload, document_text))

        try:
            await self._task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.info(f"Stream cancelled after {len(reply.content)} characters")
        except ChatError as e:
            logger.warning(f"Relay failed: {e.message} ({e.details})")
            raise
        finally:
            self._finish(reply)

        return reply if reply.content else None

    async def _pump(
        self,
        reply: Message,
        payload: list[ChatMessage],
        document_text: str | None,
    ) -> None:
        async for chunk in self._relay(payload, document_text):
            reply.content += chunk
            self._notify()

    def _finish(self, reply: Message) -> None:
        if not reply.content and reply in self._messages:
            self._messages.remove(reply)
        self._state = StreamState.IDLE
        self._task = None
        self._notify()

    def cancel(self) -> bool:
        """Abort the in-flight stream, keeping any partial reply.

        Returns:
            True if a stream was cancelled.
        """
        if self._task is None or self._task.done():
            return False
        self._task.cancel()
        return True

    def attach_document(self, filename: str, text: str) -> Message:
        """Attach extracted document text, replacing any previous document.

        Args:
            filename: Original file name.
            text: Extracted plain text.

        Returns:
            The announcement message appended to the log.

        Raises:
            DocumentRejectedError: If a reply is streaming or ``text`` is
                empty after trimming.
        """
        if self.is_streaming:
            raise DocumentRejectedError(
                "Reply in progress",
                "Wait for the current reply to finish before changing the PDF.",
            )
        if not text or not text.strip():
            raise DocumentRejectedError(
                "Empty PDF",
                "The PDF appears to be empty or contains no readable text.",
            )

        self._document = AttachedDocument(filename=filename, text=text)
        logger.info(f"Attached document {filename} ({len(text)} characters)")
        return self._append(
            Role.ASSISTANT,
            ATTACHED_NOTICE.format(filename=filename, size_k=_size_in_thousands(text)),
        )

    def detach_document(self) -> Message | None:
        """Remove the attached document.

        Returns:
            The removal announcement, or None if nothing was attached or a
            reply is streaming.
        """
        if self._document is None or self.is_streaming:
            return None
        logger.info(f"Detached document {self._document.filename}")
        self._document = None
        return self._append(Role.ASSISTANT, DETACHED_NOTICE)

    def clear(self) -> bool:
        """Start over: empty the log and drop the attached document.

        Returns:
            False (and changes nothing) while a stream is in flight.
        """
        if self.is_streaming:
            return False
        self._messages.clear()
        self._document = None
        self._notify()
        return True
