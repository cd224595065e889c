"""HTTP client for the chat relay.

Posts the conversation to ``/api/chat`` and decodes the data stream into
plain text fragments.
"""

import logging
import os
from collections.abc import AsyncGenerator, Sequence

import httpx

from pdfchat.api.data_stream import ERROR_PART, FINISH_PART, TEXT_PART, decode_line
from pdfchat.models.errors import RelayError
from pdfchat.models.schemas import ChatMessage

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


def _error_from_response(response: httpx.Response) -> RelayError:
    """Build a RelayError from a non-2xx ``{error, details}`` body."""
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}
    return RelayError(
        data.get("error") or f"HTTP {response.status_code}",
        data.get("details"),
        status_code=response.status_code,
    )


class RelayClient:
    """Streams assistant replies from the relay endpoint.

    Args:
        base_url: Relay server root URL.
        timeout: Network timeout in seconds.
        transport: Optional httpx transport (e.g. ``ASGITransport`` in tests).
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def stream(
        self,
        messages: Sequence[ChatMessage],
        document_text: str | None = None,
    ) -> AsyncGenerator[str]:
        """Send the conversation and yield reply fragments as they arrive.

        Raises:
            RelayError: On HTTP errors, connection failures, error parts or
                malformed stream data.
        """
        payload = {
            "messages": [m.model_dump(mode="json") for m in messages],
            "pdfContent": document_text,
        }
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                async with client.stream("POST", "/api/chat", json=payload) as response:
                    if response.is_error:
                        await response.aread()
                        raise _error_from_response(response)

                    async for line in response.aiter_lines():
                        try:
                            part = decode_line(line)
                        except ValueError as e:
                            raise RelayError("Malformed response stream", str(e)) from e
                        if part is None:
                            continue
                        part_type, value = part
                        if part_type == TEXT_PART:
                            yield value
                        elif part_type == ERROR_PART:
                            raise RelayError("Failed to process your request", str(value))
                        elif part_type == FINISH_PART:
                            return
            except httpx.RequestError as e:
                logger.warning(f"Relay connection failed: {e}")
                raise RelayError("Connection failed", str(e)) from e
