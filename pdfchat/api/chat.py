"""Chat relay endpoint.

Validates the conversation, prepends the system prompt and streams the
provider's output back as a data stream.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from pdfchat.agent.prompts import compose_messages
from pdfchat.agent.relay import PROVIDER_FAILED, RelayService, get_relay_service
from pdfchat.api.data_stream import (
    MEDIA_TYPE,
    STREAM_HEADERS,
    encode_error,
    encode_finish,
    encode_text,
)
from pdfchat.models.errors import ChatError, InvalidInput, ProviderError
from pdfchat.models.schemas import ChatRequest, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

INVALID_MESSAGES = "Invalid messages format"


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}"


async def _parse_chat_request(request: Request) -> ChatRequest:
    """Read and validate the request body.

    Raises:
        InvalidInput: If the body is not JSON, ``messages`` is absent or not
            an array, or an entry is malformed.
    """
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidInput(INVALID_MESSAGES, "Request body must be a JSON object") from e

    if not isinstance(body, dict) or not isinstance(body.get("messages"), list):
        raise InvalidInput(INVALID_MESSAGES, "'messages' must be an array")

    try:
        return ChatRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidInput(INVALID_MESSAGES, _describe_validation_error(e)) from e


async def _relay_stream(
    first_chunk: str | None,
    stream: AsyncGenerator[str],
) -> AsyncGenerator[str]:
    """Encode provider chunks as data stream parts.

    Failures after the first chunk can no longer change the status code, so
    they are sent as an error part followed by a finish part.
    """
    if first_chunk is None:
        yield encode_finish()
        return

    yield encode_text(first_chunk)
    try:
        async for chunk in stream:
            yield encode_text(chunk)
    except ProviderError as e:
        logger.warning(f"Stream aborted by provider: {e.details}")
        yield encode_error(e.details or e.message)
        yield encode_finish("error")
        return

    yield encode_finish()


@router.post(
    "/chat",
    responses={
        400: {"model": ErrorResponse, "description": "Malformed messages"},
        500: {"model": ErrorResponse, "description": "Configuration or provider failure"},
    },
)
async def chat(
    request: Request,
    relay: RelayService = Depends(get_relay_service),
) -> StreamingResponse:
    """Relay a conversation to the completion provider.

    Request body: ``{"messages": [{"role", "content"}, ...], "pdfContent"?: str}``.

    Returns:
        Incremental data stream of the assistant's output.

    Raises:
        400: ``messages`` absent or malformed.
        500: Missing credential or provider failure before any output.
    """
    chat_request = await _parse_chat_request(request)

    try:
        composed = compose_messages(
            chat_request.messages,
            chat_request.pdf_content,
            history_limit=relay.config.history_limit,
        )
        stream = relay.stream_completion(composed)
        # Pull the first chunk so early provider failures still map to a 500
        first_chunk = await anext(stream, None)
    except ChatError:
        raise
    except Exception as e:
        logger.exception("Error in chat API")
        raise ProviderError(PROVIDER_FAILED, str(e)) from e

    logger.info(
        f"Streaming reply for {len(chat_request.messages)} messages "
        f"(document attached: {bool(chat_request.pdf_content)})"
    )
    return StreamingResponse(
        _relay_stream(first_chunk, stream),
        media_type=MEDIA_TYPE,
        headers=STREAM_HEADERS,
    )
