"""Line-oriented data stream encoding used by ``/api/chat``.

Each line is ``<type>:<json>\\n``:

    0:"Hel"                         text fragment
    3:"Request timed out"           error
    d:{"finishReason":"stop"}       finish

The format is shared by the relay (encoding) and the chat client (decoding).
"""

import json
from typing import Any

MEDIA_TYPE = "text/plain; charset=utf-8"
STREAM_HEADERS = {"x-vercel-ai-data-stream": "v1"}

TEXT_PART = "0"
ERROR_PART = "3"
FINISH_PART = "d"


def _encode(part_type: str, value: Any) -> str:
    # ASCII-only JSON keeps U+2028, U+2029 and U+0085 escaped within one line
    return f"{part_type}:{json.dumps(value)}\n"


def encode_text(text: str) -> str:
    return _encode(TEXT_PART, text)


def encode_error(message: str) -> str:
    return _encode(ERROR_PART, message)


def encode_finish(reason: str = "stop") -> str:
    return _encode(FINISH_PART, {"finishReason": reason})


def decode_line(line: str) -> tuple[str, Any] | None:
    """Split one stream line into ``(part_type, value)``.

    Returns:
        None for blank lines.

    Raises:
        ValueError: If the line is not a valid part.
    """
    line = line.strip()
    if not line:
        return None
    part_type, sep, payload = line.partition(":")
    if not sep:
        raise ValueError(f"Malformed stream part: {line[:40]!r}")
    return part_type, json.loads(payload)
