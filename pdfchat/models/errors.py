"""Error taxonomy shared by the relay, the conversation and the extractor.

Every failure is converted to a ``{error, details}`` payload at the boundary
nearest its origin. ``status_code`` is only meaningful on the HTTP side.
"""

from fastapi import status


class ChatError(Exception):
    """Base class for user-facing chat failures.

    Attributes:
        message: Short, user-readable summary.
        details: Diagnostic text (never contains credentials).
        status_code: HTTP status used when surfaced by the API.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __reduce__(self) -> tuple:
        # Rebuilt with details when raised in a worker process
        return type(self), (self.message, self.details)

    def to_payload(self) -> dict[str, str]:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(ChatError):
    """Provider credential missing or unusable."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidInput(ChatError):
    """Malformed request body."""

    status_code = status.HTTP_400_BAD_REQUEST


class ProviderError(ChatError):
    """Completion call failed, including running past the time budget."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ExtractionError(ChatError):
    """PDF text extraction failed."""

    status_code = status.HTTP_400_BAD_REQUEST


class RelayError(ChatError):
    """Relay call failed as seen from the client side."""

    def __init__(
        self,
        message: str,
        details: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, details)
        if status_code is not None:
            self.status_code = status_code

    def __reduce__(self) -> tuple:
        return type(self), (self.message, self.details, self.status_code)


class DocumentRejectedError(ChatError):
    """Attached document has no usable text."""

    status_code = status.HTTP_400_BAD_REQUEST
