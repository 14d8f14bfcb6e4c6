"""Exception hierarchy for vertexgen."""

from __future__ import annotations


class VertexGenError(Exception):
    """Base exception for all vertexgen errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(VertexGenError):
    """Configuration validation or resolution failed."""


class ClientError(VertexGenError):
    """The request was rejected on the client side or with an HTTP 4xx.

    Pre-flight validation failures carry no ``status_code``; they are raised
    before any network activity and must not be retried unchanged.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        """Client errors are never retryable without fixing the input."""
        return False


class GoogleGenerativeAIError(VertexGenError):
    """The API call failed in transport or with a non-4xx error response."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
        retryable: bool | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.retryable = retryable
