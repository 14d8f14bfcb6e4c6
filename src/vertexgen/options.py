"""Per-call transport options."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

HeadersInput = Mapping[str, str] | Sequence[tuple[str, str]]


@dataclass(frozen=True)
class RequestOptions:
    """Optional transport tuning for a single call.

    Line-break checks on ``api_client`` and ``custom_headers`` happen when the
    request is built, so a bad value fails before any network activity.
    """

    #: Caller-side deadline in milliseconds; ignored when *None* or negative.
    timeout: float | None = None
    #: Free-form client identifier appended to ``X-Goog-Api-Client``.
    api_client: str | None = None
    #: Extra headers merged into the outgoing request.
    custom_headers: HeadersInput | None = None

    def timeout_seconds(self) -> float | None:
        """Return the deadline in seconds, or *None* when no deadline applies."""
        if self.timeout is None or self.timeout < 0:
            return None
        return self.timeout / 1000
