"""Small HTTP-related constants shared across vertexgen.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

# Suffix of the SDK-managed regional hosts; also the internal endpoint check.
API_BASE_PATH = "aiplatform.googleapis.com"

AUTHORIZATION_HEADER = "Authorization"
CONTENT_TYPE_HEADER = "Content-Type"
USER_AGENT_HEADER = "User-Agent"
API_CLIENT_HEADER = "X-Goog-Api-Client"

# Headers reconciled from a single authoritative source after merging.
RESERVED_HEADERS: tuple[str, ...] = (AUTHORIZATION_HEADER, CONTENT_TYPE_HEADER)

# Status codes flagged retryable on surfaced errors. Nothing here retries.
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 409, 429, 500, 502, 503, 504})
