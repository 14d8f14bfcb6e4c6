"""Outbound request assembly: endpoint, headers, body and deadline.

Header merge order:

1. Reject line breaks and non Latin-1 text in ``api_client`` and in custom
   header names/values.
2. Start from the SDK-computed ("necessary") headers.
3. Append every custom header.
4. Append ``api_client`` to ``X-Goog-Api-Client``.
5. Overwrite ``Authorization`` and ``Content-Type`` from the golden source:
   the necessary headers for SDK-managed hosts, the custom headers for any
   other host.
6. Collapse repeated names into one value, keeping the first-seen casing.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import logging
from typing import Any

import httpx
from pydantic import BaseModel

from vertexgen._http import (
    API_BASE_PATH,
    API_CLIENT_HEADER,
    AUTHORIZATION_HEADER,
    CONTENT_TYPE_HEADER,
    RESERVED_HEADERS,
    USER_AGENT_HEADER,
)
from vertexgen.constants import STREAMING_GENERATE_CONTENT_METHOD, USER_AGENT
from vertexgen.errors import ClientError
from vertexgen.options import RequestOptions
from vertexgen.types import ApiModel

log = logging.getLogger(__name__)

_API_CLIENT_LINE_BREAK_MESSAGE = (
    "Found line break in api_client request option field, "
    "please remove the line break."
)
_CUSTOM_HEADER_LINE_BREAK_MESSAGE = (
    "Found line break in custom headers, please remove the line break."
)
_API_CLIENT_ENCODING_MESSAGE = (
    "Found non Latin-1 character in api_client request option field."
)
_CUSTOM_HEADER_ENCODING_MESSAGE = "Found non Latin-1 character in custom headers."

_HEADER_ENCODING = "latin-1"


def resolve_base_endpoint(region: str, api_endpoint: str | None = None) -> str:
    """Return the host to call: the explicit override or the regional host."""
    if api_endpoint is None:
        return f"{region}-{API_BASE_PATH}"
    return api_endpoint


def build_url(
    base_endpoint: str,
    *,
    resource_path: str,
    resource_method: str,
    api_version: str = "v1",
) -> str:
    """Return the full request URL, in SSE mode for streaming calls."""
    url = f"https://{base_endpoint}/{api_version}/{resource_path}:{resource_method}"
    if resource_method == STREAMING_GENERATE_CONTENT_METHOD:
        url += "?alt=sse"
    return url


def is_internal_endpoint(base_endpoint: str) -> bool:
    """Whether *base_endpoint* is an SDK-managed host (plain suffix match)."""
    return base_endpoint.endswith(API_BASE_PATH)


def select_golden_headers(
    is_internal: bool,
    necessary: httpx.Headers,
    custom: httpx.Headers,
) -> httpx.Headers:
    """Return the header set whose reserved headers win after merging."""
    return necessary if is_internal else custom


def necessary_headers(token: str | None) -> httpx.Headers:
    """Return the headers the SDK always sends.

    ``Authorization`` is omitted when there is no token so a caller-supplied
    value is not clobbered by an empty credential.
    """
    headers = httpx.Headers(
        {CONTENT_TYPE_HEADER: "application/json", USER_AGENT_HEADER: USER_AGENT}
    )
    if token is not None:
        headers[AUTHORIZATION_HEADER] = f"Bearer {token}"
    return headers


def build_headers(
    *,
    base_endpoint: str,
    token: str | None,
    request_options: RequestOptions | None = None,
) -> httpx.Headers:
    """Merge necessary, custom and client-identifier headers.

    Header text is encoded as Latin-1, the widest set fetch-style clients
    accept. Names keep the casing they were first given with.

    Raises:
        ClientError: If ``api_client`` or a custom header contains ``\\n`` or
            ``\\r``, or a character outside Latin-1.
    """
    options = request_options or RequestOptions()
    api_client = options.api_client
    if api_client is not None:
        if _has_line_break(api_client):
            raise ClientError(_API_CLIENT_LINE_BREAK_MESSAGE)
        if not _is_latin1(api_client):
            raise ClientError(_API_CLIENT_ENCODING_MESSAGE)

    try:
        custom = httpx.Headers(options.custom_headers, encoding=_HEADER_ENCODING)
    except UnicodeEncodeError as e:
        raise ClientError(_CUSTOM_HEADER_ENCODING_MESSAGE) from e
    for name, value in custom.multi_items():
        if _has_line_break(name) or _has_line_break(value):
            raise ClientError(_CUSTOM_HEADER_LINE_BREAK_MESSAGE)

    necessary = necessary_headers(token)
    items: list[tuple[str | bytes, str | bytes]] = [*necessary.raw, *custom.raw]
    if api_client is not None:
        items.append((API_CLIENT_HEADER, api_client))
    merged = httpx.Headers(items, encoding=_HEADER_ENCODING)

    golden = select_golden_headers(
        is_internal_endpoint(base_endpoint), necessary, custom
    )
    for name in RESERVED_HEADERS:
        value = golden.get(name)
        if value is not None:
            merged[name] = value

    # Collapse repeated names into one comma-joined value, first-seen casing.
    names: dict[str, str] = {}
    for raw_name, _ in merged.raw:
        name = raw_name.decode(_HEADER_ENCODING)
        names.setdefault(name.lower(), name)
    return httpx.Headers(
        {name: merged[name] for name in names.values()}, encoding=_HEADER_ENCODING
    )


async def post_request(
    *,
    region: str,
    resource_path: str,
    resource_method: str,
    token: str | None,
    data: BaseModel | Mapping[str, Any],
    api_endpoint: str | None = None,
    request_options: RequestOptions | None = None,
    api_version: str = "v1",
    client: httpx.AsyncClient | None = None,
) -> httpx.Response:
    """Send one POST to the Vertex AI REST API and return the raw response.

    Validation failures raise before any network activity. Transport errors
    and the ``TimeoutError`` of an expired deadline propagate unchanged; the
    response is not inspected and nothing is retried.

    Args:
        region: Location used to derive the regional host.
        resource_path: Resource path, e.g. ``projects/p/locations/l/...``.
        resource_method: API method, e.g. ``generateContent``.
        token: Bearer token, or *None* to send no SDK credential.
        data: Request body; pydantic payloads are dumped in wire form.
        api_endpoint: Host override for the regional host.
        request_options: Deadline, client identifier and custom headers.
        api_version: ``v1`` or ``v1beta1``.
        client: Client to send through; a short-lived one is used otherwise.

    Returns:
        The transport's response.
    """
    base_endpoint = resolve_base_endpoint(region, api_endpoint)
    url = build_url(
        base_endpoint,
        resource_path=resource_path,
        resource_method=resource_method,
        api_version=api_version,
    )
    headers = build_headers(
        base_endpoint=base_endpoint,
        token=token,
        request_options=request_options,
    )
    body = _dump_body(data)
    timeout_s = (request_options or RequestOptions()).timeout_seconds()

    log.debug("POST %s (api_version=%s, timeout_s=%s)", url, api_version, timeout_s)
    if client is not None:
        return await _send(client, url, headers, body, timeout_s)
    async with httpx.AsyncClient() as owned:
        return await _send(owned, url, headers, body, timeout_s)


async def _send(
    client: httpx.AsyncClient,
    url: str,
    headers: httpx.Headers,
    body: Any,
    timeout_s: float | None,
) -> httpx.Response:
    if timeout_s is None:
        return await client.post(url, headers=headers, json=body)
    # The caller's deadline replaces httpx's own per-phase timeouts.
    async with asyncio.timeout(timeout_s):
        return await client.post(url, headers=headers, json=body, timeout=None)


def _dump_body(data: BaseModel | Mapping[str, Any]) -> Any:
    if isinstance(data, ApiModel):
        return data.to_api()
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_none=True, mode="json")
    return dict(data)


def _has_line_break(value: str) -> bool:
    return "\n" in value or "\r" in value


def _is_latin1(value: str) -> bool:
    try:
        value.encode(_HEADER_ENCODING)
    except UnicodeEncodeError:
        return False
    return True
