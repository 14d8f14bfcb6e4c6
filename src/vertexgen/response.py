"""Response handling: error mapping and body decoding."""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from vertexgen._http import RETRYABLE_STATUS_CODES
from vertexgen.errors import ClientError, GoogleGenerativeAIError
from vertexgen.types import CountTokensResponse, GenerateContentResponse

log = logging.getLogger(__name__)

_T = TypeVar("_T", GenerateContentResponse, CountTokensResponse)


def throw_error_if_not_ok(response: httpx.Response) -> None:
    """Raise a typed error for any non-2xx *response*.

    Raises:
        ClientError: For HTTP 4xx.
        GoogleGenerativeAIError: For every other non-2xx status.
    """
    if response.is_success:
        return

    status = response.status_code
    message = (
        f"got status: {status} {response.reason_phrase}. "
        f"{json.dumps(_error_body(response))}"
    )
    log.debug("Request failed with status %s", status)
    if 400 <= status < 500:
        raise ClientError(message, status_code=status, hint=_auth_hint(status))
    raise GoogleGenerativeAIError(
        message,
        status_code=status,
        retryable=status in RETRYABLE_STATUS_CODES,
    )


def process_unary(response: httpx.Response) -> GenerateContentResponse:
    """Decode a generate-content body and surface candidate function calls."""
    result = _decode(response, GenerateContentResponse)
    for candidate in result.candidates:
        if candidate.content is None or not candidate.content.parts:
            continue
        function_calls = [
            part.function_call
            for part in candidate.content.parts
            if part.function_call is not None
        ]
        if function_calls:
            candidate.function_calls = function_calls
    return result


def process_count_tokens(response: httpx.Response) -> CountTokensResponse:
    """Decode a count-tokens body."""
    return _decode(response, CountTokensResponse)


def _decode(response: httpx.Response, model: type[_T]) -> _T:
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise GoogleGenerativeAIError(
            f"Failed to decode {model.__name__} from response body",
            status_code=response.status_code,
        ) from e


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _auth_hint(status: int) -> str | None:
    if status in {401, 403}:
        return "Check that the bearer token is valid and has access to the project."
    return None
