"""Request normalization: shape, validate and pick the API version."""

from __future__ import annotations

import logging
from typing import Literal

from vertexgen.constants import USER_ROLE
from vertexgen.errors import ClientError
from vertexgen.types import (
    Content,
    GenerateContentRequest,
    GenerationConfig,
    Part,
    SafetySetting,
)

log = logging.getLogger(__name__)

ApiVersion = Literal["v1", "v1beta1"]

_TOP_K_MAX = 40

_RETRIEVAL_CONFLICT_MESSAGE = (
    "Found both vertex_ai_search and vertex_rag_store field are set in tool. "
    "Either set vertex_ai_search or vertex_rag_store."
)
_FUNCTION_RESPONSE_ORDER_MESSAGE = (
    "Please ensure that function response turn comes immediately after a "
    "function call turn."
)


def format_content_request(
    request: GenerateContentRequest | str,
    generation_config: GenerationConfig | None = None,
    safety_settings: list[SafetySetting] | None = None,
) -> GenerateContentRequest:
    """Normalize a text prompt or a structured request into a request object.

    A plain string becomes a single user turn carrying *generation_config*
    and *safety_settings*. A structured request is returned as-is and both
    extra arguments are ignored; callers merge their defaults afterwards.
    """
    if isinstance(request, str):
        return GenerateContentRequest(
            contents=[Content(role=USER_ROLE, parts=[Part(text=request)])],
            generation_config=generation_config,
            safety_settings=safety_settings,
        )
    return request


def validate_generate_content_request(request: GenerateContentRequest) -> None:
    """Reject requests the API would refuse, before any network call.

    Raises:
        ClientError: If the tools reference both a Vertex AI Search datastore
            and a RAG store, or a function response turn does not follow a
            function call turn.
    """
    if has_vertex_ai_search(request) and has_vertex_rag_store(request):
        raise ClientError(
            _RETRIEVAL_CONFLICT_MESSAGE,
            hint="Split the retrieval sources across separate requests.",
        )
    _validate_function_response_order(request.contents)


def validate_generation_config(config: GenerationConfig) -> GenerationConfig:
    """Drop ``top_k`` unless it lies in (0, 40]; other fields pass through."""
    top_k = config.top_k
    if top_k is not None and not (0 < top_k <= _TOP_K_MAX):
        log.debug("Dropping out-of-range top_k=%r", top_k)
        config.top_k = None
        config.model_fields_set.discard("top_k")
    return config


def get_api_version(request: GenerateContentRequest) -> ApiVersion:
    """Return ``v1beta1`` for RAG retrieval or cached content, else ``v1``."""
    if has_vertex_rag_store(request) or request.cached_content:
        return "v1beta1"
    return "v1"


def has_vertex_rag_store(request: GenerateContentRequest) -> bool:
    """Whether any tool retrieves from a Vertex RAG store."""
    for tool in request.tools or ():
        if tool.retrieval is not None and tool.retrieval.vertex_rag_store:
            return True
    return False


def has_vertex_ai_search(request: GenerateContentRequest) -> bool:
    """Whether any tool retrieves from a Vertex AI Search datastore."""
    for tool in request.tools or ():
        if tool.retrieval is not None and tool.retrieval.vertex_ai_search:
            return True
    return False


def _validate_function_response_order(contents: list[Content]) -> None:
    if not contents or not contents[-1].parts:
        return
    if contents[-1].parts[0].function_response is None:
        return
    if len(contents) < 2:
        raise ClientError(_FUNCTION_RESPONSE_ORDER_MESSAGE)
    previous = contents[-2].parts
    if not previous or previous[0].function_call is None:
        raise ClientError(_FUNCTION_RESPONSE_ORDER_MESSAGE)
