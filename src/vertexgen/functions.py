"""Call sites: generate content and count tokens end to end."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import httpx

from vertexgen.constants import COUNT_TOKENS_METHOD, GENERATE_CONTENT_METHOD
from vertexgen.errors import GoogleGenerativeAIError
from vertexgen.post_request import post_request
from vertexgen.request import (
    format_content_request,
    get_api_version,
    validate_generate_content_request,
    validate_generation_config,
)
from vertexgen.response import (
    process_count_tokens,
    process_unary,
    throw_error_if_not_ok,
)

if TYPE_CHECKING:
    from vertexgen.config import Config
    from vertexgen.options import RequestOptions
    from vertexgen.types import (
        Content,
        CountTokensRequest,
        CountTokensResponse,
        GenerateContentRequest,
        GenerateContentResponse,
        GenerationConfig,
        SafetySetting,
        Tool,
        ToolConfig,
    )

_V = TypeVar("_V")


async def generate_content(
    request: GenerateContentRequest | str,
    *,
    config: Config,
    model: str,
    token: str | None,
    generation_config: GenerationConfig | None = None,
    safety_settings: list[SafetySetting] | None = None,
    tools: list[Tool] | None = None,
    tool_config: ToolConfig | None = None,
    system_instruction: Content | None = None,
    request_options: RequestOptions | None = None,
    client: httpx.AsyncClient | None = None,
) -> GenerateContentResponse:
    """Generate content from a publisher model.

    Fields set on *request* win over the call-level defaults passed here.

    Args:
        request: A text prompt or a structured request.
        config: Project, location and optional endpoint override.
        model: Model name (``gemini-1.5-flash``) or full resource path.
        token: Bearer token supplied by the caller.
        generation_config: Default sampling parameters.
        safety_settings: Default safety settings.
        tools: Default tools.
        tool_config: Default tool configuration.
        system_instruction: Default system instruction.
        request_options: Deadline, client identifier and custom headers.
        client: Optional shared ``httpx.AsyncClient``.

    Returns:
        The decoded response, with ``function_calls`` filled per candidate.

    Raises:
        ClientError: On pre-flight validation failure or HTTP 4xx.
        GoogleGenerativeAIError: On transport failure, timeout or other
            error statuses.
    """
    request = format_content_request(request, generation_config, safety_settings)
    merged = request.model_copy(
        update={
            "generation_config": _prefer(
                request.generation_config, generation_config
            ),
            "safety_settings": _prefer(request.safety_settings, safety_settings),
            "tools": _prefer(request.tools, tools),
            "tool_config": _prefer(request.tool_config, tool_config),
            "system_instruction": _prefer(
                request.system_instruction, system_instruction
            ),
        }
    )
    if merged.generation_config is not None:
        validate_generation_config(merged.generation_config)
    validate_generate_content_request(merged)

    try:
        response = await post_request(
            region=str(config.location),
            resource_path=config.model_resource_path(model),
            resource_method=GENERATE_CONTENT_METHOD,
            token=token,
            data=merged,
            api_endpoint=config.api_endpoint,
            request_options=request_options,
            api_version=get_api_version(merged),
            client=client,
        )
    except (httpx.HTTPError, TimeoutError) as e:
        raise GoogleGenerativeAIError("exception posting request") from e

    throw_error_if_not_ok(response)
    return process_unary(response)


async def count_tokens(
    request: CountTokensRequest,
    *,
    config: Config,
    model: str,
    token: str | None,
    request_options: RequestOptions | None = None,
    client: httpx.AsyncClient | None = None,
) -> CountTokensResponse:
    """Count the tokens *request* would consume on *model*."""
    try:
        response = await post_request(
            region=str(config.location),
            resource_path=config.model_resource_path(model),
            resource_method=COUNT_TOKENS_METHOD,
            token=token,
            data=request,
            api_endpoint=config.api_endpoint,
            request_options=request_options,
            client=client,
        )
    except (httpx.HTTPError, TimeoutError) as e:
        raise GoogleGenerativeAIError("exception posting request") from e

    throw_error_if_not_ok(response)
    return process_count_tokens(response)


def _prefer(value: _V | None, default: _V | None) -> _V | None:
    return value if value is not None else default
