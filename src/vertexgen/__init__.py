"""vertexgen: request shaping for the Vertex AI generative-model REST API.

Public API:
    - generate_content(): Generate content from a publisher model
    - count_tokens(): Count the tokens a request would consume
    - GenerativeModel: A model bound to its target and call-level defaults
    - ChatSession: Multi-turn chat that keeps its own history
    - Config: Project/location configuration
    - RequestOptions: Per-call deadline, client identifier and headers
"""

from __future__ import annotations

import logging

from vertexgen.config import Config
from vertexgen.errors import (
    ClientError,
    ConfigurationError,
    GoogleGenerativeAIError,
    VertexGenError,
)
from vertexgen.functions import count_tokens, generate_content
from vertexgen.models import ChatSession, GenerativeModel
from vertexgen.options import RequestOptions
from vertexgen.post_request import post_request
from vertexgen.request import (
    format_content_request,
    get_api_version,
    validate_generate_content_request,
    validate_generation_config,
)
from vertexgen.types import (
    CachedContent,
    Content,
    CountTokensRequest,
    CountTokensResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    Part,
    Retrieval,
    SafetySetting,
    Tool,
    VertexAISearch,
    VertexRagStore,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("vertexgen")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("vertexgen").addHandler(logging.NullHandler())

__all__ = [
    "CachedContent",
    "ChatSession",
    "ClientError",
    "Config",
    "ConfigurationError",
    "Content",
    "CountTokensRequest",
    "CountTokensResponse",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GenerationConfig",
    "GenerativeModel",
    "GoogleGenerativeAIError",
    "Part",
    "RequestOptions",
    "Retrieval",
    "SafetySetting",
    "Tool",
    "VertexAISearch",
    "VertexGenError",
    "VertexRagStore",
    "count_tokens",
    "format_content_request",
    "generate_content",
    "get_api_version",
    "post_request",
    "validate_generate_content_request",
    "validate_generation_config",
]
