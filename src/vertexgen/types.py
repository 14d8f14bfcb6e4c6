"""Request and response payloads for the Vertex AI generative-model API.

Field names are snake_case in Python and camelCase on the wire. Every model
accepts unknown fields so newer API additions pass through untouched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for all wire payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_api(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase form, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# --- Content ---


class Blob(ApiModel):
    mime_type: str
    data: str


class FileData(ApiModel):
    mime_type: str
    file_uri: str


class FunctionCall(ApiModel):
    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class FunctionResponse(ApiModel):
    name: str
    response: dict[str, Any] = Field(default_factory=dict)


class Part(ApiModel):
    """One piece of a turn; normally exactly one field is set."""

    text: str | None = None
    inline_data: Blob | None = None
    file_data: FileData | None = None
    function_call: FunctionCall | None = None
    function_response: FunctionResponse | None = None


class Content(ApiModel):
    """A single conversation turn."""

    role: str | None = None
    parts: list[Part] = Field(default_factory=list)


# --- Generation parameters ---


class GenerationConfig(ApiModel):
    """Sampling parameters.

    ``top_k`` must lie in (0, 40]; see ``validate_generation_config``.
    """

    temperature: float | None = None
    top_p: float | None = None
    top_k: int | float | None = None
    candidate_count: int | None = None
    max_output_tokens: int | None = None
    stop_sequences: list[str] | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    response_mime_type: str | None = None
    response_schema: dict[str, Any] | None = None


class SafetySetting(ApiModel):
    category: str
    threshold: str
    method: str | None = None


# --- Tools ---


class FunctionDeclaration(ApiModel):
    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None


class VertexAISearch(ApiModel):
    """Managed search index, referenced by its datastore resource name."""

    datastore: str


class RagResource(ApiModel):
    rag_corpus: str | None = None
    rag_file_ids: list[str] | None = None


class VertexRagStore(ApiModel):
    """Retrieval-augmented generation store, referenced by corpora."""

    rag_resources: list[RagResource] | None = None
    similarity_top_k: int | None = None
    vector_distance_threshold: float | None = None


class Retrieval(ApiModel):
    """Retrieval capability; at most one store kind per request."""

    vertex_ai_search: VertexAISearch | None = None
    vertex_rag_store: VertexRagStore | None = None
    disable_attribution: bool | None = None


class GoogleSearchRetrieval(ApiModel):
    dynamic_retrieval_config: dict[str, Any] | None = None


class Tool(ApiModel):
    function_declarations: list[FunctionDeclaration] | None = None
    retrieval: Retrieval | None = None
    google_search_retrieval: GoogleSearchRetrieval | None = None


class FunctionCallingConfig(ApiModel):
    #: One of ``AUTO``, ``ANY``, ``NONE``.
    mode: str | None = None
    allowed_function_names: list[str] | None = None


class ToolConfig(ApiModel):
    function_calling_config: FunctionCallingConfig | None = None


# --- Requests ---


class GenerateContentRequest(ApiModel):
    """Canonical generate-content request."""

    contents: list[Content]
    generation_config: GenerationConfig | None = None
    safety_settings: list[SafetySetting] | None = None
    tools: list[Tool] | None = None
    tool_config: ToolConfig | None = None
    system_instruction: Content | None = None
    #: Resource name of server-side cached content.
    cached_content: str | None = None


class CountTokensRequest(ApiModel):
    contents: list[Content]


class CachedContent(ApiModel):
    """Server-side cached prompt content; requests refer to it by ``name``."""

    name: str | None = None
    display_name: str | None = None
    model: str | None = None
    contents: list[Content] | None = None
    system_instruction: Content | None = None
    tools: list[Tool] | None = None
    tool_config: ToolConfig | None = None
    ttl: str | None = None
    expire_time: str | None = None
    create_time: str | None = None
    update_time: str | None = None


# --- Responses ---


class UsageMetadata(ApiModel):
    prompt_token_count: int | None = None
    candidates_token_count: int | None = None
    total_token_count: int | None = None


class GenerateContentCandidate(ApiModel):
    index: int | None = None
    content: Content | None = None
    finish_reason: str | None = None
    finish_message: str | None = None
    safety_ratings: list[dict[str, Any]] | None = None
    citation_metadata: dict[str, Any] | None = None
    grounding_metadata: dict[str, Any] | None = None
    #: Filled client-side from the candidate's function-call parts.
    function_calls: list[FunctionCall] | None = None


class GenerateContentResponse(ApiModel):
    candidates: list[GenerateContentCandidate] = Field(default_factory=list)
    prompt_feedback: dict[str, Any] | None = None
    usage_metadata: UsageMetadata | None = None


class CountTokensResponse(ApiModel):
    total_tokens: int | None = None
    total_billable_characters: int | None = None
