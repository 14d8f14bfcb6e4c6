"""Model and chat-session facades over the call sites.

``GenerativeModel`` binds a model name, a target ``Config`` and call-level
defaults once, so each call only carries the request. ``ChatSession`` keeps
the turn history of a multi-turn conversation and appends to it only when
the model answers with a candidate.

Example:
    model = GenerativeModel("gemini-1.5-flash", config=Config(), token=token)
    chat = model.start_chat()
    response = await chat.send_message("Hello")
    chat.history  # [user turn, model turn]
"""

from __future__ import annotations

from dataclasses import replace
import json
import logging
from typing import TYPE_CHECKING

from vertexgen import functions
from vertexgen.constants import MODEL_ROLE, USER_ROLE
from vertexgen.errors import ClientError, GoogleGenerativeAIError
from vertexgen.request import format_content_request
from vertexgen.types import CachedContent, Content, GenerateContentRequest, Part

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from vertexgen.config import Config
    from vertexgen.options import RequestOptions
    from vertexgen.types import (
        CountTokensRequest,
        CountTokensResponse,
        GenerateContentResponse,
        GenerationConfig,
        SafetySetting,
        Tool,
        ToolConfig,
    )

log = logging.getLogger(__name__)

_MIXED_FUNCTION_RESPONSE_MESSAGE = (
    "Within a single message, FunctionResponse cannot be mixed with other type "
    "of part in the request for sending chat message."
)
_EMPTY_MESSAGE_MESSAGE = "No content is provided for sending chat message."


class GenerativeModel:
    """A publisher model bound to a target and its call-level defaults.

    Fields set on a request always win over the defaults held here.
    """

    def __init__(
        self,
        model: str,
        *,
        config: Config,
        token: str | None = None,
        generation_config: GenerationConfig | None = None,
        safety_settings: list[SafetySetting] | None = None,
        tools: list[Tool] | None = None,
        tool_config: ToolConfig | None = None,
        system_instruction: Content | None = None,
        cached_content: CachedContent | str | None = None,
        request_options: RequestOptions | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Bind *model* to *config*.

        Args:
            model: Model name (``gemini-1.5-flash``) or full resource path.
            config: Project, location and optional endpoint override.
            token: Bearer token sent with every call.
            generation_config: Default sampling parameters.
            safety_settings: Default safety settings.
            tools: Default tools.
            tool_config: Default tool configuration.
            system_instruction: Default system instruction.
            cached_content: Cached content (or its resource name) every
                generate call refers to unless the request names its own.
            request_options: Deadline, client identifier and custom headers.
            client: Optional shared ``httpx.AsyncClient``.
        """
        self.model = model
        self.config = config
        self.token = token
        self.generation_config = generation_config
        self.safety_settings = safety_settings
        self.tools = tools
        self.tool_config = tool_config
        self.system_instruction = system_instruction
        self.cached_content = cached_content
        self.request_options = request_options
        self.client = client

    @property
    def cached_content_name(self) -> str | None:
        """Resource name sent as ``cachedContent``, if any."""
        if isinstance(self.cached_content, CachedContent):
            return self.cached_content.name
        return self.cached_content

    async def generate_content(
        self, request: GenerateContentRequest | str
    ) -> GenerateContentResponse:
        """Generate content using this model's defaults."""
        return await self._generate(
            request,
            config=self.config,
            generation_config=self.generation_config,
            safety_settings=self.safety_settings,
            tools=self.tools,
        )

    async def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        """Count the tokens *request* would consume on this model."""
        return await functions.count_tokens(
            request,
            config=self.config,
            model=self.model,
            token=self.token,
            request_options=self.request_options,
            client=self.client,
        )

    def start_chat(
        self,
        *,
        history: Sequence[Content] | None = None,
        generation_config: GenerationConfig | None = None,
        safety_settings: list[SafetySetting] | None = None,
        tools: list[Tool] | None = None,
        api_endpoint: str | None = None,
    ) -> ChatSession:
        """Start a chat session; unset arguments fall back to this model's."""
        config = self.config
        if api_endpoint is not None:
            config = replace(config, api_endpoint=api_endpoint)
        return ChatSession(
            self,
            config=config,
            history=history,
            generation_config=(
                generation_config
                if generation_config is not None
                else self.generation_config
            ),
            safety_settings=(
                safety_settings if safety_settings is not None else self.safety_settings
            ),
            tools=tools if tools is not None else self.tools,
        )

    async def _generate(
        self,
        request: GenerateContentRequest | str,
        *,
        config: Config,
        generation_config: GenerationConfig | None,
        safety_settings: list[SafetySetting] | None,
        tools: list[Tool] | None,
    ) -> GenerateContentResponse:
        request = format_content_request(request, generation_config, safety_settings)
        cached_name = self.cached_content_name
        if cached_name is not None and request.cached_content is None:
            request = request.model_copy(update={"cached_content": cached_name})
        return await functions.generate_content(
            request,
            config=config,
            model=self.model,
            token=self.token,
            generation_config=generation_config,
            safety_settings=safety_settings,
            tools=tools,
            tool_config=self.tool_config,
            system_instruction=self.system_instruction,
            request_options=self.request_options,
            client=self.client,
        )

    def __repr__(self) -> str:
        return f"GenerativeModel(model={self.model!r}, config={self.config!r})"


class ChatSession:
    """Multi-turn conversation with one model.

    Created by ``GenerativeModel.start_chat``. A turn only enters the history
    once the model returns a candidate for it, so a failed or blocked send
    leaves the history as it was.
    """

    def __init__(
        self,
        model: GenerativeModel,
        *,
        config: Config,
        history: Sequence[Content] | None = None,
        generation_config: GenerationConfig | None = None,
        safety_settings: list[SafetySetting] | None = None,
        tools: list[Tool] | None = None,
    ) -> None:
        self._model = model
        self._config = config
        self._history: list[Content] = list(history or [])
        self.generation_config = generation_config
        self.safety_settings = safety_settings
        self.tools = tools

    @property
    def history(self) -> list[Content]:
        return self._history

    @property
    def request_options(self) -> RequestOptions | None:
        return self._model.request_options

    async def send_message(
        self, request: str | Sequence[str | Part]
    ) -> GenerateContentResponse:
        """Send one user turn and record it with the model's reply.

        Args:
            request: Text, or a sequence of text and parts. Function-response
                parts must make up the whole message.

        Returns:
            The model's response.

        Raises:
            ClientError: If the message is empty or mixes function-response
                parts with other parts.
            GoogleGenerativeAIError: If the model returns no candidate.
        """
        new_content = _content_from_message(request)
        turn = GenerateContentRequest(
            contents=[*self._history, new_content],
            generation_config=self.generation_config,
            safety_settings=self.safety_settings,
            tools=self.tools,
        )
        log.debug("Sending chat turn %d", len(self._history) + 1)
        response = await self._model._generate(
            turn,
            config=self._config,
            generation_config=self.generation_config,
            safety_settings=self.safety_settings,
            tools=self.tools,
        )

        if not response.candidates:
            raise GoogleGenerativeAIError(_no_candidate_message(response))

        reply = response.candidates[0].content or Content()
        if not reply.role:
            reply.role = MODEL_ROLE
        self._history.extend([new_content, reply])
        return response


def _content_from_message(request: str | Sequence[str | Part]) -> Content:
    if isinstance(request, str):
        parts = [Part(text=request)]
    else:
        parts = [Part(text=item) if isinstance(item, str) else item for item in request]

    function_parts = [p for p in parts if p.function_response is not None]
    if function_parts and len(function_parts) != len(parts):
        raise ClientError(_MIXED_FUNCTION_RESPONSE_MESSAGE)
    if not parts:
        raise ClientError(_EMPTY_MESSAGE_MESSAGE)
    # Function responses are sent back under the user role as well.
    return Content(role=USER_ROLE, parts=parts)


def _no_candidate_message(response: GenerateContentResponse) -> str:
    if response.prompt_feedback:
        feedback = json.dumps(response.prompt_feedback, separators=(",", ":"))
        return (
            "Model did not return candidate, but provided prompt feedback: "
            f"{feedback}"
        )
    return (
        "Model did not return candidate, could not find any prompt feedback "
        "from model as well"
    )
