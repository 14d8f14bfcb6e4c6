"""Process-wide constants: method names, roles and client identity."""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from typing import Final

GENERATE_CONTENT_METHOD: Final[str] = "generateContent"
STREAMING_GENERATE_CONTENT_METHOD: Final[str] = "streamGenerateContent"
COUNT_TOKENS_METHOD: Final[str] = "countTokens"

USER_ROLE: Final[str] = "user"
MODEL_ROLE: Final[str] = "model"
FUNCTION_ROLE: Final[str] = "function"

USER_AGENT_PRODUCT: Final[str] = "model-builder"


@dataclass(frozen=True)
class ClientInfo:
    """Library identity sent with every request."""

    library_version: str
    library_language: str

    @property
    def user_agent(self) -> str:
        return f"{USER_AGENT_PRODUCT}/{self.library_version} {self.library_language}"


def _load_client_info() -> ClientInfo:
    try:
        lib_version = version("vertexgen")
    except PackageNotFoundError:
        lib_version = "0.0.0+unknown"
    return ClientInfo(
        library_version=lib_version,
        library_language=f"vertexgen-python/{lib_version}",
    )


# Resolved once at import; never re-derived per call.
CLIENT_INFO: Final[ClientInfo] = _load_client_info()
USER_AGENT: Final[str] = CLIENT_INFO.user_agent
