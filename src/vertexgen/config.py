"""Configuration: Frozen Config resolving project and location."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from vertexgen.errors import ConfigurationError

load_dotenv()

DEFAULT_LOCATION = "us-central1"

_PROJECT_ENV_VAR = "GOOGLE_CLOUD_PROJECT"
_LOCATION_ENV_VAR = "GOOGLE_CLOUD_LOCATION"
_API_ENDPOINT_ENV_VAR = "VERTEX_API_ENDPOINT"


@dataclass(frozen=True)
class Config:
    """Immutable target configuration for Vertex AI calls.

    Values left as *None* are resolved from the environment; the project is
    required, the location falls back to ``us-central1``.

    Example:
        config = Config(project="my-project", location="europe-west4")
        path = config.model_resource_path("gemini-1.5-flash")
    """

    #: Auto-resolved from ``GOOGLE_CLOUD_PROJECT`` when *None*.
    project: str | None = None
    #: Auto-resolved from ``GOOGLE_CLOUD_LOCATION`` when *None*.
    location: str | None = None
    #: Explicit host override; auto-resolved from ``VERTEX_API_ENDPOINT``.
    api_endpoint: str | None = None

    def __post_init__(self) -> None:
        """Resolve missing values from the environment and validate."""
        if self.project is None:
            object.__setattr__(self, "project", os.environ.get(_PROJECT_ENV_VAR))
        if self.location is None:
            object.__setattr__(
                self,
                "location",
                os.environ.get(_LOCATION_ENV_VAR) or DEFAULT_LOCATION,
            )
        if self.api_endpoint is None:
            object.__setattr__(
                self, "api_endpoint", os.environ.get(_API_ENDPOINT_ENV_VAR) or None
            )

        if not self.project:
            raise ConfigurationError(
                "project is required",
                hint=f"Set {_PROJECT_ENV_VAR} or pass Config(project=...).",
            )
        if not isinstance(self.location, str) or not self.location.strip():
            raise ConfigurationError(
                "location must be a non-empty string",
                hint=f"Set {_LOCATION_ENV_VAR} or pass Config(location='us-central1').",
            )

    def model_resource_path(self, model: str) -> str:
        """Return the publisher model resource path for *model*."""
        if model.startswith("projects/"):
            return model
        if model.startswith("models/"):
            publisher_model = f"publishers/google/{model}"
        else:
            publisher_model = f"publishers/google/models/{model}"
        return f"projects/{self.project}/locations/{self.location}/{publisher_model}"

    def __str__(self) -> str:
        """Return a developer-friendly representation."""
        return (
            f"Config(project={self.project!r}, location={self.location!r}, "
            f"api_endpoint={self.api_endpoint!r})"
        )

    __repr__ = __str__
