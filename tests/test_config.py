"""Configuration boundary tests."""

from __future__ import annotations

import pytest

from vertexgen.config import DEFAULT_LOCATION, Config
from vertexgen.constants import CLIENT_INFO, USER_AGENT
from vertexgen.errors import ConfigurationError

pytestmark = pytest.mark.unit


def test_config_resolves_project_and_location_from_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "env-project")
    monkeypatch.setenv("GOOGLE_CLOUD_LOCATION", "asia-northeast1")

    cfg = Config()

    assert cfg.project == "env-project"
    assert cfg.location == "asia-northeast1"
    assert cfg.api_endpoint is None


def test_explicit_values_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "env-project")
    monkeypatch.setenv("VERTEX_API_ENDPOINT", "env.example.com")

    cfg = Config(project="explicit", api_endpoint="explicit.example.com")

    assert cfg.project == "explicit"
    assert cfg.api_endpoint == "explicit.example.com"


def test_location_defaults_when_unset() -> None:
    assert Config(project="p").location == DEFAULT_LOCATION


def test_missing_project_raises_clear_error() -> None:
    with pytest.raises(ConfigurationError, match="project is required") as exc:
        Config()
    assert exc.value.hint is not None
    assert "GOOGLE_CLOUD_PROJECT" in exc.value.hint


def test_blank_location_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="location"):
        Config(project="p", location="  ")


@pytest.mark.parametrize(
    ("model", "expected"),
    [
        (
            "gemini-1.5-pro",
            "projects/p/locations/l/publishers/google/models/gemini-1.5-pro",
        ),
        (
            "models/gemini-1.5-pro",
            "projects/p/locations/l/publishers/google/models/gemini-1.5-pro",
        ),
        (
            "projects/other/locations/x/endpoints/123",
            "projects/other/locations/x/endpoints/123",
        ),
    ],
)
def test_model_resource_path(model: str, expected: str) -> None:
    assert Config(project="p", location="l").model_resource_path(model) == expected


def test_config_is_frozen() -> None:
    cfg = Config(project="p")
    with pytest.raises(AttributeError):
        cfg.project = "q"  # type: ignore[misc]


def test_repr_is_developer_friendly() -> None:
    assert repr(Config(project="p", location="l")) == (
        "Config(project='p', location='l', api_endpoint=None)"
    )


def test_user_agent_is_resolved_once_from_client_info() -> None:
    assert USER_AGENT == CLIENT_INFO.user_agent
    assert USER_AGENT.startswith(f"model-builder/{CLIENT_INFO.library_version} ")
    assert CLIENT_INFO.library_language.startswith("vertexgen-python/")
