"""Tests for the shared dependency getters."""

from __future__ import annotations

import asyncio

import pytest

from resume_api import dependencies
from resume_api.config import Settings


@pytest.fixture
def fresh_dependencies(monkeypatch: pytest.MonkeyPatch) -> Settings:
    settings = Settings(
        aiml_api_key="key-123",
        rate_limit_requests=4,
        rate_limit_window_seconds=30,
        _env_file=None,
    )
    monkeypatch.setattr(dependencies, "get_settings", lambda: settings)
    monkeypatch.setattr(dependencies, "_rate_limiter", None)
    monkeypatch.setattr(dependencies, "_completion_client", None)
    return settings


def test_rate_limiter_is_shared_and_configured(fresh_dependencies: Settings) -> None:
    limiter = dependencies.get_rate_limiter()
    assert limiter is dependencies.get_rate_limiter()
    assert limiter.limit == 4
    assert limiter.window_seconds == 30


def test_completion_client_is_shared_until_closed(fresh_dependencies: Settings) -> None:
    client = dependencies.get_completion_client()
    assert client is dependencies.get_completion_client()
    assert client.model == fresh_dependencies.completion_model

    asyncio.run(dependencies.close_completion_client())
    assert dependencies._completion_client is None
    assert dependencies.get_completion_client() is not client
