"""Pytest configuration for ai_compare tests."""

import os
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
from respx import MockRouter

from ai_compare.providers.config import PROVIDERS
from ai_compare.settings import settings

TEST_CREDENTIALS = {
    "openai_api_key": "test-openai-key",
    "anthropic_api_key": "test-anthropic-key",
    "google_api_key": "test-google-key",
}

# ============================================================================
# Provider response payloads
# ============================================================================


def openai_payload(text: str) -> dict[str, Any]:
    return {"id": "chatcmpl-1", "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


def anthropic_payload(text: str) -> dict[str, Any]:
    return {"id": "msg_1", "type": "message", "content": [{"type": "text", "text": text}]}


def gemini_payload(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


PAYLOAD_BUILDERS: dict[str, Callable[[str], dict[str, Any]]] = {
    "modelA": openai_payload,
    "modelB": anthropic_payload,
    "modelC": gemini_payload,
}

DEFAULT_ANSWERS = {"modelA": "Answer from A", "modelB": "Answer from B", "modelC": "Answer from C"}


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def provider_settings(monkeypatch):
    """Pin credentials and outbound settings so tests never depend on the local .env."""
    for attr, value in TEST_CREDENTIALS.items():
        monkeypatch.setattr(settings, attr, value)
    monkeypatch.setattr(settings, "provider_timeout_seconds", None)
    monkeypatch.setattr(settings, "max_output_tokens", 500)
    return settings


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def mock_providers(respx_mock: MockRouter):
    """Route every provider endpoint through respx.

    Call with slot=outcome keyword arguments, where outcome is the answer text,
    an httpx.Response, or an exception. Slots not given answer with DEFAULT_ANSWERS.
    Returns a dict of slot -> respx Route.
    """

    def _mock(**outcomes: Any) -> dict[str, Any]:
        routes = {}
        for slot, provider in PROVIDERS.items():
            outcome = outcomes.get(slot, DEFAULT_ANSWERS[slot])
            route = respx_mock.post(url__startswith=provider.url)
            if isinstance(outcome, str):
                build = PAYLOAD_BUILDERS[slot]
                route.mock(side_effect=lambda request, build=build, text=outcome: httpx.Response(200, json=build(text)))
            elif isinstance(outcome, httpx.Response):
                route.mock(return_value=outcome)
            else:
                route.mock(side_effect=outcome)
            routes[slot] = route
        return routes

    return _mock


@pytest.fixture
def live_credentials(monkeypatch):
    """Restore real provider keys from the environment, skipping if any is missing."""
    missing = [provider.env_var for provider in PROVIDERS.values() if not os.getenv(provider.env_var)]
    if missing:
        pytest.skip(f"Live provider keys not set: {', '.join(missing)}")
    for provider in PROVIDERS.values():
        settings_attr, env_var = provider.credential
        monkeypatch.setattr(settings, settings_attr, os.environ[env_var])
    monkeypatch.setattr(settings, "provider_timeout_seconds", 120.0)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (>5s)")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
