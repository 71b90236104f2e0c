"""Unit tests for parallel provider execution."""

import asyncio
import time
from unittest.mock import patch

import httpx
import pytest

from ai_compare.providers.client import ProviderClient
from ai_compare.providers.config import PROVIDERS, ProviderConfig
from ai_compare.schemas.base import ProviderResult, ProviderResultMetadata
from ai_compare.utils.runner import execute_parallel


def _success(provider: ProviderConfig, content: str) -> ProviderResult:
    return ProviderResult(
        content=content,
        status="success",
        metadata=ProviderResultMetadata(provider=provider.slot, label=provider.label, model=provider.model),
    )


@pytest.mark.asyncio
async def test_execute_parallel_all_success(http_client: httpx.AsyncClient):
    """Every configured provider is called once with the same prompt."""
    calls = []

    async def mock_execute(self, provider: ProviderConfig, prompt: str) -> ProviderResult:
        calls.append((provider.slot, prompt))
        return _success(provider, f"Response from {provider.label}")

    with patch.object(ProviderClient, "execute", mock_execute):
        results = await execute_parallel("Same prompt", http_client)

    assert list(results) == ["modelA", "modelB", "modelC"]
    assert all(r.status == "success" for r in results.values())
    assert results["modelB"].content == "Response from Model B"
    assert sorted(calls) == [("modelA", "Same prompt"), ("modelB", "Same prompt"), ("modelC", "Same prompt")]


@pytest.mark.asyncio
async def test_execute_parallel_isolates_failures(http_client: httpx.AsyncClient):
    """One failing provider leaves the others untouched."""

    async def mock_execute(self, provider: ProviderConfig, prompt: str) -> ProviderResult:
        if provider.slot == "modelB":
            return ProviderResult.error_response(error="Connection refused", provider=provider.slot, label=provider.label)
        return _success(provider, "ok")

    with patch.object(ProviderClient, "execute", mock_execute):
        results = await execute_parallel("Hello", http_client)

    assert results["modelA"].status == "success"
    assert results["modelB"].status == "error"
    assert results["modelB"].as_text() == "Error calling Model B: Connection refused"
    assert results["modelC"].status == "success"


@pytest.mark.asyncio
async def test_execute_parallel_subset_of_providers(http_client: httpx.AsyncClient):
    async def mock_execute(self, provider: ProviderConfig, prompt: str) -> ProviderResult:
        return _success(provider, provider.slot)

    with patch.object(ProviderClient, "execute", mock_execute):
        results = await execute_parallel("Hello", http_client, providers=[PROVIDERS["modelC"]])

    assert list(results) == ["modelC"]


@pytest.mark.asyncio
async def test_execute_parallel_latency_bounded_by_slowest(http_client: httpx.AsyncClient):
    """Total time tracks max(delays), not sum(delays)."""
    delays = {"modelA": 0.2, "modelB": 0.4, "modelC": 0.6}

    async def mock_execute(self, provider: ProviderConfig, prompt: str) -> ProviderResult:
        await asyncio.sleep(delays[provider.slot])
        return _success(provider, "ok")

    with patch.object(ProviderClient, "execute", mock_execute):
        start = time.perf_counter()
        results = await execute_parallel("Hello", http_client)
        elapsed = time.perf_counter() - start

    assert len(results) == 3
    assert elapsed >= max(delays.values())
    assert elapsed < sum(delays.values())


@pytest.mark.asyncio
async def test_execute_parallel_over_http(http_client: httpx.AsyncClient, mock_providers):
    """End-to-end through respx with one provider returning 503."""
    routes = mock_providers(modelC=httpx.Response(503))

    results = await execute_parallel("Hello", http_client)

    assert results["modelA"].as_text() == "Answer from A"
    assert results["modelB"].as_text() == "Answer from B"
    assert results["modelC"].as_text() == "Error calling Model C: Request failed with status code 503"
    assert all(route.call_count == 1 for route in routes.values())
