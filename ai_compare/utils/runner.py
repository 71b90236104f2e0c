"""Parallel provider execution."""

import asyncio
import logging

import httpx

from ai_compare.providers.client import ProviderClient
from ai_compare.providers.config import PROVIDERS, ProviderConfig
from ai_compare.schemas.base import ProviderResult

logger = logging.getLogger(__name__)


async def execute_parallel(
    prompt: str,
    http_client: httpx.AsyncClient,
    providers: list[ProviderConfig] | None = None,
) -> dict[str, ProviderResult]:
    """Send one prompt to every provider concurrently and wait for all of them.

    Args:
        prompt: Validated user prompt
        http_client: Shared httpx AsyncClient
        providers: Providers to call (default: all configured slots)

    Returns:
        dict mapping slot to ProviderResult, in provider order. Failed
        providers are present with status 'error'.
    """
    if providers is None:
        providers = list(PROVIDERS.values())

    client = ProviderClient(http_client)
    logger.info(f"[RUNNER] Executing {len(providers)} providers in parallel")

    # ProviderClient.execute never raises, so gather always sees every branch settle
    results: list[ProviderResult] = await asyncio.gather(*(client.execute(provider, prompt) for provider in providers))

    successes = sum(1 for r in results if r.status == "success")
    logger.info(f"[RUNNER] Complete: {successes}/{len(results)} providers succeeded")

    return {provider.slot: result for provider, result in zip(providers, results, strict=True)}
