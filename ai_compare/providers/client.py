"""HTTP client that runs one provider call and normalizes the outcome."""

import logging
import time

import httpx

from ai_compare.errors import ProviderError
from ai_compare.providers.config import ProviderConfig
from ai_compare.schemas.base import ProviderResult, ProviderResultMetadata
from ai_compare.settings import settings

logger = logging.getLogger(__name__)


def _describe_failure(exc: Exception) -> str:
    """Turn an exception into the cause shown after 'Error calling <Label>: '."""
    if isinstance(exc, httpx.HTTPStatusError):
        return f"Request failed with status code {exc.response.status_code}"
    if isinstance(exc, httpx.TimeoutException):
        if settings.provider_timeout_seconds is None:
            return "Request timed out"
        return f"Request timed out after {settings.provider_timeout_seconds}s"
    return str(exc) or exc.__class__.__name__


class ProviderClient:
    """Calls provider endpoints through a shared httpx AsyncClient."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
        """
        self._client = http_client

    def _get_credential(self, provider: ProviderConfig) -> str:
        """Read the provider's API key from settings.

        Raises:
            ProviderError: If the credential is not configured
        """
        settings_attr, _ = provider.credential
        value = getattr(settings, settings_attr, None)
        if not value:
            raise ProviderError(f"{provider.env_var} is not set")
        return value

    async def _post(self, provider: ProviderConfig, prompt: str) -> str:
        api_key = self._get_credential(provider)

        response = await self._client.post(
            provider.url,
            json=provider.build_body(prompt, provider.model, settings.max_output_tokens),
            headers=provider.build_headers(api_key),
            params=provider.build_params(api_key),
            timeout=settings.provider_timeout_seconds,
        )
        response.raise_for_status()

        try:
            text = provider.extract_text(response.json())
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Unexpected response shape from {provider.label}") from e
        if not isinstance(text, str):
            raise ProviderError(f"Unexpected response shape from {provider.label}")
        return text

    async def execute(self, provider: ProviderConfig, prompt: str) -> ProviderResult:
        """Send the prompt to one provider.

        Args:
            provider: Provider configuration record
            prompt: Validated user prompt

        Returns:
            ProviderResult with status 'success' and the generated text, or
            status 'error' and the failure cause. Never raises.
        """
        logger.info(f"[PROVIDER_CALL] slot={provider.slot} model={provider.model}")
        start_time = time.perf_counter()

        try:
            content = await self._post(provider, prompt)
        except Exception as e:
            latency_ms = int((time.perf_counter() - start_time) * 1000)
            error = _describe_failure(e)
            logger.error(f"[PROVIDER_CALL] {provider.label} failed after {latency_ms}ms: {error}")
            return ProviderResult.error_response(
                error=error,
                provider=provider.slot,
                label=provider.label,
                model=provider.model,
                latency_ms=latency_ms,
            )

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(f"[PROVIDER_CALL] {provider.label} succeeded in {latency_ms}ms ({len(content)} chars)")
        return ProviderResult(
            content=content,
            status="success",
            metadata=ProviderResultMetadata(
                provider=provider.slot,
                label=provider.label,
                model=provider.model,
                latency_ms=latency_ms,
            ),
        )
