"""Comparison relay: validate a prompt, fan it out, fan the answers back in."""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from ai_compare.constants import EMPTY_PROMPT_ERROR
from ai_compare.errors import PromptValidationError
from ai_compare.schemas.compare import CompareResponse
from ai_compare.utils.helpers import preview
from ai_compare.utils.runner import execute_parallel

logger = logging.getLogger(__name__)


def validate_prompt(prompt: Any) -> str:
    """Return the prompt unchanged if it is a non-blank string.

    Raises:
        PromptValidationError: If the prompt is missing, not a string, or blank
    """
    # A bare U+FEFF (byte order mark) also counts as blank
    if not isinstance(prompt, str) or not prompt.replace("\ufeff", "").strip():
        raise PromptValidationError(EMPTY_PROMPT_ERROR)
    return prompt


async def compare_impl(prompt: Any, http_client: httpx.AsyncClient) -> CompareResponse:
    """Run one comparison across all providers.

    Provider failures come back as error strings in their slot; only
    validation errors and defects raise.
    """
    prompt = validate_prompt(prompt)

    logger.info(f'[COMPARE] [{datetime.now(UTC).isoformat()}] Comparing prompt: "{preview(prompt)}..."')

    results = await execute_parallel(prompt, http_client)

    failed = [r.metadata.label for r in results.values() if r.status == "error"]
    if failed:
        logger.warning(f"[COMPARE] {len(results) - len(failed)}/{len(results)} succeeded. Failed: {', '.join(failed)}")
    else:
        logger.info(f"[COMPARE] Complete: all {len(results)} providers succeeded")

    return CompareResponse.from_results(results)
