"""Provider configuration: one record per comparison slot."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final

JSON_HEADERS: Final[dict[str, str]] = {"Content-Type": "application/json"}

ANTHROPIC_VERSION: Final[str] = "2023-06-01"


# =============================================================================
# Request builders
# =============================================================================


def _bearer_headers(api_key: str) -> dict[str, str]:
    return {**JSON_HEADERS, "Authorization": f"Bearer {api_key}"}


def _anthropic_headers(api_key: str) -> dict[str, str]:
    return {**JSON_HEADERS, "x-api-key": api_key, "anthropic-version": ANTHROPIC_VERSION}


def _no_auth_headers(api_key: str) -> dict[str, str]:
    return dict(JSON_HEADERS)


def _no_params(api_key: str) -> dict[str, str]:
    return {}


def _key_param(api_key: str) -> dict[str, str]:
    return {"key": api_key}


def _chat_completion_body(prompt: str, model: str, max_tokens: int) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": max_tokens,
    }


def _messages_body(prompt: str, model: str, max_tokens: int) -> dict[str, Any]:
    return {
        "model": model,
        "max_tokens": max_tokens,
        "messages": [{"role": "user", "content": prompt}],
    }


def _generate_content_body(prompt: str, model: str, max_tokens: int) -> dict[str, Any]:
    # generateContent takes the model from the URL and is sent without an output cap
    return {"contents": [{"parts": [{"text": prompt}]}]}


# =============================================================================
# Response extractors
# =============================================================================
# Each extractor follows one fixed JSON path. KeyError, IndexError and
# TypeError signal an unexpected shape and are handled by ProviderClient.


def _chat_completion_text(data: Any) -> str:
    return data["choices"][0]["message"]["content"]


def _messages_text(data: Any) -> str:
    return data["content"][0]["text"]


def _generate_content_text(data: Any) -> str:
    return data["candidates"][0]["content"]["parts"][0]["text"]


# =============================================================================
# Provider Configuration
# =============================================================================


@dataclass(frozen=True)
class ProviderConfig:
    """Everything needed to call one provider and read its answer."""

    slot: str  # Response field this provider fills (e.g., "modelA")
    label: str  # Human-readable name used in error text (e.g., "Model A")
    url: str
    model: str
    credential: tuple[str, str]  # (settings_attr, env_var_name)
    build_headers: Callable[[str], dict[str, str]]
    build_params: Callable[[str], dict[str, str]]
    build_body: Callable[[str, str, int], dict[str, Any]]
    extract_text: Callable[[Any], str]

    def __post_init__(self) -> None:
        """Validate the record.

        Raises:
            ValueError: If a required string field is empty
        """
        for field_name in ("slot", "label", "url", "model"):
            if not getattr(self, field_name):
                raise ValueError(f"ProviderConfig '{self.label or self.slot}' must have a non-empty {field_name}")

        if not isinstance(self.credential, tuple) or len(self.credential) != 2 or not all(self.credential):
            raise ValueError(f"ProviderConfig '{self.label}' credential must be a (settings_attr, env_var) pair")

    @property
    def env_var(self) -> str:
        return self.credential[1]


# Maps response slot to ProviderConfig, in response order.
#
# To swap a provider, replace its entry here and the matching credential
# field on Settings in ai_compare/settings.py.
PROVIDERS: Final[dict[str, ProviderConfig]] = {
    "modelA": ProviderConfig(
        slot="modelA",
        label="Model A",
        url="https://api.openai.com/v1/chat/completions",
        model="gpt-4",
        credential=("openai_api_key", "OPENAI_API_KEY"),
        build_headers=_bearer_headers,
        build_params=_no_params,
        build_body=_chat_completion_body,
        extract_text=_chat_completion_text,
    ),
    "modelB": ProviderConfig(
        slot="modelB",
        label="Model B",
        url="https://api.anthropic.com/v1/messages",
        model="claude-3-opus-20240229",
        credential=("anthropic_api_key", "ANTHROPIC_API_KEY"),
        build_headers=_anthropic_headers,
        build_params=_no_params,
        build_body=_messages_body,
        extract_text=_messages_text,
    ),
    "modelC": ProviderConfig(
        slot="modelC",
        label="Model C",
        url="https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent",
        model="gemini-pro",
        credential=("google_api_key", "GOOGLE_API_KEY"),
        build_headers=_no_auth_headers,
        build_params=_key_param,
        build_body=_generate_content_body,
        extract_text=_generate_content_text,
    ),
}
