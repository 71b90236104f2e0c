"""
Configuration management using Pydantic Settings.
Loads from environment variables and .env files (cascading).

.env Precedence (highest to lowest):
1. Environment variables (already set in os.environ)
2. Project .env (current directory / project root)
3. User .env (~/.ai_compare/.env) - fallback for pip installs
"""

import json
import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, EnvSettingsSource, PydanticBaseSettingsSource, SettingsConfigDict

from ai_compare.constants import DEFAULT_MAX_OUTPUT_TOKENS

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = ["*"]


def get_user_env_path() -> Path:
    """Get path to user .env file (~/.ai_compare/.env)."""
    return Path.home() / ".ai_compare" / ".env"


def load_env_files() -> None:
    """Load .env files in precedence order.

    With override=False the FIRST value loaded wins, so the project .env is
    loaded before the user fallback.
    """
    load_dotenv(override=False)

    user_env = get_user_env_path()
    if user_env.exists():
        load_dotenv(user_env, override=False)
        logger.debug(f"Loaded fallback user .env from {user_env}")


load_env_files()


class CustomEnvSettingsSource(EnvSettingsSource):
    """Environment source that leaves CORS_ORIGINS as a raw string for the validator."""

    def prepare_field_value(self, field_name: str, field: Any, value: Any, value_is_complex: bool) -> Any:
        if field_name == "cors_origins" and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Provider credentials. Absence is only noticed when a provider is called.
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    anthropic_api_key: str | None = Field(default=None, alias="ANTHROPIC_API_KEY")
    google_api_key: str | None = Field(default=None, alias="GOOGLE_API_KEY")

    # Outbound calls
    max_output_tokens: int = Field(default=DEFAULT_MAX_OUTPUT_TOKENS, ge=1, alias="MAX_OUTPUT_TOKENS")
    provider_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        alias="PROVIDER_TIMEOUT_SECONDS",
        description="Per-provider request timeout in seconds. Unset means no timeout.",
    )

    # Server settings
    server_name: str = Field(default="AI Compare", alias="SERVER_NAME")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    static_dir: str = Field(
        default="public",
        alias="STATIC_DIR",
        description="Front-end bundle served at '/'. Ignored if the directory does not exist.",
    )
    cors_origins: list[str] = Field(default=DEFAULT_CORS_ORIGINS, alias="CORS_ORIGINS")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            CustomEnvSettingsSource(settings_cls),  # Reads from os.environ (populated by load_dotenv)
            file_secret_settings,
        )

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins_from_env(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Parse CORS_ORIGINS from JSON array or comma-separated string."""
        for key in ["cors_origins", "CORS_ORIGINS"]:
            if key in data and isinstance(data[key], str):
                value = data[key].strip()

                if value.startswith("[") and value.endswith("]"):
                    try:
                        parsed = json.loads(value)
                        if isinstance(parsed, list):
                            data[key] = parsed
                            continue
                    except json.JSONDecodeError:
                        pass  # Fall through to comma-separated parsing

                origins = [origin.strip() for origin in value.split(",") if origin.strip()]
                data[key] = origins if origins else list(DEFAULT_CORS_ORIGINS)
        return data


# Global settings instance
settings = Settings()
