"""Base schema models for provider calls."""

from typing import Literal

from pydantic import BaseModel, Field


class ProviderResultMetadata(BaseModel):
    """Metadata about a single provider call."""

    provider: str = Field(..., description="Provider slot key (e.g., 'modelA')")
    label: str = Field(..., description="Human-readable provider label used in error text")
    model: str = Field(default="unknown", description="Provider model identifier")
    latency_ms: int = Field(default=0, description="Provider call latency in milliseconds")


class ProviderResult(BaseModel):
    """Tagged result of one provider call. Flattened to a string at the JSON boundary."""

    content: str = Field(default="", description="Generated text (empty on error)")
    status: Literal["success", "error"] = Field(..., description="'success' or 'error'")
    error: str | None = Field(default=None, description="Failure cause if status is 'error'")
    metadata: ProviderResultMetadata = Field(..., description="Execution metadata")

    @classmethod
    def error_response(
        cls,
        error: str | None,
        provider: str,
        label: str,
        model: str = "unknown",
        latency_ms: int = 0,
    ) -> "ProviderResult":
        """Create an error result with default values."""
        if not error:
            error = "Unknown error"
        return cls(
            status="error",
            error=error,
            metadata=ProviderResultMetadata(provider=provider, label=label, model=model, latency_ms=latency_ms),
        )

    def as_text(self) -> str:
        """Flatten to the plain string returned to clients."""
        if self.status == "success":
            return self.content
        return f"Error calling {self.metadata.label}: {self.error}"
