"""Compare endpoint schema models."""

from pydantic import BaseModel, ConfigDict, Field

from ai_compare.schemas.base import ProviderResult


class CompareRequest(BaseModel):
    """Body of POST /api/compare. Blank prompts are rejected by the relay."""

    prompt: str | None = Field(default=None, description="Prompt sent to every provider")


class CompareResponse(BaseModel):
    """One plain-string slot per provider; failed providers carry an error string."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    model_a: str = Field(..., alias="modelA")
    model_b: str = Field(..., alias="modelB")
    model_c: str = Field(..., alias="modelC")

    @classmethod
    def from_results(cls, results: dict[str, ProviderResult]) -> "CompareResponse":
        """Build from provider results keyed by slot ('modelA', 'modelB', 'modelC')."""
        return cls(**{slot: result.as_text() for slot, result in results.items()})


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
