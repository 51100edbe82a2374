"""Model catalog and pricing table.

Maps the public model identifiers a caller may send (``"gpt-5-mini"``)
to the provider that serves them and the per-token price used for cost
logging.  Like the prompt store, the table is immutable and loaded once.
"""

from __future__ import annotations

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from winescribe.models.generation import TokenUsage


class ModelSpec(BaseModel):
    """One selectable model."""

    model_config = ConfigDict(frozen=True)

    id: str
    provider: str
    api_model: str
    # USD per one million tokens.
    input_price: float
    output_price: float


MODEL_CATALOG: MappingProxyType[str, ModelSpec] = MappingProxyType(
    {
        "gpt-5.2": ModelSpec(
            id="gpt-5.2", provider="openai", api_model="gpt-5.2",
            input_price=1.75, output_price=14.0,
        ),
        "gpt-5-mini": ModelSpec(
            id="gpt-5-mini", provider="openai", api_model="gpt-5-mini",
            input_price=0.25, output_price=2.0,
        ),
        "gpt-5-nano": ModelSpec(
            id="gpt-5-nano", provider="openai", api_model="gpt-5-nano",
            input_price=0.05, output_price=0.40,
        ),
        "gpt-4o-mini": ModelSpec(
            id="gpt-4o-mini", provider="openai", api_model="gpt-4o-mini",
            input_price=0.15, output_price=0.60,
        ),
        "claude-sonnet-4-5": ModelSpec(
            id="claude-sonnet-4-5", provider="anthropic", api_model="claude-sonnet-4-5",
            input_price=3.0, output_price=15.0,
        ),
        "claude-haiku-4-5": ModelSpec(
            id="claude-haiku-4-5", provider="anthropic", api_model="claude-haiku-4-5",
            input_price=1.0, output_price=5.0,
        ),
    }
)

# Used for blog generation when the caller sends no model or an unknown one.
DEFAULT_MODELS: MappingProxyType[str, str] = MappingProxyType(
    {"openai": "gpt-5-mini", "anthropic": "claude-sonnet-4-5"}
)

# Cheaper models for the single-call modify and summarize endpoints.
UTILITY_MODELS: MappingProxyType[str, str] = MappingProxyType(
    {"openai": "gpt-4o-mini", "anthropic": "claude-haiku-4-5"}
)


def resolve_model(requested: str | None, provider_name: str) -> ModelSpec:
    """Return the catalog entry for *requested* if *provider_name* serves it.

    Unknown identifiers, and identifiers belonging to a different
    provider, fall back to that provider's default model.
    """
    spec = MODEL_CATALOG.get((requested or "").strip())
    if spec is not None and spec.provider == _base_provider(provider_name):
        return spec
    return MODEL_CATALOG[DEFAULT_MODELS[_base_provider(provider_name)]]


def utility_model(provider_name: str) -> ModelSpec:
    """Return the utility model for *provider_name*."""
    return MODEL_CATALOG[UTILITY_MODELS[_base_provider(provider_name)]]


def estimate_cost(model_id: str, usage: TokenUsage) -> float | None:
    """Estimate the USD cost of *usage* on *model_id*; ``None`` if unpriced."""
    spec = MODEL_CATALOG.get(model_id)
    if spec is None:
        return None
    cost = (
        usage.prompt_tokens * spec.input_price
        + usage.completion_tokens * spec.output_price
    ) / 1_000_000
    return round(cost, 6)


def _base_provider(provider_name: str) -> str:
    # "openai-compatible" endpoints accept the OpenAI catalog.
    if provider_name.startswith("openai"):
        return "openai"
    return provider_name
