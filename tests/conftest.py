"""Shared pytest fixtures for the winescribe test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from winescribe.config.settings import Settings
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import GenerationRequest, LLMCompletion, TokenUsage
from winescribe.models.pipeline import PipelineConfig
from winescribe.pipeline.orchestrator import BlogGenerationPipeline
from winescribe.services.content_corrector import ContentCorrector
from winescribe.services.content_generator import ContentGenerator
from winescribe.services.content_verifier import ContentVerifier
from winescribe.services.fact_extractor import FactExtractor


def _completion(text: str, prompt_tokens: int = 10, completion_tokens: int = 20) -> LLMCompletion:
    """Build an LLMCompletion with consistent usage numbers."""
    return LLMCompletion(
        text=text,
        usage=TokenUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        ),
        model="gpt-5-mini",
    )


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Settings with fake keys and no .env lookups."""
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        openai_base_url="",
        anthropic_api_key="",
        unsplash_access_key="",
    )


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Return a minimal configuration dict shaped like config/config.yaml."""
    return {
        "app": {"name": "winescribe", "version": "0.1.0"},
        "cors": {"allowed_origins": ["*"]},
        "pipeline": {
            "fact_extraction": {"temperature": 0.5, "max_tokens": 1500},
            "generation": {"temperature": 0.5},
            "verification": {"temperature": 0.5, "max_tokens": 1000},
            "correction": {"temperature": 0.3},
        },
    }


# ---------------------------------------------------------------------------
# Mock provider fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm_provider() -> ILLMProvider:
    """Mock ILLMProvider that returns configurable completions.

    Default complete() returns a plain "ok" completion.  Override with
    ``mock_llm_provider.complete.side_effect = [...]`` to script a
    sequence of stage responses.
    """
    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = "openai"
    mock.is_available.return_value = True
    mock.complete = AsyncMock(return_value=_completion("ok"))
    return mock


@pytest.fixture
def pipeline(mock_llm_provider: ILLMProvider) -> BlogGenerationPipeline:
    """A real pipeline whose every stage talks to ``mock_llm_provider``."""
    config = PipelineConfig()
    return BlogGenerationPipeline(
        llm_provider=mock_llm_provider,
        fact_extractor=FactExtractor(mock_llm_provider, config.fact_extraction),
        content_generator=ContentGenerator(mock_llm_provider, config.generation),
        content_verifier=ContentVerifier(mock_llm_provider, config.verification),
        content_corrector=ContentCorrector(mock_llm_provider, config.correction),
    )


@pytest.fixture
def chateau_request() -> GenerationRequest:
    return GenerationRequest(wine_name="Chateau Test", vintage="2020", length="short")
