"""winescribe domain models: re-exports all public model classes.

The models are organized by concern:
    - generation.py: request, facts, verdict, usage and final content
    - pipeline.py  : pipeline phases, state snapshot and stage tunables
    - images.py    : image search results
"""

from __future__ import annotations

from winescribe.models.generation import (
    BlogSummary,
    FactSet,
    GeneratedContent,
    GenerationRequest,
    LengthConfig,
    LengthTier,
    LLMCompletion,
    TokenUsage,
    VerificationVerdict,
)
from winescribe.models.images import ImageResult, ImageSearchResult
from winescribe.models.pipeline import (
    PHASE_TRANSITIONS,
    GenerationPhase,
    GenerationState,
    PipelineConfig,
    StageParams,
)

__all__ = [
    "BlogSummary",
    "FactSet",
    "GeneratedContent",
    "GenerationPhase",
    "GenerationRequest",
    "GenerationState",
    "ImageResult",
    "ImageSearchResult",
    "LLMCompletion",
    "LengthConfig",
    "LengthTier",
    "PHASE_TRANSITIONS",
    "PipelineConfig",
    "StageParams",
    "TokenUsage",
    "VerificationVerdict",
]
