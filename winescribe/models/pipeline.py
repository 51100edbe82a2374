"""Pipeline state and configuration models.

``GenerationState`` is the single source of truth while a request moves
through the pipeline.  It is frozen: the orchestrator advances it with
``model_copy(update={...})`` so every intermediate state can be logged
without worrying about partially-mutated objects.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from winescribe.models.generation import (
    FactSet,
    GenerationRequest,
    LengthConfig,
    TokenUsage,
    VerificationVerdict,
)


class GenerationPhase(str, Enum):  # noqa: UP042
    """Phases of the generation pipeline, in the only order they may occur.

        EXTRACTING_FACTS → GENERATING → VERIFYING → (CORRECTING) → DONE
    """

    EXTRACTING_FACTS = "EXTRACTING_FACTS"
    GENERATING = "GENERATING"
    VERIFYING = "VERIFYING"
    CORRECTING = "CORRECTING"
    DONE = "DONE"


# Allowed forward transitions.  CORRECTING is optional, so VERIFYING may
# jump straight to DONE.
PHASE_TRANSITIONS: dict[GenerationPhase, frozenset[GenerationPhase]] = {
    GenerationPhase.EXTRACTING_FACTS: frozenset({GenerationPhase.GENERATING}),
    GenerationPhase.GENERATING: frozenset({GenerationPhase.VERIFYING}),
    GenerationPhase.VERIFYING: frozenset(
        {GenerationPhase.CORRECTING, GenerationPhase.DONE}
    ),
    GenerationPhase.CORRECTING: frozenset({GenerationPhase.DONE}),
    GenerationPhase.DONE: frozenset(),
}


class GenerationState(BaseModel):
    """Snapshot of one generation request."""

    model_config = ConfigDict(frozen=True)

    request: GenerationRequest
    model: str
    length_config: LengthConfig
    user_message: str
    current_phase: GenerationPhase = GenerationPhase.EXTRACTING_FACTS
    facts: FactSet = Field(default_factory=FactSet)
    draft: str = ""
    verdict: VerificationVerdict = Field(default_factory=VerificationVerdict)
    corrected: bool = False
    usage: TokenUsage = Field(default_factory=TokenUsage)
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)  # noqa: UP017
    )
    completed_at: datetime | None = None


class StageParams(BaseModel):
    """Sampling parameters for one model call type."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.5, ge=0.0, le=2.0)
    # None means "use the length tier's budget".
    max_tokens: int | None = Field(default=None, gt=0)


class PipelineConfig(BaseModel):
    """Stage tunables loaded once from ``config/config.yaml``."""

    model_config = ConfigDict(frozen=True)

    fact_extraction: StageParams = StageParams(temperature=0.5, max_tokens=1500)
    generation: StageParams = StageParams(temperature=0.5)
    verification: StageParams = StageParams(temperature=0.5, max_tokens=1000)
    correction: StageParams = StageParams(temperature=0.3)
    modification: StageParams = StageParams(temperature=0.5, max_tokens=4000)
    summary: StageParams = StageParams(temperature=0.7, max_tokens=800)
