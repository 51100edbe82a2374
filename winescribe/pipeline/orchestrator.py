"""Central orchestrator for the fact-grounded blog generation pipeline.

Coordinates fact extraction, grounded generation, verification and the
optional correction pass into one strictly sequential chain of model
calls.  Each phase advances a frozen :class:`GenerationState` via
``model_copy`` and logs a ``pipeline_phase`` event.

    EXTRACTING_FACTS → GENERATING → VERIFYING → (CORRECTING) → DONE

Failure policy per phase:
    - Fact extraction and verification degrade locally (empty facts,
      valid verdict) inside their services and never reach this class.
    - Generation and correction failures abort the request as
      :class:`GenerationError`.

The static contact footer is appended exactly once, to whichever draft
survives, when the state reaches DONE.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from winescribe.config.model_catalog import estimate_cost, resolve_model
from winescribe.config.prompts import CONTACT_TEMPLATE, get_length_config
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import GeneratedContent, GenerationRequest
from winescribe.models.pipeline import (
    PHASE_TRANSITIONS,
    GenerationPhase,
    GenerationState,
)
from winescribe.services.content_corrector import ContentCorrector
from winescribe.services.content_generator import ContentGenerator, build_user_message
from winescribe.services.content_verifier import ContentVerifier
from winescribe.services.fact_extractor import FactExtractor
from winescribe.utils.errors import GenerationError, InvalidRequestError, WinescribeError
from winescribe.utils.logging import get_logger

MISSING_SUBJECT_MESSAGE = "와인 정보를 입력해주세요."


class BlogGenerationPipeline:
    """Runs one generation request through all pipeline phases.

    All services are injected at construction time; the orchestrator
    never creates them.  The LLM provider is only consulted for its name,
    which decides the model catalog used to resolve ``request.model``.
    """

    def __init__(
        self,
        llm_provider: ILLMProvider,
        fact_extractor: FactExtractor,
        content_generator: ContentGenerator,
        content_verifier: ContentVerifier,
        content_corrector: ContentCorrector,
    ) -> None:
        self._llm = llm_provider
        self._fact_extractor = fact_extractor
        self._content_generator = content_generator
        self._content_verifier = content_verifier
        self._content_corrector = content_corrector
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @staticmethod
    def validate_request(request: GenerationRequest) -> None:
        """Reject a request with neither a description nor a wine name.

        Raises
        ------
        InvalidRequestError
            Before any model call is made.
        """
        if not request.has_subject():
            raise InvalidRequestError(message=MISSING_SUBJECT_MESSAGE)

    def _advance(self, state: GenerationState, phase: GenerationPhase) -> GenerationState:
        if phase not in PHASE_TRANSITIONS[state.current_phase]:
            raise GenerationError(
                message=f"Illegal phase transition {state.current_phase.value} -> {phase.value}"
            )
        self._logger.info(
            "pipeline_phase",
            phase=phase.value,
            model=state.model,
            usage_total=state.usage.total_tokens,
        )
        return state.model_copy(update={"current_phase": phase})

    async def run(self, request: GenerationRequest) -> GeneratedContent:
        """Generate a blog post for *request*.

        Raises
        ------
        InvalidRequestError
            If the request has no description and no wine name.
        GenerationError
            If the generation or correction call fails.  The message of
            the underlying provider error is preserved so the API layer
            can classify credential problems.
        """
        self.validate_request(request)

        model_spec = resolve_model(request.model, self._llm.get_provider_name())
        length_config = get_length_config(request.length)
        state = GenerationState(
            request=request,
            model=model_spec.api_model,
            length_config=length_config,
            user_message=build_user_message(request, length_config),
        )
        self._logger.info(
            "pipeline_start",
            model=model_spec.id,
            requested_model=request.model,
            length=length_config.tier.value,
        )

        # --- Fact extraction (never raises) ---
        facts, usage = await self._fact_extractor.extract(state.user_message, state.model)
        state = state.model_copy(update={"facts": facts, "usage": state.usage + usage})

        # --- Generation ---
        state = self._advance(state, GenerationPhase.GENERATING)
        try:
            completion = await self._content_generator.generate(
                state.user_message, state.facts, state.length_config, state.model
            )
        except WinescribeError as exc:
            self._logger.error("generation_failed", model=state.model, error=str(exc))
            raise GenerationError(
                message=exc.message, provider_name=exc.provider_name
            ) from exc
        state = state.model_copy(
            update={"draft": completion.text, "usage": state.usage + completion.usage}
        )

        # --- Verification (never raises) ---
        state = self._advance(state, GenerationPhase.VERIFYING)
        verdict, usage = await self._content_verifier.verify(
            state.draft, state.facts, state.model
        )
        state = state.model_copy(update={"verdict": verdict, "usage": state.usage + usage})

        # --- Correction (at most once) ---
        if not verdict.is_valid and verdict.issues:
            state = self._advance(state, GenerationPhase.CORRECTING)
            try:
                correction = await self._content_corrector.correct(
                    state.draft,
                    list(verdict.issues),
                    state.model,
                    state.length_config.max_tokens,
                )
            except WinescribeError as exc:
                self._logger.error("correction_failed", model=state.model, error=str(exc))
                raise GenerationError(
                    message=exc.message, provider_name=exc.provider_name
                ) from exc
            update = {"usage": state.usage + correction.usage}
            if correction.text.strip():
                update["draft"] = correction.text
                update["corrected"] = True
            state = state.model_copy(update=update)

        state = self._advance(state, GenerationPhase.DONE)
        state = state.model_copy(
            update={"completed_at": datetime.now(tz=timezone.utc)}  # noqa: UP017
        )

        elapsed = (state.completed_at - state.started_at).total_seconds()
        self._logger.info(
            "pipeline_complete",
            model=model_spec.id,
            corrected=state.corrected,
            grounded=not state.facts.is_empty,
            prompt_tokens=state.usage.prompt_tokens,
            completion_tokens=state.usage.completion_tokens,
            estimated_cost_usd=estimate_cost(model_spec.id, state.usage),
            elapsed_seconds=round(elapsed, 3),
        )

        return GeneratedContent(
            content=state.draft + CONTACT_TEMPLATE,
            draft=state.draft,
            facts=state.facts,
            verdict=state.verdict,
            corrected=state.corrected,
            model=model_spec.id,
            length=state.length_config.tier,
            usage=state.usage,
        )
