"""Surgical correction of a draft the verifier rejected."""

from __future__ import annotations

from winescribe.config.prompts import CORRECTION_PROMPT, CORRECTION_SYSTEM_PROMPT
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import LLMCompletion
from winescribe.models.pipeline import StageParams
from winescribe.utils.logging import get_logger


class ContentCorrector:
    """Asks the model to fix only the flagged spans of a draft.

    Errors propagate; keeping the original draft on empty output is the
    orchestrator's decision.
    """

    def __init__(
        self,
        llm_provider: ILLMProvider,
        params: StageParams | None = None,
    ) -> None:
        self._llm = llm_provider
        self._params = params or StageParams(temperature=0.3)
        self._logger = get_logger(__name__)

    async def correct(
        self,
        content: str,
        issues: list[str],
        model: str,
        max_tokens: int,
    ) -> LLMCompletion:
        self._logger.info("correction_start", model=model, issues=len(issues))
        completion = await self._llm.complete(
            system_prompt=CORRECTION_SYSTEM_PROMPT,
            user_prompt=CORRECTION_PROMPT.format(issues="\n".join(issues), content=content),
            temperature=self._params.temperature,
            max_tokens=self._params.max_tokens or max_tokens,
            model=model,
        )
        self._logger.info(
            "correction_complete",
            model=model,
            chars=len(completion.text),
            empty=not completion.text.strip(),
        )
        return completion
