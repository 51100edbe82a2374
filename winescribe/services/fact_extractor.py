"""Fact extraction from a language model's own knowledge.

Asks the model what it *confidently* knows about a wine: producer
history, region, grape variety, winemaking, awards and price tier.  The
answer is kept as opaque text and handed to the generator as the
grounding block.

Grounding is best-effort.  If the call fails for any reason the
extractor logs it and returns an empty FactSet, and generation proceeds
on general wine knowledge alone.
"""

from __future__ import annotations

from winescribe.config.prompts import FACT_EXTRACTION_PROMPT, FACT_EXTRACTION_SYSTEM_PROMPT
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import FactSet, TokenUsage
from winescribe.models.pipeline import StageParams
from winescribe.utils.logging import get_logger


class FactExtractor:
    """Extracts a FactSet for a wine description."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        params: StageParams | None = None,
    ) -> None:
        self._llm = llm_provider
        self._params = params or StageParams(temperature=0.5, max_tokens=1500)
        self._logger = get_logger(__name__)

    async def extract(self, wine_info: str, model: str) -> tuple[FactSet, TokenUsage]:
        """Return the facts the model is sure about, and the tokens spent.

        Parameters
        ----------
        wine_info:
            The user message describing the wine (already validated as
            non-empty by the orchestrator).
        model:
            API model name to query.

        Returns
        -------
        tuple[FactSet, TokenUsage]
            An empty FactSet with zero usage when the call fails.
        """
        self._logger.info("fact_extraction_start", model=model, chars=len(wine_info))
        try:
            completion = await self._llm.complete(
                system_prompt=FACT_EXTRACTION_SYSTEM_PROMPT,
                user_prompt=FACT_EXTRACTION_PROMPT.format(wine_info=wine_info),
                temperature=self._params.temperature,
                max_tokens=self._params.max_tokens or 1500,
                model=model,
            )
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "fact_extraction_failed",
                model=model,
                provider=self._llm.get_provider_name(),
                error=str(exc),
            )
            return FactSet(), TokenUsage()

        facts = FactSet(
            text=completion.text.strip(),
            sources=[f"{model} 학습 데이터 기반 검증"],
        )
        self._logger.info(
            "fact_extraction_complete",
            model=model,
            fact_chars=len(facts.text),
            empty=facts.is_empty,
        )
        return facts, completion.usage
