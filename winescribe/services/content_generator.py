"""Fact-grounded blog draft generation.

The system message stacks four blocks:

    base persona  +  grounding rules  +  verified facts  +  style example

so the model is told what it may assert (the FactSet and general wine
knowledge), what it must silently leave out, and what a finished post
looks like for the requested length tier.
"""

from __future__ import annotations

from winescribe.config.prompts import (
    FACT_FALLBACK,
    GROUNDING_RULES,
    SYSTEM_PROMPT,
    get_example_post,
)
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import (
    FactSet,
    GenerationRequest,
    LengthConfig,
    LLMCompletion,
)
from winescribe.models.pipeline import StageParams
from winescribe.utils.logging import get_logger

_USER_MESSAGE_INTRO = "다음 정보를 바탕으로 와인 홍보 블로그 글을 작성해주세요:"
_HIGHLIGHTS_LABEL = "특별히 강조해야 할 포인트"


def build_user_message(request: GenerationRequest, length_config: LengthConfig) -> str:
    """Render a request as the user message shared by extraction and generation."""
    sections: list[str] = [_USER_MESSAGE_INTRO]

    description = (request.prompt or "").strip()
    if description:
        sections.append(description)

    fields = request.structured_fields()
    if fields:
        sections.append("\n".join(f"- {label}: {value}" for label, value in fields))

    highlights = [h.strip() for h in (request.highlights or []) if h and h.strip()]
    if highlights:
        sections.append(f"{_HIGHLIGHTS_LABEL}: {', '.join(highlights)}")

    sections.append(length_config.instruction)
    return "\n\n".join(sections)


def build_system_prompt(facts: FactSet, length_config: LengthConfig) -> str:
    """Assemble the grounded system message for one generation call."""
    fact_block = FACT_FALLBACK if facts.is_empty else facts.text
    return (
        f"{SYSTEM_PROMPT}\n\n"
        f"{GROUNDING_RULES}\n\n"
        f"=== 검증된 정보 ===\n{fact_block}\n===================\n\n"
        f"## 참고 예시 ({length_config.label} 버전)\n"
        f"{get_example_post(length_config.tier)}"
    )


class ContentGenerator:
    """Writes the blog draft from a request and its FactSet."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        params: StageParams | None = None,
    ) -> None:
        self._llm = llm_provider
        self._params = params or StageParams(temperature=0.5)
        self._logger = get_logger(__name__)

    async def generate(
        self,
        user_message: str,
        facts: FactSet,
        length_config: LengthConfig,
        model: str,
    ) -> LLMCompletion:
        """Request the draft.

        An empty completion is returned as-is; there is no retry here.
        Provider errors propagate to the orchestrator.
        """
        system_prompt = build_system_prompt(facts, length_config)
        self._logger.info(
            "generation_start",
            model=model,
            length=length_config.tier.value,
            grounded=not facts.is_empty,
        )
        completion = await self._llm.complete(
            system_prompt=system_prompt,
            user_prompt=user_message,
            temperature=self._params.temperature,
            max_tokens=self._params.max_tokens or length_config.max_tokens,
            model=model,
        )
        if not completion.text:
            self._logger.warning("generation_empty", model=model)
        return completion
