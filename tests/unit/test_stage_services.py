"""Unit tests for the four pipeline stage services."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from winescribe.config.prompts import (
    CORRECTION_SYSTEM_PROMPT,
    FACT_FALLBACK,
    GROUNDING_RULES,
    SYSTEM_PROMPT,
    get_example_post,
    get_length_config,
)
from winescribe.models.generation import (
    FactSet,
    GenerationRequest,
    LengthTier,
    LLMCompletion,
    TokenUsage,
)
from winescribe.models.pipeline import StageParams
from winescribe.services.content_corrector import ContentCorrector
from winescribe.services.content_generator import (
    ContentGenerator,
    build_system_prompt,
    build_user_message,
)
from winescribe.services.content_verifier import (
    ContentVerifier,
    is_ambiguous,
    parse_verdict,
)
from winescribe.services.fact_extractor import FactExtractor
from winescribe.utils.errors import LLMError


def _completion(text: str, total: int = 30) -> LLMCompletion:
    return LLMCompletion(
        text=text,
        usage=TokenUsage(prompt_tokens=total // 3, completion_tokens=total - total // 3, total_tokens=total),
    )


# ======================================================================
# FactExtractor
# ======================================================================


class TestFactExtractor:
    @pytest.mark.asyncio()
    async def test_returns_stripped_fact_text(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(return_value=_completion("  메독 좌안의 그랑 크뤼  \n"))
        extractor = FactExtractor(mock_llm_provider)

        facts, usage = await extractor.extract("샤또 마고 2015", "gpt-5-mini")

        assert facts.text == "메독 좌안의 그랑 크뤼"
        assert facts.sources == ["gpt-5-mini 학습 데이터 기반 검증"]
        assert usage.total_tokens == 30

    @pytest.mark.asyncio()
    async def test_sends_wine_info_with_configured_params(self, mock_llm_provider) -> None:
        extractor = FactExtractor(mock_llm_provider, StageParams(temperature=0.5, max_tokens=1500))

        await extractor.extract("샤또 마고 2015", "gpt-5-mini")

        kwargs = mock_llm_provider.complete.call_args.kwargs
        assert "샤또 마고 2015" in kwargs["user_prompt"]
        assert kwargs["temperature"] == 0.5
        assert kwargs["max_tokens"] == 1500
        assert kwargs["model"] == "gpt-5-mini"

    @pytest.mark.asyncio()
    async def test_failure_yields_empty_facts(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(side_effect=LLMError("boom", provider_name="openai"))
        extractor = FactExtractor(mock_llm_provider)

        facts, usage = await extractor.extract("샤또 마고", "gpt-5-mini")

        assert facts.is_empty
        assert usage == TokenUsage()

    @pytest.mark.asyncio()
    async def test_unexpected_exception_is_also_absorbed(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(side_effect=RuntimeError("socket closed"))
        facts, _ = await FactExtractor(mock_llm_provider).extract("x", "gpt-5-mini")
        assert facts.is_empty


# ======================================================================
# ContentGenerator
# ======================================================================


class TestBuildUserMessage:
    def test_includes_every_section_in_order(self) -> None:
        request = GenerationRequest(
            prompt="진한 과실향의 레드 와인",
            wine_name="Opus One",
            region="Napa Valley",
            vintage="2018",
            variety="Cabernet Sauvignon",
            highlights=["선물용", "", "한정 수량"],
        )
        length = get_length_config("short")

        message = build_user_message(request, length)

        assert message.split("\n\n")[0] == "다음 정보를 바탕으로 와인 홍보 블로그 글을 작성해주세요:"
        assert "진한 과실향의 레드 와인" in message
        assert "- 와인명: Opus One\n- 생산 지역: Napa Valley\n- 빈티지: 2018\n- 품종: Cabernet Sauvignon" in message
        assert "특별히 강조해야 할 포인트: 선물용, 한정 수량" in message
        assert message.endswith(length.instruction)

    def test_omits_missing_sections(self) -> None:
        message = build_user_message(GenerationRequest(wine_name="Chateau Test"), get_length_config(None))
        assert "특별히 강조해야 할 포인트" not in message
        assert "- 와인명: Chateau Test" in message


class TestBuildSystemPrompt:
    def test_contains_facts_verbatim(self) -> None:
        facts = FactSet(text="1855 그랑 크뤼 클라세 1등급")
        prompt = build_system_prompt(facts, get_length_config("normal"))

        assert prompt.startswith(SYSTEM_PROMPT)
        assert GROUNDING_RULES in prompt
        assert "=== 검증된 정보 ===\n1855 그랑 크뤼 클라세 1등급\n===================" in prompt
        assert FACT_FALLBACK not in prompt

    def test_empty_facts_use_fallback_sentence(self) -> None:
        prompt = build_system_prompt(FactSet(), get_length_config("normal"))
        assert f"=== 검증된 정보 ===\n{FACT_FALLBACK}\n" in prompt

    def test_example_matches_length_tier(self) -> None:
        prompt = build_system_prompt(FactSet(), get_length_config("detailed"))
        assert "## 참고 예시 (상세한 글 버전)" in prompt
        assert prompt.endswith(get_example_post(LengthTier.DETAILED))


class TestContentGenerator:
    @pytest.mark.asyncio()
    async def test_uses_length_tier_token_budget(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(return_value=_completion("본문"))
        generator = ContentGenerator(mock_llm_provider, StageParams(temperature=0.5))

        result = await generator.generate("user msg", FactSet(), get_length_config("detailed"), "gpt-5-mini")

        assert result.text == "본문"
        kwargs = mock_llm_provider.complete.call_args.kwargs
        assert kwargs["max_tokens"] == 6000
        assert kwargs["user_prompt"] == "user msg"

    @pytest.mark.asyncio()
    async def test_empty_output_is_returned_as_is(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(return_value=_completion(""))
        result = await ContentGenerator(mock_llm_provider).generate(
            "m", FactSet(), get_length_config("short"), "gpt-5-mini"
        )
        assert result.text == ""
        assert mock_llm_provider.complete.await_count == 1

    @pytest.mark.asyncio()
    async def test_errors_propagate(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(side_effect=LLMError("401 Unauthorized"))
        with pytest.raises(LLMError):
            await ContentGenerator(mock_llm_provider).generate(
                "m", FactSet(), get_length_config("short"), "gpt-5-mini"
            )


# ======================================================================
# ContentVerifier
# ======================================================================


class TestParseVerdict:
    @pytest.mark.parametrize(
        "response",
        ["1. 없음\n2. 수정 필요 없음", "문제가 없습니다.", "모든 내용이 정확합니다"],
    )
    def test_affirmative_phrases_make_valid(self, response: str) -> None:
        verdict = parse_verdict(response)
        assert verdict.is_valid is True
        assert verdict.issues == []

    def test_critique_becomes_single_issue(self) -> None:
        critique = "1. '세계 최고의 와인' 표현이 과장됨\n2. 해당 표현 삭제 권장"
        verdict = parse_verdict(critique)
        assert verdict.is_valid is False
        assert verdict.issues == [critique]

    def test_empty_response_is_invalid_with_placeholder_issue(self) -> None:
        verdict = parse_verdict("   ")
        assert verdict.is_valid is False
        assert verdict.issues == ["검증 응답이 비어 있습니다"]

    def test_mixed_critique_is_valid(self) -> None:
        response = "1. 빈티지 연도 오류\n2. 그 외에는 문제가 없습니다"
        assert parse_verdict(response).is_valid is True
        assert is_ambiguous(response) is True

    def test_plain_affirmative_is_not_ambiguous(self) -> None:
        assert is_ambiguous("1. 없음\n2. 수정할 부분 없음") is False


class TestContentVerifier:
    @pytest.mark.asyncio()
    async def test_passes_facts_and_draft(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(return_value=_completion("없음"))
        verifier = ContentVerifier(mock_llm_provider)

        verdict, usage = await verifier.verify("초안 본문", FactSet(text="팩트 목록"), "gpt-5-mini")

        assert verdict.is_valid is True
        assert usage.total_tokens == 30
        kwargs = mock_llm_provider.complete.call_args.kwargs
        assert "초안 본문" in kwargs["user_prompt"]
        assert "팩트 목록" in kwargs["user_prompt"]
        assert kwargs["max_tokens"] == 1000

    @pytest.mark.asyncio()
    async def test_failure_fails_open(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(side_effect=LLMError("timeout"))

        verdict, usage = await ContentVerifier(mock_llm_provider).verify("d", FactSet(), "gpt-5-mini")

        assert verdict.is_valid is True
        assert verdict.issues == []
        assert usage == TokenUsage()


# ======================================================================
# ContentCorrector
# ======================================================================


class TestContentCorrector:
    @pytest.mark.asyncio()
    async def test_sends_issues_and_draft(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(return_value=_completion("수정본"))
        corrector = ContentCorrector(mock_llm_provider, StageParams(temperature=0.3))

        result = await corrector.correct("원본 초안", ["문제 A", "문제 B"], "gpt-5-mini", 2500)

        assert result.text == "수정본"
        kwargs = mock_llm_provider.complete.call_args.kwargs
        assert kwargs["system_prompt"] == CORRECTION_SYSTEM_PROMPT
        assert "문제 A\n문제 B" in kwargs["user_prompt"]
        assert "원본 초안" in kwargs["user_prompt"]
        assert kwargs["max_tokens"] == 2500
        assert kwargs["temperature"] == 0.3

    @pytest.mark.asyncio()
    async def test_errors_propagate(self, mock_llm_provider) -> None:
        mock_llm_provider.complete = AsyncMock(side_effect=LLMError("overloaded"))
        with pytest.raises(LLMError):
            await ContentCorrector(mock_llm_provider).correct("d", ["i"], "gpt-5-mini", 4000)
