"""Unit tests for the Pydantic domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from winescribe.models.generation import (
    FactSet,
    GenerationRequest,
    LengthTier,
    TokenUsage,
    VerificationVerdict,
)
from winescribe.models.pipeline import (
    PHASE_TRANSITIONS,
    GenerationPhase,
    PipelineConfig,
    StageParams,
)


# ======================================================================
# GenerationRequest
# ======================================================================


class TestGenerationRequest:
    def test_accepts_camel_case_aliases(self) -> None:
        req = GenerationRequest.model_validate(
            {"wineName": "Chateau Test", "vintage": "2020", "length": "short"}
        )
        assert req.wine_name == "Chateau Test"
        assert req.vintage == "2020"

    def test_accepts_snake_case_names(self) -> None:
        req = GenerationRequest(wine_name="Opus One")
        assert req.wine_name == "Opus One"

    def test_has_subject_with_prompt_only(self) -> None:
        assert GenerationRequest(prompt="좋은 와인").has_subject() is True

    def test_has_subject_with_wine_name_only(self) -> None:
        assert GenerationRequest(wine_name="Opus One").has_subject() is True

    def test_has_subject_false_for_blank_fields(self) -> None:
        req = GenerationRequest(prompt="   ", wine_name="", region="Bordeaux")
        assert req.has_subject() is False

    def test_structured_fields_skip_blank_values(self) -> None:
        req = GenerationRequest(wine_name="Opus One", region="  ", variety="Cabernet Sauvignon")
        assert req.structured_fields() == [
            ("와인명", "Opus One"),
            ("품종", "Cabernet Sauvignon"),
        ]

    def test_is_frozen(self) -> None:
        req = GenerationRequest(wine_name="A")
        with pytest.raises(ValidationError):
            req.wine_name = "B"  # type: ignore[misc]


# ======================================================================
# FactSet / TokenUsage
# ======================================================================


class TestFactSet:
    def test_empty_by_default(self) -> None:
        assert FactSet().is_empty is True

    def test_whitespace_counts_as_empty(self) -> None:
        assert FactSet(text="  \n ").is_empty is True

    def test_non_empty(self) -> None:
        assert FactSet(text="보르도 좌안").is_empty is False


class TestTokenUsage:
    def test_addition_sums_every_field(self) -> None:
        total = TokenUsage(prompt_tokens=1, completion_tokens=2, total_tokens=3) + TokenUsage(
            prompt_tokens=10, completion_tokens=20, total_tokens=30
        )
        assert total == TokenUsage(prompt_tokens=11, completion_tokens=22, total_tokens=33)


# ======================================================================
# VerificationVerdict
# ======================================================================


class TestVerificationVerdict:
    def test_default_is_valid_without_issues(self) -> None:
        verdict = VerificationVerdict()
        assert verdict.is_valid is True
        assert verdict.issues == []

    def test_invalid_requires_an_issue(self) -> None:
        with pytest.raises(ValidationError):
            VerificationVerdict(is_valid=False, issues=[])

    def test_valid_rejects_issues(self) -> None:
        with pytest.raises(ValidationError):
            VerificationVerdict(is_valid=True, issues=["과장된 표현"])

    def test_invalid_with_issue(self) -> None:
        verdict = VerificationVerdict(is_valid=False, issues=["수상 내역 확인 불가"])
        assert verdict.issues == ["수상 내역 확인 불가"]


# ======================================================================
# Pipeline models
# ======================================================================


class TestGenerationPhase:
    def test_no_backward_transitions(self) -> None:
        order = list(GenerationPhase)
        for phase, targets in PHASE_TRANSITIONS.items():
            for target in targets:
                assert order.index(target) > order.index(phase)

    def test_correction_is_optional(self) -> None:
        assert GenerationPhase.DONE in PHASE_TRANSITIONS[GenerationPhase.VERIFYING]
        assert GenerationPhase.CORRECTING in PHASE_TRANSITIONS[GenerationPhase.VERIFYING]

    def test_done_is_terminal(self) -> None:
        assert PHASE_TRANSITIONS[GenerationPhase.DONE] == frozenset()


class TestPipelineConfig:
    def test_defaults_match_stage_budgets(self) -> None:
        config = PipelineConfig()
        assert config.fact_extraction == StageParams(temperature=0.5, max_tokens=1500)
        assert config.verification == StageParams(temperature=0.5, max_tokens=1000)
        assert config.generation.max_tokens is None
        assert config.summary.temperature == 0.7

    def test_rejects_out_of_range_temperature(self) -> None:
        with pytest.raises(ValidationError):
            StageParams(temperature=3.0)

    def test_length_tier_values(self) -> None:
        assert [t.value for t in LengthTier] == ["short", "normal", "detailed"]
