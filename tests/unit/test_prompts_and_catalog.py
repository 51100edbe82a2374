"""Unit tests for the prompt store and the model catalog."""

from __future__ import annotations

import pytest

from winescribe.config.model_catalog import (
    MODEL_CATALOG,
    estimate_cost,
    resolve_model,
    utility_model,
)
from winescribe.config.prompts import (
    AFFIRMATIVE_PHRASES,
    CONTACT_TEMPLATE,
    EXAMPLE_POSTS,
    LENGTH_CONFIGS,
    get_example_post,
    get_length_config,
)
from winescribe.models.generation import LengthTier, TokenUsage


class TestLengthConfigs:
    @pytest.mark.parametrize(
        ("key", "expected_tokens"),
        [("short", 2500), ("normal", 4000), ("detailed", 6000)],
    )
    def test_token_budgets(self, key: str, expected_tokens: int) -> None:
        assert get_length_config(key).max_tokens == expected_tokens

    @pytest.mark.parametrize("key", [None, "", "epic", "  "])
    def test_unknown_keys_fall_back_to_normal(self, key: str | None) -> None:
        assert get_length_config(key).tier == LengthTier.NORMAL

    def test_key_is_case_insensitive(self) -> None:
        assert get_length_config("Short").tier == LengthTier.SHORT

    def test_accepts_enum_member(self) -> None:
        assert get_length_config(LengthTier.DETAILED).label == "상세한 글"

    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            LENGTH_CONFIGS[LengthTier.SHORT] = LENGTH_CONFIGS[LengthTier.NORMAL]  # type: ignore[index]

    def test_every_tier_has_an_example(self) -> None:
        for tier in LengthTier:
            assert tier in EXAMPLE_POSTS
            assert get_example_post(tier).strip()


class TestStaticText:
    def test_contact_template_starts_with_section_divider(self) -> None:
        assert CONTACT_TEMPLATE.startswith("\n\n=== 구매 및 문의 ===")

    def test_affirmative_phrase_set(self) -> None:
        assert AFFIRMATIVE_PHRASES == ("없음", "문제가 없", "정확합니다")


class TestModelCatalog:
    def test_known_openai_model(self) -> None:
        assert resolve_model("gpt-5.2", "openai").id == "gpt-5.2"

    def test_unknown_model_uses_provider_default(self) -> None:
        assert resolve_model("gpt-9000", "openai").id == "gpt-5-mini"

    def test_missing_model_uses_provider_default(self) -> None:
        assert resolve_model(None, "anthropic").id == "claude-sonnet-4-5"

    def test_cross_provider_model_falls_back(self) -> None:
        assert resolve_model("gpt-5-nano", "anthropic").provider == "anthropic"

    def test_openai_compatible_uses_openai_catalog(self) -> None:
        assert resolve_model("gpt-5-nano", "openai-compatible").id == "gpt-5-nano"

    def test_utility_models(self) -> None:
        assert utility_model("openai").api_model == "gpt-4o-mini"
        assert utility_model("anthropic").api_model == "claude-haiku-4-5"

    def test_estimate_cost(self) -> None:
        usage = TokenUsage(prompt_tokens=1_000_000, completion_tokens=1_000_000, total_tokens=2_000_000)
        spec = MODEL_CATALOG["gpt-5-mini"]
        assert estimate_cost("gpt-5-mini", usage) == pytest.approx(
            spec.input_price + spec.output_price
        )

    def test_estimate_cost_unknown_model(self) -> None:
        assert estimate_cost("mystery", TokenUsage()) is None
