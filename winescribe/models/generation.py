"""Request-scoped value objects for the blog generation pipeline.

Every model here is frozen: a pipeline stage never mutates its input, it
returns a new object.  Nothing in this module outlives a single request.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class LengthTier(str, Enum):  # noqa: UP042
    """Output-length presets offered to the caller."""

    SHORT = "short"
    NORMAL = "normal"
    DETAILED = "detailed"


class LengthConfig(BaseModel):
    """Instruction text and token budget for one length tier."""

    model_config = ConfigDict(frozen=True)

    tier: LengthTier
    label: str
    instruction: str
    max_tokens: int = Field(gt=0)


class TokenUsage(BaseModel):
    """Token accounting for one or more model calls."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: TokenUsage) -> TokenUsage:
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


class LLMCompletion(BaseModel):
    """Text returned by a provider plus the usage it reported."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    usage: TokenUsage = Field(default_factory=TokenUsage)
    model: str = ""


class GenerationRequest(BaseModel):
    """A blog generation request as accepted by the API and the CLI.

    Only the shape is validated here.  The "description or wine name"
    rule is enforced by :meth:`BlogGenerationPipeline.validate_request`
    so that the API can answer it with a localized 400 instead of a
    schema error.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    prompt: str | None = None
    wine_name: str | None = None
    region: str | None = None
    vintage: str | None = None
    variety: str | None = None
    highlights: list[str] | None = None
    length: str | None = None
    model: str | None = None

    def has_subject(self) -> bool:
        """Return ``True`` when a description or a wine name is present."""
        return bool((self.prompt or "").strip() or (self.wine_name or "").strip())

    def structured_fields(self) -> list[tuple[str, str]]:
        """Return the non-blank structured fields as ``(label, value)`` pairs."""
        pairs = [
            ("와인명", self.wine_name),
            ("생산 지역", self.region),
            ("빈티지", self.vintage),
            ("품종", self.variety),
        ]
        return [(label, value.strip()) for label, value in pairs if value and value.strip()]


class FactSet(BaseModel):
    """Facts the extractor is confident about, or nothing at all.

    An empty FactSet means "no verified information"; generation then
    falls back to general wine knowledge.
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    sources: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


class VerificationVerdict(BaseModel):
    """The verifier's judgment on a draft.

    ``issues`` is non-empty exactly when ``is_valid`` is ``False``; the
    orchestrator decides whether to run a correction pass from this pair
    alone.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool = True
    issues: list[str] = Field(default_factory=list)
    raw_response: str = ""

    @model_validator(mode="after")
    def _check_issue_pairing(self) -> VerificationVerdict:
        if self.is_valid and self.issues:
            raise ValueError("a valid verdict cannot carry issues")
        if not self.is_valid and not self.issues:
            raise ValueError("an invalid verdict needs at least one issue")
        return self


class GeneratedContent(BaseModel):
    """Final pipeline output returned to the caller."""

    model_config = ConfigDict(frozen=True)

    content: str
    draft: str
    facts: FactSet
    verdict: VerificationVerdict
    corrected: bool = False
    model: str
    length: LengthTier
    usage: TokenUsage = Field(default_factory=TokenUsage)


class BlogSummary(BaseModel):
    """Short summary and purchase hook parsed from a summarizer response."""

    model_config = ConfigDict(frozen=True)

    summary: str = ""
    hook_message: str = ""
    usage: TokenUsage = Field(default_factory=TokenUsage)
