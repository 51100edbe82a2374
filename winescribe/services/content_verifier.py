"""Post-hoc verification of a draft against its FactSet.

The verifier's answer is free text.  Validity is decided by looking for
any of the affirmative phrases in ``AFFIRMATIVE_PHRASES`` ("없음",
"문제가 없", "정확합니다"); this is a substring heuristic, not a parsed
yes/no field, and callers rely on exactly this phrase set.

A critique that contains an affirmative phrase *and* a list of problems
is still treated as valid.  Such responses are logged as
``verification_ambiguous_verdict`` so they can be found later.

Verification fails open: if the call errors, the draft is accepted.
"""

from __future__ import annotations

import re

from winescribe.config.prompts import (
    AFFIRMATIVE_PHRASES,
    VERIFICATION_PROMPT,
    VERIFICATION_SYSTEM_PROMPT,
)
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import FactSet, TokenUsage, VerificationVerdict
from winescribe.models.pipeline import StageParams
from winescribe.utils.logging import get_logger

# First numbered item of the critique ("1. ..."), i.e. the problem list.
_FIRST_ITEM_RE = re.compile(r"^\s*1[.)]\s*(.+)$", re.MULTILINE)

_EMPTY_RESPONSE_ISSUE = "검증 응답이 비어 있습니다"


def contains_affirmative(text: str) -> bool:
    """Return ``True`` if *text* contains any affirmative "no issues" phrase."""
    return any(phrase in text for phrase in AFFIRMATIVE_PHRASES)


def is_ambiguous(response: str) -> bool:
    """Return ``True`` if the problem list itself is not affirmative.

    A response like "1. 빈티지 오류 ... 2. 문제 없음" passes
    :func:`parse_verdict` because of the second item.
    """
    match = _FIRST_ITEM_RE.search(response)
    return match is not None and not contains_affirmative(match.group(1))


def parse_verdict(response: str) -> VerificationVerdict:
    """Turn a verifier critique into a verdict.

    An affirmative phrase anywhere in the text makes the verdict valid.
    Otherwise the whole critique becomes the single issue.
    """
    if contains_affirmative(response):
        return VerificationVerdict(is_valid=True, issues=[], raw_response=response)
    critique = response.strip() or _EMPTY_RESPONSE_ISSUE
    return VerificationVerdict(is_valid=False, issues=[critique], raw_response=response)


class ContentVerifier:
    """Checks a draft for exaggerated or unsupported claims."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        params: StageParams | None = None,
    ) -> None:
        self._llm = llm_provider
        self._params = params or StageParams(temperature=0.5, max_tokens=1000)
        self._logger = get_logger(__name__)

    async def verify(
        self,
        content: str,
        facts: FactSet,
        model: str,
    ) -> tuple[VerificationVerdict, TokenUsage]:
        """Return the verdict for *content* and the tokens spent.

        Any provider failure yields a valid verdict with zero usage.
        """
        try:
            completion = await self._llm.complete(
                system_prompt=VERIFICATION_SYSTEM_PROMPT,
                user_prompt=VERIFICATION_PROMPT.format(facts=facts.text, content=content),
                temperature=self._params.temperature,
                max_tokens=self._params.max_tokens or 1000,
                model=model,
            )
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "verification_failed",
                model=model,
                provider=self._llm.get_provider_name(),
                error=str(exc),
            )
            return VerificationVerdict(), TokenUsage()

        verdict = parse_verdict(completion.text)
        if verdict.is_valid and is_ambiguous(completion.text):
            self._logger.warning(
                "verification_ambiguous_verdict",
                model=model,
                response_chars=len(completion.text),
            )
        self._logger.info(
            "verification_complete",
            model=model,
            is_valid=verdict.is_valid,
            issues=len(verdict.issues),
        )
        return verdict, completion.usage
