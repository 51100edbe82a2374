"""Summary and purchase-hook generation for a finished post.

The model is asked to answer under two delimiters::

    === 요약 ===
    ...
    === 후킹 메시지 ===
    ...

and each section is cut out with a regular expression.  A missing
section parses to an empty string rather than an error.
"""

from __future__ import annotations

import re

from winescribe.config.model_catalog import utility_model
from winescribe.config.prompts import SUMMARY_PROMPT, SUMMARY_SYSTEM_PROMPT
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import BlogSummary
from winescribe.models.pipeline import StageParams
from winescribe.utils.errors import InvalidRequestError
from winescribe.utils.logging import get_logger

# The summary runs until the next "===" delimiter or the end of the text.
_SUMMARY_RE = re.compile(r"===\s*요약\s*===\s*(.*?)(?====|$)", re.DOTALL)
_HOOK_RE = re.compile(r"===\s*후킹 메시지\s*===\s*(.*)$", re.DOTALL)


def parse_summary_response(text: str) -> tuple[str, str]:
    """Return ``(summary, hook_message)`` from a delimited model response."""
    summary_match = _SUMMARY_RE.search(text)
    hook_match = _HOOK_RE.search(text)
    summary = summary_match.group(1).strip() if summary_match else ""
    hook = hook_match.group(1).strip() if hook_match else ""
    return summary, hook


class ContentSummarizer:
    """Produces a short summary and a hook message for a post."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        params: StageParams | None = None,
    ) -> None:
        self._llm = llm_provider
        self._params = params or StageParams(temperature=0.7, max_tokens=800)
        self._logger = get_logger(__name__)

    async def summarize(self, content: str) -> BlogSummary:
        if not content.strip():
            raise InvalidRequestError(message="요약할 글을 입력해주세요.")

        model = utility_model(self._llm.get_provider_name()).api_model
        self._logger.info("summary_start", model=model, content_chars=len(content))
        completion = await self._llm.complete(
            system_prompt=SUMMARY_SYSTEM_PROMPT,
            user_prompt=SUMMARY_PROMPT.format(content=content),
            temperature=self._params.temperature,
            max_tokens=self._params.max_tokens or 800,
            model=model,
        )

        summary, hook = parse_summary_response(completion.text)
        if not summary or not hook:
            self._logger.warning(
                "summary_sections_missing",
                has_summary=bool(summary),
                has_hook=bool(hook),
            )
        return BlogSummary(summary=summary, hook_message=hook, usage=completion.usage)
