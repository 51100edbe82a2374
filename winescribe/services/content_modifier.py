"""Free-form edits to an existing blog post.

A single direct model call, outside the fact pipeline: the user says
what to change and the model returns the whole post with only that part
edited.  Image markers and section dividers must survive.
"""

from __future__ import annotations

from winescribe.config.model_catalog import utility_model
from winescribe.config.prompts import MODIFY_PROMPT, MODIFY_SYSTEM_PROMPT
from winescribe.interfaces.llm_provider import ILLMProvider
from winescribe.models.generation import LLMCompletion
from winescribe.models.pipeline import StageParams
from winescribe.utils.errors import InvalidRequestError
from winescribe.utils.logging import get_logger


class ContentModifier:
    """Applies a user's modification request to a post."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        params: StageParams | None = None,
    ) -> None:
        self._llm = llm_provider
        self._params = params or StageParams(temperature=0.5, max_tokens=4000)
        self._logger = get_logger(__name__)

    async def modify(self, current_content: str, modify_request: str) -> LLMCompletion:
        """Return the revised post.

        Raises
        ------
        InvalidRequestError
            If either input is blank.
        winescribe.utils.errors.LLMError
            If the model call fails.
        """
        if not current_content.strip() or not modify_request.strip():
            raise InvalidRequestError(message="현재 글과 수정 요청을 입력해주세요.")

        model = utility_model(self._llm.get_provider_name()).api_model
        self._logger.info(
            "modification_start",
            model=model,
            content_chars=len(current_content),
        )
        return await self._llm.complete(
            system_prompt=MODIFY_SYSTEM_PROMPT,
            user_prompt=MODIFY_PROMPT.format(
                current_content=current_content,
                modify_request=modify_request,
            ),
            temperature=self._params.temperature,
            max_tokens=self._params.max_tokens or 4000,
            model=model,
        )
