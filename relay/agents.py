# relay/agents.py
from __future__ import annotations

import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from .errors import GenerationError
from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser

logger = logging.getLogger(__name__)


class AIAgent:
    """
    Single-turn relay to the upstream model.

    Responsibilities
    ----------------
    1. Build prompt  (user turn only)                    -> PromptBuilder
    2. Call the chat model once, no retries              -> BaseChatModel
    3. Extract the reply text from the candidates        -> ResponseParser
    """

    def __init__(
        self,
        llm: BaseChatModel,
        builder: PromptBuilder,
        parser: ResponseParser,
    ) -> None:
        self._llm = llm
        self._builder = builder
        self._parser = parser

    async def reply(self, user_msg: str) -> str:
        """
        Handle ONE user turn.

        Parameters
        ----------
        user_msg : str
            Already trimmed user input, forwarded unmodified.

        Returns
        -------
        str
            Text of the first part of the first candidate.

        Raises
        ------
        GenerationError
            If the model call fails.
        EmptyResponseError
            If the model returns no candidates or no parts.
        """
        messages: list[BaseMessage] = self._builder.build(user_msg)
        logger.info("Calling Gemini API with message length: %d", len(user_msg))

        try:
            result = await self._llm.agenerate([messages])
        except Exception as exc:  # noqa: BLE001
            raise GenerationError(f"failed to generate content: {exc}") from exc

        candidates = result.generations[0] if result.generations else []
        text = self._parser.parse_result(candidates)
        logger.info("Gemini API response length: %d", len(text))
        return text
