import logging
from typing import Any, List, Optional, Sequence

from langchain_core.outputs import Generation
from langchain_core.output_parsers import StrOutputParser

from .errors import EmptyResponseError

logger = logging.getLogger(__name__)


class ResponseParser(StrOutputParser):
    """
    Pulls the reply text out of the upstream candidates.

    Only the first text part of the first candidate is returned. Blocks that
    carry no text (thinking, tool calls) are skipped, and any further
    candidates or parts are dropped (and counted in the debug log).
    """

    def parse_result(self, result: List[Generation], *, partial: bool = False) -> str:
        if not result:
            raise EmptyResponseError("no response from AI: no candidates")

        parts = content_parts(result[0])
        if not parts:
            raise EmptyResponseError("no response from AI: first candidate has no parts")

        texts = [t for t in map(part_text, parts) if t is not None]
        if not texts:
            raise EmptyResponseError(
                f"no response from AI: none of {len(parts)} part(s) carries text"
            )

        if len(result) > 1 or len(parts) > 1:
            logger.debug(
                "Ignoring %d extra candidate(s) and %d extra part(s)",
                len(result) - 1,
                len(parts) - 1,
            )
        return texts[0]


def content_parts(candidate: Generation) -> Sequence[Any]:
    """Content parts of one candidate; a plain string is a single part."""
    message = getattr(candidate, "message", None)
    content = message.content if message is not None else candidate.text
    if isinstance(content, str):
        return [content] if content else []
    return list(content)


def part_text(part: Any) -> Optional[str]:
    """Text of a part, or None for a block without a ``text`` field."""
    if isinstance(part, str):
        return part
    if isinstance(part, dict) and "text" in part:
        return str(part["text"])
    return None
