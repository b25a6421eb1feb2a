from typing import List

from langchain_core.messages import BaseMessage, HumanMessage


class PromptBuilder:
    """
    Turns one user turn into the message list sent upstream.

    The relay keeps no history and adds no system prompt, so the prompt is
    exactly the user's text as a single human message.
    """

    def build(self, user_msg: str) -> List[BaseMessage]:
        return [HumanMessage(content=user_msg)]
