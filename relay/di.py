import logging
from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator, Callable

from fastapi import Depends, Request
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from .agents import AIAgent
from .config import Settings
from .errors import ClientConstructionError
from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser

logger = logging.getLogger(__name__)

ChatModelFactory = Callable[[], BaseChatModel]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings            # set once in create_app()

def prompt_builder() -> PromptBuilder:
    return PromptBuilder()

def response_parser() -> ResponseParser:
    return ResponseParser()

def chat_model_factory(settings: Settings = Depends(get_settings)) -> ChatModelFactory:
    # nothing is constructed until the request has been validated
    return partial(
        ChatGoogleGenerativeAI,
        model=settings.model_name,
        google_api_key=settings.api_key,
        max_retries=1,  # a single attempt; 0 would mean the SDK default
    )

@asynccontextmanager
async def open_agent(
    make_llm: ChatModelFactory,
    builder: PromptBuilder,
    parser: ResponseParser,
) -> AsyncIterator[AIAgent]:
    """
    One upstream client per request.

    The client is created on entry and its HTTP sessions are closed on exit,
    whatever the outcome; nothing is shared between requests.
    """
    try:
        llm = make_llm()
    except Exception as exc:  # noqa: BLE001
        raise ClientConstructionError(f"failed to create client: {exc}") from exc

    logger.debug("Created Gemini client")
    try:
        yield AIAgent(llm, builder, parser)
    finally:
        await llm.aclose()
        logger.debug("Released Gemini client")
