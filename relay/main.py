import logging
import sys

import uvicorn
from fastapi import Depends, FastAPI

from .config import Settings, configure_logging, load_settings
from .cors import LocalOriginCORSMiddleware
from .di import ChatModelFactory, chat_model_factory, open_agent, prompt_builder, response_parser
from .errors import EMPTY_MESSAGE, ConfigError, InvalidMessageError, register_exception_handlers
from .logging_middleware import RequestLoggingMiddleware
from .models import ChatRequest, ChatResponse, HealthResponse
from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(title="Gemini Chat Relay", version="0.1.0")
    app.state.settings = settings

    # last added runs first: request logging wraps CORS
    app.add_middleware(LocalOriginCORSMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="healthy")

    @app.post("/api/chat", response_model=ChatResponse)
    async def chat_endpoint(
        req: ChatRequest,
        make_llm: ChatModelFactory = Depends(chat_model_factory),
        builder: PromptBuilder = Depends(prompt_builder),
        parser: ResponseParser = Depends(response_parser),
    ):
        message = req.message.strip()
        if not message:
            raise InvalidMessageError(EMPTY_MESSAGE)

        logger.info("Processing message of length %d", len(message))
        logger.debug("Processing message: %s", message)
        async with open_agent(make_llm, builder, parser) as agent:
            reply = await agent.reply(message)
        logger.info("API response received successfully")
        return ChatResponse(response=reply)

    return app


def run() -> None:
    configure_logging()
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Error: %s", exc)
        sys.exit(1)

    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server starting on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


"""
curl -X POST http://localhost:8080/api/chat \
  -H "Content-Type: application/json" \
  -H "Origin: http://localhost:3000" \
  -d '{"message": "  Hello  "}'
"""


if __name__ == "__main__":
    run()
