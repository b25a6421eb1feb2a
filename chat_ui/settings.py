"""Chat UI settings: relay URL, display time zone and request timeout."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from chat_ui.relay_client import DEFAULT_API_URL, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

# shared with the relay: one .env in the project root
ENV_PATH = Path(__file__).resolve().parent.parent / ".env"

DEFAULT_TIME_ZONE = "UTC"


class ClientSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_url: str = DEFAULT_API_URL
    time_zone: str = DEFAULT_TIME_ZONE
    timeout_seconds: float = REQUEST_TIMEOUT


def load_client_settings(env_path: Path | None = ENV_PATH) -> ClientSettings:
    """
    Defaults for the sidebar, from ``PUBLIC_API_URL`` and ``CHAT_TIME_ZONE``.

    The project ``.env`` is loaded first when present; variables already set
    in the environment win over the file.
    """
    if env_path is not None and env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        logger.info(".env file not found, using system environment variables")

    return ClientSettings(
        api_url=os.getenv("PUBLIC_API_URL") or DEFAULT_API_URL,
        time_zone=os.getenv("CHAT_TIME_ZONE") or DEFAULT_TIME_ZONE,
    )
