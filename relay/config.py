import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

# .env lives in the project root, next to pyproject.toml
ENV_PATH = Path(__file__).resolve().parent.parent / ".env"

DEFAULT_PORT = 8080
DEFAULT_MODEL = "gemini-2.5-flash"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    """Relay configuration, built once at startup and handed to ``create_app``."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)
    model_name: str = DEFAULT_MODEL
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


def load_settings(env_path: Path | None = ENV_PATH) -> Settings:
    """
    Read the relay settings from the process environment.

    A ``.env`` file is loaded first when present; variables already set in the
    environment win over the file.

    Raises
    ------
    ConfigError
        If ``GEMINI_API_KEY`` is missing or a value does not validate.
    """
    if env_path is not None and env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        logger.warning(".env file not found, using system environment variables")

    api_key = os.getenv("GEMINI_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("GEMINI_API_KEY environment variable is required")

    try:
        return Settings(
            api_key=api_key,
            port=os.getenv("PORT") or DEFAULT_PORT,
            model_name=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid relay configuration: {exc}") from exc


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
