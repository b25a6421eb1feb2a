"""HTTP client for the relay's ``/api/chat`` endpoint."""

from __future__ import annotations

import enum
import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL: str = "http://localhost:8080"
REQUEST_TIMEOUT: float = 30.0


class ChatOutcome(enum.Enum):
    """Every way a chat request can fail, with the text shown to the user."""

    TIMEOUT = "Request timed out. Please try again."
    BAD_REQUEST = "Invalid message format. Please check your input."
    SERVER_ERROR = "Server error. Please try again later."
    UNREACHABLE = "Cannot connect to the server. Please check if the backend is running."
    UNKNOWN = "Sorry, I encountered an error. Please try again."

    @property
    def text(self) -> str:
        return self.value


_STATUS_OUTCOMES = {
    400: ChatOutcome.BAD_REQUEST,
    500: ChatOutcome.SERVER_ERROR,
}


class ChatRequestError(Exception):
    def __init__(self, outcome: ChatOutcome, detail: str = "") -> None:
        super().__init__(detail or outcome.text)
        self.outcome = outcome


def send_message(api_url: str, text: str, timeout: float = REQUEST_TIMEOUT) -> str:
    """
    POST one message to the relay and return its reply.

    Raises
    ------
    ChatRequestError
        Carrying the ``ChatOutcome`` that describes the failure.
    """
    url = f"{api_url.rstrip('/')}/api/chat"
    try:
        r = requests.post(
            url,
            json={"message": text},
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except requests.Timeout as exc:
        raise _failure(ChatOutcome.TIMEOUT, exc) from exc
    except requests.RequestException as exc:
        # no response at all
        raise _failure(ChatOutcome.UNREACHABLE, exc) from exc

    if not r.ok:
        outcome = _STATUS_OUTCOMES.get(r.status_code, ChatOutcome.UNKNOWN)
        raise _failure(outcome, f"HTTP {r.status_code}: {r.text[:200]}")

    try:
        reply = r.json()["response"]
    except (ValueError, KeyError, TypeError) as exc:
        raise _failure(ChatOutcome.UNKNOWN, f"unexpected response body: {exc!r}") from exc
    if not isinstance(reply, str):
        raise _failure(ChatOutcome.UNKNOWN, "response field is not a string")
    return reply


def _failure(outcome: ChatOutcome, detail: object) -> ChatRequestError:
    logger.error("Chat request failed (%s): %s", outcome.name, detail)
    return ChatRequestError(outcome, str(detail))
