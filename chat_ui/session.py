from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Literal, Optional

import pytz

from .relay_client import ChatOutcome, ChatRequestError

logger = logging.getLogger(__name__)

MAX_INPUT_CHARS = 1000


def _now() -> datetime:
    return datetime.now(pytz.utc)


@dataclass
class Message:
    text: str
    sender: Literal["user", "ai"]
    timestamp: datetime = field(default_factory=_now)


class Status(enum.Enum):
    IDLE = "idle"
    SENDING = "sending"


@dataclass
class ChatSession:
    """
    In-memory transcript for one browser session.

    A submission moves ``IDLE -> SENDING``; resolving or rejecting it moves
    back to ``IDLE``. ``clear()`` only touches the transcript and the banner,
    so a request already in flight still lands in the (now empty) list.
    """

    messages: List[Message] = field(default_factory=list)
    banner: Optional[str] = None
    status: Status = Status.IDLE
    pending: Optional[str] = None

    @property
    def is_sending(self) -> bool:
        return self.status is Status.SENDING

    def submit(self, raw: str) -> bool:
        """Queue ``raw`` for sending; False if it is rejected locally."""
        text = raw.strip()
        if self.is_sending or not text or len(raw) > MAX_INPUT_CHARS:
            return False

        self.messages.append(Message(text=text, sender="user"))
        self.pending = text
        self.banner = None
        self.status = Status.SENDING
        return True

    def resolve(self, reply: str) -> None:
        self.messages.append(Message(text=reply, sender="ai"))
        self._finish()

    def reject(self, outcome: ChatOutcome) -> None:
        self.messages.append(Message(text=outcome.text, sender="ai"))
        self.banner = outcome.text
        self._finish()

    def send_pending(self, send: Callable[[str], str]) -> None:
        if not self.is_sending or self.pending is None:
            return
        try:
            reply = send(self.pending)
        except ChatRequestError as exc:
            self.reject(exc.outcome)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected failure while sending message")
            self.reject(ChatOutcome.UNKNOWN)
        else:
            self.resolve(reply)

    def clear(self) -> None:
        self.messages = []
        self.banner = None

    def _finish(self) -> None:
        self.pending = None
        self.status = Status.IDLE
