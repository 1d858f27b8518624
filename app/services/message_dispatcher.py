"""Message Dispatcher — accepts outbound text sends and returns synthetic receipts.

Invariants:
    - Sends are NOT gated on connection state (fire and record)
    - number and textMessage.text are extracted explicitly — shape errors
      surface as MalformedPayloadError, never as KeyError/TypeError
    - Receipt ids are unique per dispatcher (millis + monotonic sequence)
    - No network IO — logging is the only side effect

Design Decisions:
    - Unexpected failures inside the send path are logged with traceback and
      converted to MalformedPayloadError: a bad body must not become a 500
"""

import itertools
import logging
import re
import time
from dataclasses import dataclass
from typing import Any

from app.core.domain_types import MessageId
from app.core.errors import MalformedPayloadError, ErrorContext

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class Receipt:
    """Synthetic delivery acknowledgment for one outbound message."""
    id: MessageId
    remote_jid: str

    def to_key(self) -> dict:
        return {"id": self.id, "remoteJid": self.remote_jid}


class MessageDispatcher:
    """Validates outbound sends and issues receipts."""

    def __init__(
        self,
        remote_jid_suffix: str = "@s.whatsapp.net",
        message_id_prefix: str = "mock_message_id_",
    ):
        self.remote_jid_suffix = remote_jid_suffix
        self.message_id_prefix = message_id_prefix
        self._sequence = itertools.count(1)

    def send_text(
        self, instance_id: str, number: Any, text_message: Any,
    ) -> Receipt:
        ctx = ErrorContext(instance_id=instance_id, operation="send_text")
        try:
            text = extract_text(text_message, ctx)
            remote_jid = self.to_remote_jid(number, ctx)
            receipt = Receipt(id=self._next_message_id(), remote_jid=remote_jid)
        except MalformedPayloadError:
            raise
        except Exception as e:
            logger.error(
                f"Unexpected error while sending: {e}",
                extra={"instance_id": instance_id}, exc_info=True,
            )
            raise MalformedPayloadError("Message could not be processed", "body", ctx)

        logger.info(
            f"Sending message ({len(text)} chars)",
            extra={
                "instance_id": instance_id,
                "message_id": receipt.id,
                "remote_jid": receipt.remote_jid,
            },
        )
        return receipt

    def send_request(self, instance_id: str, body: Any) -> Receipt:
        """Send from a raw request body: {"number": ..., "textMessage": {"text": ...}}."""
        if not isinstance(body, dict):
            raise MalformedPayloadError(
                "request body must be a JSON object", "body",
                ErrorContext(instance_id=instance_id, operation="send_text"),
            )
        return self.send_text(instance_id, body.get("number"), body.get("textMessage"))

    def to_remote_jid(self, number: Any, ctx: ErrorContext | None = None) -> str:
        """Canonical network address: digits + suffix; full JIDs pass through."""
        if not isinstance(number, (str, int)) or isinstance(number, bool):
            raise MalformedPayloadError("number is required", "number", ctx)
        raw = str(number).strip()
        if "@" in raw:
            return raw
        digits = _NON_DIGITS.sub("", raw)
        if not digits:
            raise MalformedPayloadError(
                "number must contain at least one digit", "number", ctx,
            )
        return digits + self.remote_jid_suffix

    def _next_message_id(self) -> MessageId:
        millis = int(time.time() * 1000)
        return MessageId(f"{self.message_id_prefix}{millis}_{next(self._sequence)}")


def extract_text(text_message: Any, ctx: ErrorContext | None = None) -> str:
    """Pull textMessage.text out of an untrusted body."""
    if not isinstance(text_message, dict):
        raise MalformedPayloadError(
            "textMessage must be an object with a text field", "textMessage", ctx,
        )
    text = text_message.get("text")
    if not isinstance(text, str):
        raise MalformedPayloadError(
            "textMessage.text is required", "textMessage.text", ctx,
        )
    return text
