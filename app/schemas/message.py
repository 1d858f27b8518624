"""Message Schemas — response shapes for /message and /webhook endpoints.

Invariants:
    - sendText request bodies are not modelled here: the dispatcher extracts
      number/textMessage.text itself so every bad shape becomes MALFORMED_PAYLOAD
"""

from pydantic import BaseModel


class MessageKey(BaseModel):
    id: str
    remoteJid: str


class SendTextResponse(BaseModel):
    status: str = "success"
    key: MessageKey


class StatusResponse(BaseModel):
    status: str
