"""Outbound Messages — synthetic text sends through an instance.

Invariants:
    - The instance is not required to exist or be connected
    - Any body that is not {"number", "textMessage": {"text"}} → 400 MALFORMED_PAYLOAD,
      including empty, non-JSON and non-object bodies
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_gateway
from app.core.errors import ErrorContext, MalformedPayloadError
from app.schemas.message import MessageKey, SendTextResponse
from app.services.instance_gateway import InstanceGateway

router = APIRouter(prefix="/message", tags=["messages"])


async def _read_json(request: Request, instance_id: str) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise MalformedPayloadError(
            "request body is not valid JSON", "body",
            ErrorContext(instance_id=instance_id, operation="send_text"),
        ) from e


@router.post("/sendText/{instance_id}", response_model=SendTextResponse)
async def send_text(
    instance_id: str,
    request: Request,
    gateway: InstanceGateway = Depends(get_gateway),
):
    body = await _read_json(request, instance_id)
    receipt = gateway.send_text_request(instance_id, body)
    return SendTextResponse(key=MessageKey(**receipt.to_key()))
