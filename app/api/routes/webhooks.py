"""Inbound Webhooks — accept any event addressed to an instance.

Invariants:
    - Always 200 {"status": "received"}; empty or non-JSON bodies included
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_gateway
from app.schemas.message import StatusResponse
from app.services.instance_gateway import InstanceGateway

router = APIRouter(prefix="/webhook", tags=["webhooks"])


async def _read_payload(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")


@router.post("/{instance_id}", response_model=StatusResponse)
async def receive_webhook(
    instance_id: str,
    request: Request,
    gateway: InstanceGateway = Depends(get_gateway),
):
    payload = await _read_payload(request)
    return await gateway.receive_webhook(instance_id, payload)
