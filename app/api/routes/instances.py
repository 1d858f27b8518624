"""Instance Lifecycle — create, connect, delete and list messaging instances.

Invariants:
    - connect on an unknown id → 404 RESOURCE_NOT_FOUND, registry untouched
    - delete always answers {"status": "deleted"}, known id or not
    - create with an existing name overwrites it (fresh "created" record)
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_gateway
from app.schemas.instance import (
    ConnectResponse, InstanceCreate, InstanceCreateResponse,
    InstanceListResponse, InstanceSummary, InstanceView,
)
from app.schemas.message import StatusResponse
from app.services.instance_gateway import InstanceGateway

router = APIRouter(prefix="/instance", tags=["instances"])


@router.post("/create", response_model=InstanceCreateResponse)
async def create_instance(
    body: InstanceCreate | None = None,
    gateway: InstanceGateway = Depends(get_gateway),
):
    """Register (or reset) an instance in the CREATED state."""
    body = body or InstanceCreate()
    instance = gateway.create_instance(body.instanceName, body.webhookUrl)
    return InstanceCreateResponse(
        instance=InstanceSummary(
            instanceName=instance.id, status=instance.status.value,
        ),
    )


@router.post("/connect/{instance_id}", response_model=ConnectResponse)
async def connect_instance(
    instance_id: str, gateway: InstanceGateway = Depends(get_gateway),
):
    """Issue a QR handshake; the instance connects after the configured delay."""
    artifact = await gateway.connect_instance(instance_id)
    return ConnectResponse(qr=artifact.qr, message=artifact.message)


@router.delete("/delete/{instance_id}", response_model=StatusResponse)
async def delete_instance(
    instance_id: str, gateway: InstanceGateway = Depends(get_gateway),
):
    """Remove an instance and cancel its pending completion."""
    gateway.delete_instance(instance_id)
    return StatusResponse(status="deleted")


@router.get("/list", response_model=InstanceListResponse)
async def list_instances(gateway: InstanceGateway = Depends(get_gateway)):
    """All instances currently held in memory."""
    return InstanceListResponse(
        instances=[
            InstanceView(**instance.to_dict())
            for instance in gateway.list_instances()
        ],
    )
