"""Instance Schemas — request/response contracts for /instance endpoints.

Invariants:
    - instanceName is stripped; blank names fall back to the default instance
    - Wire field names are camelCase (instanceName, webhookUrl)
"""

from pydantic import BaseModel, Field, field_validator


class InstanceCreate(BaseModel):
    """Instance creation — every field optional."""
    instanceName: str | None = Field(None, max_length=200)
    webhookUrl: str | None = Field(None, max_length=2000)

    @field_validator("instanceName")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class InstanceSummary(BaseModel):
    instanceName: str
    status: str


class InstanceCreateResponse(BaseModel):
    status: str = "success"
    instance: InstanceSummary


class InstanceView(BaseModel):
    """One registry entry as exposed by /instance/list."""
    id: str
    status: str
    phone: str | None = None
    webhookUrl: str | None = None


class InstanceListResponse(BaseModel):
    instances: list[InstanceView]


class ConnectResponse(BaseModel):
    status: str = "success"
    qr: str
    message: str
