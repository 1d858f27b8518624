"""Health & Banner — liveness probe and service banner.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET / lists the entry points of the API
"""

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_gateway
from app.config import get_settings
from app.services.instance_gateway import InstanceGateway

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/")
async def banner():
    """Service banner with the main endpoint groups."""
    return {
        "message": "Evolution API is running",
        "version": get_settings().api_version,
        "endpoints": {
            "manager": "/manager",
            "instances": "/instance",
            "webhook": "/webhook",
        },
    }


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(gateway: InstanceGateway = Depends(get_gateway)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return gateway.health()
