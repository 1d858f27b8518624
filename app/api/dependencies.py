"""API Dependencies — request-scoped access to the app-owned gateway.

Invariants:
    - The gateway lives on app.state (built in lifespan), never in a module global
    - Tests override get_gateway via app.dependency_overrides
"""

from fastapi import Request

from app.services.instance_gateway import InstanceGateway


def get_gateway(request: Request) -> InstanceGateway:
    return request.app.state.gateway
