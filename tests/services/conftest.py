"""Service test fixtures — isolated gateway + FastAPI test client.

Invariants:
    - Every test gets its own InstanceGateway (own registry, own scheduler)
    - get_gateway dependency overridden to return that gateway
    - Connect delay shortened; tests await scheduler.pending() instead of sleeping
    - Pending completions cancelled on teardown so no task outlives its loop

Design Decisions:
    - ASGITransport does not run lifespan: the override is the only wiring needed
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_gateway
from app.core.errors import HandshakeEncodingError
from app.infrastructure.qr_encoder import QREncoder
from app.main import app
from app.services.instance_gateway import InstanceGateway

TEST_CONNECT_DELAY = 0.05


class FailingEncoder(QREncoder):
    """Encoder that always fails, to exercise the no-mutation path."""

    def encode_data_url(self, data: str) -> str:
        raise HandshakeEncodingError("simulated failure")


class StubEncoder(QREncoder):
    """Fast encoder recording every payload it was asked to encode."""

    def __init__(self):
        super().__init__()
        self.payloads: list[str] = []

    def encode_data_url(self, data: str) -> str:
        self.payloads.append(data)
        return "data:image/png;base64,c3R1Yg=="


@pytest.fixture
async def gateway():
    gw = InstanceGateway(connect_delay_seconds=TEST_CONNECT_DELAY)
    yield gw
    await gw.shutdown()


@pytest.fixture
async def stub_encoder():
    return StubEncoder()


@pytest.fixture
async def stub_gateway(stub_encoder):
    gw = InstanceGateway(
        connect_delay_seconds=TEST_CONNECT_DELAY, encoder=stub_encoder,
    )
    yield gw
    await gw.shutdown()


@pytest.fixture
async def failing_gateway():
    gw = InstanceGateway(
        connect_delay_seconds=TEST_CONNECT_DELAY, encoder=FailingEncoder(),
    )
    yield gw
    await gw.shutdown()


@pytest.fixture
async def client(gateway):
    """FastAPI test client bound to the per-test gateway."""
    app.dependency_overrides[get_gateway] = lambda: gateway

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def wait_connected(gateway):
    """Await every pending completion for an instance id."""

    async def _wait(instance_id: str, gw: InstanceGateway | None = None):
        pending = (gw or gateway).scheduler.pending(instance_id)
        await asyncio.gather(*pending, return_exceptions=True)

    return _wait
