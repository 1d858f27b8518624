"""Handshake Generator — builds the scannable connect artifact and starts the cycle.

Invariants:
    - Unknown id → InstanceNotFoundError, nothing created or scheduled
    - Encoding happens BEFORE any mutation; on HandshakeEncodingError status is untouched
    - Existence is re-checked after the encode await (delete may interleave)
    - On success: status = CONNECTING, exactly one completion scheduled

Design Decisions:
    - Encoding offloaded with asyncio.to_thread: the only suspension point of
      the handshake, other requests keep flowing while Pillow rasterizes
    - Payload carries epoch millis so every artifact is distinct per call
"""

import asyncio
import logging
import time
from dataclasses import dataclass

from app.core.errors import InstanceNotFoundError, ErrorContext
from app.infrastructure.qr_encoder import QREncoder
from app.core.instance_registry import InstanceRegistry
from app.services.lifecycle_scheduler import LifecycleScheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandshakeArtifact:
    """Scannable image (data URL) plus the instruction shown next to it."""
    qr: str
    message: str


class HandshakeGenerator:
    """Turns a registered instance into a QR artifact and a pending completion."""

    def __init__(
        self,
        registry: InstanceRegistry,
        scheduler: LifecycleScheduler,
        encoder: QREncoder,
        scheme: str = "whatsapp://connect",
        instruction: str = "Scan QR code with WhatsApp",
    ):
        self.registry = registry
        self.scheduler = scheduler
        self.encoder = encoder
        self.scheme = scheme
        self.instruction = instruction

    def build_payload(self, instance_id: str, timestamp_ms: int | None = None) -> str:
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return f"{self.scheme}/{instance_id}/{timestamp_ms}"

    async def begin_connect(self, instance_id: str) -> HandshakeArtifact:
        self.registry.get(instance_id)
        payload = self.build_payload(instance_id)
        qr = await asyncio.to_thread(self.encoder.encode_data_url, payload)

        instance = self.registry.find(instance_id)
        if instance is None:
            raise InstanceNotFoundError(
                instance_id, ErrorContext(operation="connect"),
            )
        instance.mark_connecting()
        self.scheduler.schedule(instance_id)
        logger.info(
            "Handshake issued",
            extra={"instance_id": instance_id, "status": instance.status.value},
        )
        return HandshakeArtifact(qr=qr, message=self.instruction)
