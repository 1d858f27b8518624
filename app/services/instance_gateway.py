"""Instance Gateway — the operation set the HTTP layer calls into.

Invariants:
    - One gateway owns exactly one registry, scheduler, handshake generator,
      dispatcher and webhook sink (no shared module-level state)
    - create/delete cancel pending completions for that id before touching the record
    - delete_instance is idempotent and never raises

Design Decisions:
    - Facade over the five components so routes stay thin (ADR: impureim sandwich)
    - from_settings() is the single place settings are translated into components
"""

import logging
from datetime import datetime, timezone
from typing import Any

from app.config import Settings
from app.core.instance import Instance
from app.core.instance_registry import InstanceRegistry
from app.infrastructure.qr_encoder import QREncoder
from app.services.handshake import HandshakeArtifact, HandshakeGenerator
from app.services.lifecycle_scheduler import LifecycleScheduler
from app.services.message_dispatcher import MessageDispatcher, Receipt
from app.services.webhook_sink import WebhookSink

logger = logging.getLogger(__name__)


class InstanceGateway:
    """Owns the instance store and every component operating on it."""

    def __init__(
        self,
        *,
        connect_delay_seconds: float = 10.0,
        synthetic_phone: str = "+1234567890",
        default_instance_id: str = "default",
        encoder: QREncoder | None = None,
        handshake_scheme: str = "whatsapp://connect",
        handshake_message: str = "Scan QR code with WhatsApp",
        remote_jid_suffix: str = "@s.whatsapp.net",
        message_id_prefix: str = "mock_message_id_",
    ):
        self.registry = InstanceRegistry(default_instance_id)
        self.scheduler = LifecycleScheduler(
            self.registry, connect_delay_seconds, synthetic_phone,
        )
        self.handshake = HandshakeGenerator(
            self.registry, self.scheduler, encoder or QREncoder(),
            scheme=handshake_scheme, instruction=handshake_message,
        )
        self.dispatcher = MessageDispatcher(remote_jid_suffix, message_id_prefix)
        self.webhooks = WebhookSink()

    @classmethod
    def from_settings(cls, settings: Settings) -> "InstanceGateway":
        return cls(
            connect_delay_seconds=settings.connect_delay_seconds,
            synthetic_phone=settings.synthetic_phone,
            default_instance_id=settings.default_instance_name,
            encoder=QREncoder(settings.qr_box_size, settings.qr_border),
            handshake_scheme=settings.handshake_scheme,
            handshake_message=settings.handshake_message,
            remote_jid_suffix=settings.remote_jid_suffix,
            message_id_prefix=settings.message_id_prefix,
        )

    # ─── Instance lifecycle ───────────────────────────────────────

    def create_instance(
        self, name: str | None = None, webhook_url: str | None = None,
    ) -> Instance:
        instance_id = name or self.registry.default_instance_id
        self.scheduler.cancel(instance_id)
        instance = self.registry.create(instance_id, webhook_url=webhook_url)
        logger.info("Instance created", extra={"instance_id": instance.id})
        return instance

    async def connect_instance(self, instance_id: str) -> HandshakeArtifact:
        return await self.handshake.begin_connect(instance_id)

    def delete_instance(self, instance_id: str) -> None:
        self.scheduler.cancel(instance_id)
        self.registry.delete(instance_id)
        logger.info("Instance deleted", extra={"instance_id": instance_id})

    def get_instance(self, instance_id: str) -> Instance:
        return self.registry.get(instance_id)

    def list_instances(self) -> list[Instance]:
        return self.registry.list()

    # ─── Messaging ────────────────────────────────────────────────

    async def receive_webhook(self, instance_id: str, payload: Any) -> dict:
        return await self.webhooks.receive(instance_id, payload)

    def send_text(
        self, instance_id: str, number: Any, text_message: Any,
    ) -> Receipt:
        return self.dispatcher.send_text(instance_id, number, text_message)

    def send_text_request(self, instance_id: str, body: Any) -> Receipt:
        return self.dispatcher.send_request(instance_id, body)

    # ─── Misc ─────────────────────────────────────────────────────

    @staticmethod
    def health() -> dict:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def shutdown(self) -> None:
        await self.scheduler.shutdown()
