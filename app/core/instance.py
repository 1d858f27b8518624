"""Instance — the single mutable entity tracked by the registry.

Invariants:
    - phone is None unless status == CONNECTED
    - mark_connecting() always restarts the cycle (prior phone kept until completion)
    - mark_connected() only applies to an instance currently CONNECTING

Design Decisions:
    - Pure dataclass, no IO: mutation methods are the only transitions (ADR: functional core)
    - webhook_url is stored but no transition reads it (reserved attribute)
"""

from dataclasses import dataclass

from app.core.domain_types import InstanceId, InstanceStatus


@dataclass
class Instance:
    """A named messaging endpoint progressing through its connect cycle."""

    id: InstanceId
    status: InstanceStatus = InstanceStatus.CREATED
    phone: str | None = None
    webhook_url: str | None = None

    @property
    def is_connected(self) -> bool:
        return self.status == InstanceStatus.CONNECTED

    def mark_connecting(self) -> None:
        self.status = InstanceStatus.CONNECTING

    def mark_connected(self, phone: str) -> bool:
        """Complete the cycle. Returns False (no-op) if not CONNECTING."""
        if self.status != InstanceStatus.CONNECTING:
            return False
        self.status = InstanceStatus.CONNECTED
        self.phone = phone
        return True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "status": self.status.value,
            "phone": self.phone if self.is_connected else None,
            "webhookUrl": self.webhook_url,
        }
