"""Instance Registry — owned in-memory map from instance id to Instance.

Invariants:
    - An id maps to at most one Instance at any time
    - create() overwrites an existing id unconditionally (fresh CREATED record)
    - delete() is idempotent — unknown ids are a silent no-op
    - list() returns records in storage order

Design Decisions:
    - Explicit store object instead of a module-level dict: each gateway (and
      each test) owns its own registry (ADR: no ambient global state)
    - get() raises, find() returns None: callers pick the failure mode they need
"""

from app.core.domain_types import InstanceId
from app.core.errors import InstanceNotFoundError, ErrorContext
from app.core.instance import Instance


class InstanceRegistry:
    """Process-lifetime instance store — no persistence, no IO."""

    def __init__(self, default_instance_id: str = "default"):
        self.default_instance_id = InstanceId(default_instance_id)
        self._instances: dict[InstanceId, Instance] = {}

    def create(
        self, instance_id: str | None = None, webhook_url: str | None = None,
    ) -> Instance:
        key = InstanceId(instance_id) if instance_id else self.default_instance_id
        instance = Instance(id=key, webhook_url=webhook_url)
        self._instances[key] = instance
        return instance

    def get(self, instance_id: str) -> Instance:
        instance = self._instances.get(InstanceId(instance_id))
        if instance is None:
            raise InstanceNotFoundError(
                instance_id, ErrorContext(operation="lookup"),
            )
        return instance

    def find(self, instance_id: str) -> Instance | None:
        return self._instances.get(InstanceId(instance_id))

    def delete(self, instance_id: str) -> None:
        self._instances.pop(InstanceId(instance_id), None)

    def list(self) -> list[Instance]:
        return list(self._instances.values())

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._instances

    def __len__(self) -> int:
        return len(self._instances)
