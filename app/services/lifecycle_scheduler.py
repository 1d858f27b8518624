"""Lifecycle Scheduler — deferred one-shot CONNECTING → CONNECTED completions.

Invariants:
    - One schedule() call = one independent asyncio.Task (no dedup, no retry)
    - The registry is re-read when the delay elapses; a deleted instance is a no-op
    - A completion only applies to an instance still CONNECTING (never skips a state)
    - Completions never raise into the event loop; they only log

Design Decisions:
    - asyncio tasks keyed by instance id instead of fire-and-forget timers:
      cancel(id) on delete/overwrite avoids wasted work and stale completions
      landing on a re-created instance (ADR: cancellable task handles)
    - Done-callback prunes handles so pending() reflects in-flight work only
"""

import asyncio
import logging

from app.core.domain_types import InstanceId
from app.core.instance_registry import InstanceRegistry

logger = logging.getLogger(__name__)


class LifecycleScheduler:
    """Schedules delayed connect completions against a registry."""

    def __init__(
        self,
        registry: InstanceRegistry,
        delay_seconds: float,
        synthetic_phone: str,
    ):
        self.registry = registry
        self.delay_seconds = delay_seconds
        self.synthetic_phone = synthetic_phone
        self._tasks: dict[InstanceId, set[asyncio.Task]] = {}

    def schedule(self, instance_id: str) -> asyncio.Task:
        """Start one deferred completion for instance_id. Requires a running loop."""
        key = InstanceId(instance_id)
        task = asyncio.create_task(
            self._complete_after_delay(key), name=f"connect-complete:{key}",
        )
        self._tasks.setdefault(key, set()).add(task)
        task.add_done_callback(lambda t: self._forget(key, t))
        return task

    def pending(self, instance_id: str) -> tuple[asyncio.Task, ...]:
        return tuple(self._tasks.get(InstanceId(instance_id), ()))

    def cancel(self, instance_id: str) -> int:
        """Cancel every pending completion for instance_id. Returns count cancelled."""
        tasks = self._tasks.pop(InstanceId(instance_id), set())
        for task in tasks:
            task.cancel()
        if tasks:
            logger.info(
                f"Cancelled {len(tasks)} pending completion(s)",
                extra={"instance_id": instance_id},
            )
        return len(tasks)

    async def shutdown(self) -> None:
        """Cancel all pending completions and wait for them to unwind."""
        tasks = [t for group in self._tasks.values() for t in group]
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _complete_after_delay(self, instance_id: InstanceId) -> None:
        await asyncio.sleep(self.delay_seconds)
        instance = self.registry.find(instance_id)
        if instance is None:
            logger.info(
                "Instance removed before connect completed",
                extra={"instance_id": instance_id},
            )
            return
        if instance.mark_connected(self.synthetic_phone):
            logger.info(
                "Instance connected",
                extra={"instance_id": instance_id, "status": instance.status.value},
            )
        else:
            logger.debug(
                "Connect completion skipped",
                extra={"instance_id": instance_id, "status": instance.status.value},
            )

    def _forget(self, instance_id: InstanceId, task: asyncio.Task) -> None:
        group = self._tasks.get(instance_id)
        if group is None:
            return
        group.discard(task)
        if not group:
            del self._tasks[instance_id]
