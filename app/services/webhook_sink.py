"""Webhook Sink — ingress for inbound events, relayed to per-instance callbacks.

Invariants:
    - receive() always acknowledges, whatever the payload shape
    - The registry is never consulted (unknown instances are accepted)
    - A failing subscriber is logged and never breaks the ack or other subscribers

Design Decisions:
    - Subscribers may be sync or async callables — async ones are awaited in order
"""

import inspect
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

EventCallback = Callable[[str, Any], Awaitable[None] | None]

ACK = {"status": "received"}


class WebhookSink:
    """Stateless relay: log the event, hand it to subscribers, ack."""

    def __init__(self):
        self._subscribers: dict[str, list[EventCallback]] = {}

    def subscribe(self, instance_id: str, callback: EventCallback) -> None:
        self._subscribers.setdefault(instance_id, []).append(callback)

    def unsubscribe(self, instance_id: str, callback: EventCallback) -> None:
        callbacks = self._subscribers.get(instance_id)
        if not callbacks or callback not in callbacks:
            return
        callbacks.remove(callback)
        if not callbacks:
            del self._subscribers[instance_id]

    async def receive(self, instance_id: str, payload: Any) -> dict:
        logger.info(
            f"Webhook received for {instance_id}: {payload!r}",
            extra={"instance_id": instance_id},
        )
        for callback in list(self._subscribers.get(instance_id, ())):
            try:
                result = callback(instance_id, payload)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    f"Webhook subscriber failed: {e}",
                    extra={"instance_id": instance_id}, exc_info=True,
                )
        return dict(ACK)
