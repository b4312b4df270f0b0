"""
Push channel from the orchestrator to the subscribers.

Publishing never blocks the publisher: each subscriber owns a small buffer.
When an ``update`` is still waiting in a subscriber buffer and a newer one is
published, the pending update is replaced (coalescing).  ``started`` and
terminal events are always delivered, and the order of the delivered events
is the publish order, so cumulative counts seen by a subscriber never go
backwards.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import TYPE_CHECKING

from loadpulse.config.constants import EventKind

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from loadpulse.schemas.events import RunEvent

logger = logging.getLogger(__name__)


class Subscription:
    """Buffered, coalescing view of the channel for a single consumer."""

    def __init__(self, channel: UpdateChannel) -> None:
        """Register on *channel* lazily through :meth:`UpdateChannel.subscribe`"""
        self._channel = channel
        self._pending: deque[RunEvent] = deque()
        self._ready = asyncio.Event()
        self._closed = False
        self.coalesced = 0

    def push(self, event: RunEvent) -> None:
        """Enqueue *event*, replacing a pending update with a newer one."""
        if self._closed:
            return
        if (
            event.event is EventKind.UPDATE
            and self._pending
            and self._pending[-1].event is EventKind.UPDATE
        ):
            self._pending[-1] = event
            self.coalesced += 1
        else:
            self._pending.append(event)
        self._ready.set()

    async def get(self) -> RunEvent | None:
        """Next event, or None once the subscription is closed and drained."""
        while not self._pending:
            if self._closed:
                return None
            self._ready.clear()
            await self._ready.wait()
        return self._pending.popleft()

    def get_nowait(self) -> RunEvent | None:
        """Next buffered event without waiting"""
        return self._pending.popleft() if self._pending else None

    def close(self) -> None:
        """Detach from the channel and wake up a pending :meth:`get`."""
        if self._closed:
            return
        self._closed = True
        self._channel.unsubscribe(self)
        self._ready.set()

    def __aiter__(self) -> AsyncIterator[RunEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[RunEvent]:
        while (event := await self.get()) is not None:
            yield event

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class UpdateChannel:
    """Fan-out of :class:`RunEvent` to every live subscription."""

    def __init__(self) -> None:
        """Start without subscribers"""
        self._subscribers: list[Subscription] = []

    def subscribe(self) -> Subscription:
        """Attach a new consumer; it only sees events published from now on."""
        sub = Subscription(self)
        self._subscribers.append(sub)
        logger.debug("subscriber attached (%d total)", len(self._subscribers))
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        """Detach *sub*; unknown subscriptions are ignored."""
        if sub in self._subscribers:
            self._subscribers.remove(sub)
            logger.debug("subscriber detached (%d left)", len(self._subscribers))

    def publish(self, event: RunEvent) -> None:
        """Deliver *event* to every subscriber without blocking."""
        for sub in list(self._subscribers):
            sub.push(event)

    @property
    def subscriber_count(self) -> int:
        """Number of attached subscriptions"""
        return len(self._subscribers)
