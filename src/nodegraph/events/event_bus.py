from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

Handler = Callable[..., Any]

logger = logging.getLogger("nodegraph.events")


class Subscription:
    """
    Handle returned by ``EventBus.subscribe``.
    """

    def __init__(self, bus: "EventBus", event: str, handler: Handler) -> None:
        self.bus = bus
        self.event = event
        self.handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self.bus._remove(self)
            self._active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unsubscribe()


class EventBus:
    """
    Synchronous in-process publish/subscribe.

    Handlers run on the caller's stack, in subscription order. A handler
    that raises is logged and skipped; the remaining handlers still run.
    Nothing is buffered: subscribers only see events published after
    they subscribed.
    """

    def __init__(self, *, name: Optional[str] = None) -> None:
        self.name = name
        self._subscriptions: Dict[str, List[Subscription]] = {}

    def subscribe(self, event: str, handler: Handler) -> Subscription:
        if not callable(handler):
            raise TypeError("handler must be callable")

        key = _event_key(event)
        subscription = Subscription(self, key, handler)
        # copy-on-write so an in-flight publish keeps its own list
        self._subscriptions[key] = [*self._subscriptions.get(key, []), subscription]
        return subscription

    def publish(self, event: str, *args: Any) -> int:
        """
        Deliver ``args`` to every current subscriber of ``event``.

        Returns the number of handlers that completed without raising.
        """
        key = _event_key(event)
        delivered = 0

        for subscription in self._subscriptions.get(key, ()):
            try:
                subscription.handler(*args)
            except Exception:
                logger.exception(
                    "event handler %r failed for %s on bus %s",
                    subscription.handler,
                    key,
                    self.name or "<unnamed>",
                )
                continue
            delivered += 1

        return delivered

    def handler_count(self, event: str) -> int:
        return len(self._subscriptions.get(_event_key(event), ()))

    def clear(self) -> None:
        for subscriptions in self._subscriptions.values():
            for subscription in subscriptions:
                subscription._active = False
        self._subscriptions = {}

    def _remove(self, subscription: Subscription) -> None:
        current = self._subscriptions.get(subscription.event, [])
        remaining = [s for s in current if s is not subscription]
        if remaining:
            self._subscriptions[subscription.event] = remaining
        else:
            self._subscriptions.pop(subscription.event, None)


def _event_key(event: Any) -> str:
    # GraphEvent members and their plain string values address the same channel
    return str(getattr(event, "value", event))
