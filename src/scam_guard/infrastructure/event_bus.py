"""In-process event routing for Scam Guard.

The controller and navigator publish ``DomainEvent`` instances; presentation
code subscribes to the ones it renders (the shell's live alerts, for
example).  Routing is by class: a subscription to a base class receives
every subclass, so ``bus.subscribe(DomainEvent, log.append)`` sees all
traffic.

Delivery is synchronous, on the caller's thread, in subscription order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from scam_guard.domain.events import DomainEvent

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], None]
Unsubscribe = Callable[[], None]


class EventBus:
    """Class-routed pub-sub for domain events.

    A handler that raises is logged and skipped; the remaining handlers
    still receive the event and the publisher never sees the error.

    Usage::

        bus = EventBus()
        cancel = bus.subscribe(DetectionCredited, show_alert)
        bus.publish(DetectionCredited(...))
        cancel()
    """

    def __init__(self) -> None:
        self._subscriptions: list[tuple[type[DomainEvent], Handler]] = []

    def subscribe(self, event_type: type[DomainEvent], handler: Handler) -> Unsubscribe:
        """Deliver every *event_type* instance (subclasses included) to *handler*.

        Returns a callable that cancels this subscription; calling it twice
        is harmless.
        """
        entry = (event_type, handler)
        self._subscriptions.append(entry)

        def cancel() -> None:
            for idx, existing in enumerate(self._subscriptions):
                if existing is entry:
                    del self._subscriptions[idx]
                    return

        return cancel

    def publish(self, event: DomainEvent) -> int:
        """Dispatch *event*; return how many handlers accepted it without error."""
        delivered = 0
        for event_type, handler in list(self._subscriptions):
            if not isinstance(event, event_type):
                continue
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "EventBus: handler %r failed on %s", handler, type(event).__name__
                )
            else:
                delivered += 1
        return delivered

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __repr__(self) -> str:
        return f"EventBus(subscriptions={len(self._subscriptions)})"
