"""In-process event bus for domain events.

Services publish events after their unit of work has committed. A failing
listener is logged and never affects the caller or other listeners.
"""

import logging
from collections.abc import Callable, Iterable

from lifedash.domain.shared import DomainEvent

logger = logging.getLogger(__name__)

Listener = Callable[[DomainEvent], None]


class EventBus:
    """Dispatches events to listeners subscribed to their type or a base type."""

    def __init__(self) -> None:
        self._listeners: dict[type[DomainEvent], list[Listener]] = {}

    def subscribe(self, listener: Listener, event_type: type[DomainEvent] = DomainEvent) -> None:
        """Register ``listener`` for ``event_type`` and its subclasses."""
        listeners = self._listeners.setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)

    def unsubscribe(self, listener: Listener, event_type: type[DomainEvent] = DomainEvent) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def publish(self, event: DomainEvent) -> None:
        for event_type, listeners in list(self._listeners.items()):
            if not isinstance(event, event_type):
                continue
            for listener in list(listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception("Listener %r failed on %s", listener, event.name)

    def publish_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.publish(event)


def log_event(event: DomainEvent) -> None:
    """Default subscriber: one INFO line per event."""
    details = event.model_dump(exclude={"event_id", "timestamp"})
    logger.info("%s %s", event.name, details)
