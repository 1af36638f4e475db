"""In-process event bus for CRUD lifecycle events."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from core.event_subject import EventSubject
from interfaces.messages import Response

Listener = Callable[[EventSubject], Response | None]

logger = logging.getLogger("crud.event_bus")


def qualify_event_name(event_name: str, prefix: str) -> str:
    """Prefix ``event_name`` unless it already carries a namespace."""
    if "." in event_name or not prefix:
        return event_name
    return f"{prefix}.{event_name}"


class EventBus:
    """Dispatches a subject to listeners in registration order."""

    def __init__(self, prefix: str = "crud") -> None:
        self.prefix = prefix
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def qualify(self, event_name: str) -> str:
        return qualify_event_name(event_name, self.prefix)

    def subscribe(self, event_name: str, listener: Listener) -> None:
        """Register a listener for an event."""
        if not isinstance(event_name, str) or not event_name.strip():
            raise ValueError("event_name must be a non-empty string.")
        self._listeners[self.qualify(event_name)].append(listener)

    def unsubscribe(self, event_name: str, listener: Listener) -> bool:
        """Remove a listener; returns False when it was not registered."""
        listeners = self._listeners.get(self.qualify(event_name), [])
        if listener not in listeners:
            return False
        listeners.remove(listener)
        return True

    def listeners(self, event_name: str) -> list[Listener]:
        return list(self._listeners.get(self.qualify(event_name), []))

    def trigger(self, event_name: str, subject: EventSubject) -> EventSubject:
        """Run listeners for ``event_name`` against ``subject``.

        Dispatch ends at the first listener that produces a response (by
        returning one or assigning ``subject.response``) or calls
        ``subject.stop()``. The subject is returned so callers can read
        back mutated fields and both signals.
        """
        name = self.qualify(event_name)
        subject.stopped = False
        for listener in list(self._listeners.get(name, [])):
            result: Any = listener(subject)
            if isinstance(result, Response):
                subject.response = result
            if subject.response is not None:
                logger.debug("Listener %r short-circuited %s", listener, name)
                break
            if subject.stopped:
                logger.debug("Listener %r stopped %s", listener, name)
                break
        return subject
