"""
Summary: Typed publish/subscribe hub connecting cache owners to UI consumers.
Why: Producers of repository changes never hold references to their observers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any, TypeVar, final

from gitnova.platform.logging import logger

from ..domain.events import Event, EventType

E = TypeVar("E", bound=Event)

Handler = Callable[[Any], None]


def event_tag(event_type: type[Event]) -> EventType:
    """Return the tag bound to ``event_type``.

    Raises:
        TypeError: If ``event_type`` is not a concrete event class.
    """

    tag = getattr(event_type, "TAG", None)
    if not isinstance(tag, EventType):
        raise TypeError(f"{event_type!r} is not a concrete event class")
    return tag


@dataclass(slots=True, eq=False)
class _Registration:
    handler: Handler
    once: bool
    fired: bool = False


@final
class Subscription:
    """Handle returned by :meth:`EventHub.subscribe`; disposing removes exactly one registration."""

    __slots__ = ("_hub", "_tag", "_registration")

    def __init__(self, hub: "EventHub", tag: EventType, registration: _Registration) -> None:
        self._hub: EventHub | None = hub
        self._tag = tag
        self._registration = registration

    @property
    def tag(self) -> EventType:
        return self._tag

    @property
    def active(self) -> bool:
        return self._hub is not None and self._hub._contains(self._tag, self._registration)  # pyright: ignore[reportPrivateUsage]

    def dispose(self) -> None:
        """Remove the registration; calling again is a no-op."""

        hub, self._hub = self._hub, None
        if hub is not None:
            _ = hub._remove(self._tag, self._registration)  # pyright: ignore[reportPrivateUsage]

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()


@final
class EventHub:
    """Synchronous broadcaster keyed by event class.

    Within one :meth:`emit`, handlers run in registration order over a
    snapshot of the listeners taken when the emit starts. Handler failures
    are logged and never reach the emitter or sibling handlers.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[_Registration]] = {}

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> Subscription:
        """Register ``handler`` for every future ``event_type`` emit."""

        return self._add(event_type, handler, once=False)

    def subscribe_once(self, event_type: type[E], handler: Callable[[E], None]) -> Subscription:
        """Register ``handler`` for the next ``event_type`` emit only."""

        return self._add(event_type, handler, once=True)

    def emit(self, event: Event) -> None:
        """Deliver ``event`` to every handler currently registered for its tag."""

        tag = event_tag(type(event))
        bucket = self._listeners.get(tag)
        if not bucket:
            logger.debug("No handlers for event: %s", tag.value)
            return

        logger.debug("Emitting event: %s to %d handler(s)", tag.value, len(bucket))
        for registration in list(bucket):
            if registration.once:
                if registration.fired:
                    continue
                registration.fired = True
                _ = self._remove(tag, registration)
            try:
                registration.handler(event)
            except Exception:
                logger.exception(
                    "Error in event handler for %s",
                    tag.value,
                    extra={"cache_event": "event.handler_error"},
                )

    def unsubscribe(self, event_type: type[Event], handler: Callable[..., None]) -> bool:
        """Remove the first registration of ``handler`` for ``event_type``.

        Returns:
            bool: ``True`` when a registration was removed.
        """

        tag = event_tag(event_type)
        for registration in self._listeners.get(tag, ()):
            if registration.handler == handler:
                return self._remove(tag, registration)
        return False

    def clear(self, event_type: type[Event]) -> None:
        """Remove every handler registered for ``event_type``."""

        tag = event_tag(event_type)
        bucket = self._listeners.pop(tag, None)
        if bucket:
            logger.debug("Cleared %d listener(s) for event: %s", len(bucket), tag.value)

    def clear_all(self) -> None:
        """Remove every handler for every event."""

        total = sum(len(bucket) for bucket in self._listeners.values())
        self._listeners.clear()
        logger.debug("Cleared all %d listener(s)", total)

    def listener_count(self, event_type: type[Event]) -> int:
        return len(self._listeners.get(event_tag(event_type), ()))

    def has_listeners(self, event_type: type[Event]) -> bool:
        return self.listener_count(event_type) > 0

    def active_tags(self) -> list[EventType]:
        """Return the tags that currently have at least one listener."""

        return list(self._listeners)

    def dispose(self) -> None:
        logger.debug("Event hub disposing")
        self.clear_all()

    def _add(self, event_type: type[Event], handler: Handler, *, once: bool) -> Subscription:
        tag = event_tag(event_type)
        registration = _Registration(handler=handler, once=once)
        self._listeners.setdefault(tag, []).append(registration)
        logger.debug("Subscribed%s to event: %s", " once" if once else "", tag.value)
        return Subscription(self, tag, registration)

    def _contains(self, tag: EventType, registration: _Registration) -> bool:
        return any(r is registration for r in self._listeners.get(tag, ()))

    def _remove(self, tag: EventType, registration: _Registration) -> bool:
        bucket = self._listeners.get(tag)
        if bucket is None:
            return False
        for index, candidate in enumerate(bucket):
            if candidate is registration:
                del bucket[index]
                break
        else:
            return False
        if not bucket:
            del self._listeners[tag]
        logger.debug("Unsubscribed from event: %s", tag.value)
        return True


__all__ = ["EventHub", "Subscription", "event_tag"]
