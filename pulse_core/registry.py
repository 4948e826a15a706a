"""Per-event listener storage with snapshot reads."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterator

from .events import resolve_event_name
from .queue import ListenerQueue

__all__ = ["Listener", "ListenerRegistry"]

Listener = Callable[[Any], Any]

logger = logging.getLogger(__name__)


class ListenerRegistry:
    """Map event names to the queue of listeners attached to them.

    A name without a queue behaves exactly like a name with an empty one.
    Reads never touch the stored queues: every call to
    :meth:`get_listeners_for_event` iterates over a private copy.
    """

    def __init__(self) -> None:
        self._queues: dict[str, ListenerQueue] = {}

    def attach(self, event: object, listener: Listener, priority: int = 0) -> None:
        """Register ``listener`` for ``event``; higher priorities run first."""

        if not callable(listener):
            raise TypeError(f"listener must be callable, got {listener!r}")
        name = resolve_event_name(event)
        queue = self._queues.get(name)
        if queue is None:
            queue = self._queues[name] = ListenerQueue()
        queue.insert(listener, priority)
        logger.debug("attached %r to %s with priority %s", listener, name, priority)

    def clear(self, event: object) -> None:
        name = resolve_event_name(event)
        self._queues[name] = ListenerQueue()
        logger.debug("cleared listeners for %s", name)

    def detach(self, event: object, listener: Listener) -> bool:
        """Remove the first registration of ``listener`` for ``event``.

        The queue is rebuilt from the drained entries using their original
        ordering keys, so every remaining listener keeps its position.
        Returns ``True`` when a registration was removed.
        """

        name = resolve_event_name(event)
        old = self._queues.get(name)
        if old is None or old.is_empty():
            return False

        rebuilt = ListenerQueue()
        found = False
        # drain a copy so a failed comparison leaves the stored queue intact
        for candidate, key in old.copy().drain_with_keys():
            if not found and _same_listener(candidate, listener):
                found = True
                continue
            rebuilt.insert(candidate, key)
        self._queues[name] = rebuilt

        if found:
            logger.debug("detached %r from %s", listener, name)
        return found

    def get_listeners_for_event(self, event: object) -> Iterator[Listener]:
        """Return the listeners for ``event``, highest priority first.

        The snapshot is taken when this method is called; listeners attached
        afterwards are only seen by later calls.
        """

        queue = self._queues.get(resolve_event_name(event))
        if queue is None or queue.is_empty():
            return iter(())
        return queue.copy().drain()

    def has_listeners(self, event: object) -> bool:
        queue = self._queues.get(resolve_event_name(event))
        return queue is not None and not queue.is_empty()

    def event_names(self) -> tuple[str, ...]:
        return tuple(name for name, queue in self._queues.items() if queue)


def _same_listener(candidate: Listener, listener: Listener) -> bool:
    if candidate is listener:
        return True
    # bound methods are recreated on every attribute access
    if inspect.ismethod(candidate) and inspect.ismethod(listener):
        return (
            candidate.__self__ is listener.__self__
            and candidate.__func__ is listener.__func__
        )
    return False
