"""Synchronous dispatch of events to their ordered listeners."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Protocol, TypeVar

from .events import Event, ParamsAware, Stoppable, resolve_event_name
from .registry import Listener, ListenerRegistry

__all__ = ["EventDispatcher", "EventManager", "ListenerProvider"]

logger = logging.getLogger(__name__)

E = TypeVar("E")
F = TypeVar("F", bound=Callable[..., Any])


class ListenerProvider(Protocol):
    def get_listeners_for_event(self, event: object) -> Iterable[Listener]: ...


class EventDispatcher:
    """Deliver events to the listeners supplied by a provider.

    Listeners run one after another on the calling thread. An exception
    raised by a listener is not caught: it reaches the caller and the
    remaining listeners are skipped.
    """

    def __init__(self, provider: ListenerProvider) -> None:
        self.provider = provider

    def dispatch(self, event: E) -> E:
        """Invoke every listener for ``event`` until one stops propagation."""

        stoppable = isinstance(event, Stoppable)
        for listener in self.provider.get_listeners_for_event(event):
            listener(event)
            if stoppable and event.is_propagation_stopped():
                logger.debug(
                    "propagation of %s stopped by %r",
                    resolve_event_name(event),
                    listener,
                )
                break
        return event

    def trigger(self, event: object, params: Mapping[str, Any] | None = None) -> Any:
        """Dispatch a named event, building an :class:`Event` for bare names."""

        if isinstance(event, str):
            return self.dispatch(Event(event, dict(params or {})))

        if params is not None:
            if isinstance(event, ParamsAware):
                event.set_params(params)
            else:
                logger.warning(
                    "ignoring params for %s: %s does not accept params",
                    resolve_event_name(event),
                    type(event).__name__,
                )
        return self.dispatch(event)


class EventManager(EventDispatcher):
    """Registry and dispatcher in one object, the usual entry point."""

    def __init__(self, registry: ListenerRegistry | None = None) -> None:
        self.registry = registry or ListenerRegistry()
        super().__init__(self)

    def attach(self, event: object, listener: Listener, priority: int = 0) -> None:
        self.registry.attach(event, listener, priority)

    def detach(self, event: object, listener: Listener) -> bool:
        return self.registry.detach(event, listener)

    def clear(self, event: object) -> None:
        self.registry.clear(event)

    def get_listeners_for_event(self, event: object) -> Iterable[Listener]:
        return self.registry.get_listeners_for_event(event)

    def listen(self, event: object, priority: int = 0) -> Callable[[F], F]:
        """Decorator form of :meth:`attach`."""

        def decorator(listener: F) -> F:
            self.attach(event, listener, priority)
            return listener

        return decorator

    def event_names(self) -> tuple[str, ...]:
        return self.registry.event_names()

