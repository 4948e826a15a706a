"""Synchronous in-process event dispatching with prioritized listeners."""

from .app import PulseApp
from .config import ConfigStore, ListenerBinding, default_config_path
from .dispatcher import EventDispatcher, EventManager, ListenerProvider
from .errors import EventIdentityError, ListenerConfigError, ListenerLoadError, PulseError
from .events import (
    Event,
    Nameable,
    ParamsAware,
    Stoppable,
    StoppableEvent,
    resolve_event_name,
)
from .loader import ListenerLoader
from .queue import ListenerQueue
from .registry import ListenerRegistry

__all__ = [
    "PulseApp",
    "ConfigStore",
    "ListenerBinding",
    "default_config_path",
    "EventDispatcher",
    "EventManager",
    "ListenerProvider",
    "EventIdentityError",
    "ListenerConfigError",
    "ListenerLoadError",
    "PulseError",
    "Event",
    "Nameable",
    "ParamsAware",
    "Stoppable",
    "StoppableEvent",
    "resolve_event_name",
    "ListenerLoader",
    "ListenerQueue",
    "ListenerRegistry",
]
