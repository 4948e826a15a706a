"""Event value objects and the capabilities the dispatcher looks for."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable

from .errors import EventIdentityError

__all__ = [
    "Event",
    "Nameable",
    "ParamsAware",
    "Stoppable",
    "StoppableEvent",
    "resolve_event_name",
]


@runtime_checkable
class Nameable(Protocol):
    """Objects that carry their own event name."""

    def get_name(self) -> str: ...


@runtime_checkable
class Stoppable(Protocol):
    """Objects able to halt the remaining listeners of a dispatch."""

    def is_propagation_stopped(self) -> bool: ...


@runtime_checkable
class ParamsAware(Protocol):
    def get_params(self) -> dict[str, Any]: ...

    def set_params(self, params: Mapping[str, Any]) -> None: ...


class StoppableEvent:
    """Minimal event that only knows whether propagation was stopped."""

    def __init__(self) -> None:
        self._stopped = False

    def is_propagation_stopped(self) -> bool:
        return self._stopped

    def stop_propagation(self, flag: bool = True) -> None:
        """Stop (or with ``flag=False`` resume) delivery to later listeners."""
        self._stopped = flag


@dataclass(eq=False)
class Event:
    """Named event carrying parameters, an optional target and a stop flag."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)
    target: Any = None
    _stopped: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.params = dict(self.params)

    def get_name(self) -> str:
        return self.name

    def set_name(self, name: str) -> None:
        self.name = name

    def get_params(self) -> dict[str, Any]:
        return self.params

    def set_params(self, params: Mapping[str, Any]) -> None:
        self.params = dict(params)

    def get_param(self, key: str, default: Any | None = None) -> Any | None:
        return self.params.get(key, default)

    def has_param(self, key: str) -> bool:
        return key in self.params

    def get_target(self) -> Any:
        return self.target

    def set_target(self, target: Any) -> None:
        self.target = target

    def is_propagation_stopped(self) -> bool:
        return self._stopped

    def stop_propagation(self, flag: bool = True) -> None:
        self._stopped = flag


_SCALARS = (bool, int, float, complex, bytes, bytearray)


def resolve_event_name(identity: object) -> str:
    """Map an event identity to the name its listeners are stored under.

    Strings are names already. Objects exposing ``get_name()`` name
    themselves. Classes resolve to their qualified name and any other
    object to the qualified name of its type, so attaching to ``UserCreated``
    matches dispatching ``UserCreated()``. ``None`` and scalar values are
    rejected with :class:`EventIdentityError`.
    """

    if isinstance(identity, str):
        return identity
    if identity is None or isinstance(identity, _SCALARS):
        raise EventIdentityError(identity)
    if isinstance(identity, type):
        return _qualified_name(identity)
    if isinstance(identity, Nameable):
        name = identity.get_name()
        if not isinstance(name, str):
            raise EventIdentityError(name)
        return name
    return _qualified_name(type(identity))


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
