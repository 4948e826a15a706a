"""Error types raised by the pulse event core."""


class PulseError(Exception):
    """Base type for pulse-related failures."""


class EventIdentityError(PulseError, TypeError):
    """Raised when a value cannot be resolved to an event name."""

    def __init__(self, identity: object) -> None:
        super().__init__(
            f"cannot resolve an event name from {type(identity).__name__} value {identity!r}"
        )
        self.identity = identity


class ListenerConfigError(PulseError):
    """Raised when a listener configuration document is malformed."""


class ListenerLoadError(PulseError):
    """Raised when a configured listener cannot be imported or called."""
