"""Application object that owns an event manager and its configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import ConfigStore, default_config_path
from .dispatcher import EventManager
from .loader import ListenerLoader


class PulseApp:
    """Wire configuration, listener loading and one :class:`EventManager`."""

    def __init__(
        self,
        *,
        config_path: Path | str | None = None,
        logger: logging.Logger | None = None,
        manager: EventManager | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger("pulse_core.app")
        path = Path(config_path) if config_path is not None else default_config_path()
        self.config = ConfigStore(path=path)
        self.events = manager or EventManager()
        self.loader = ListenerLoader()
        self._bootstrapped = False

    def bootstrap(self) -> "PulseApp":
        """Load configured listeners once; later calls do nothing."""

        if self._bootstrapped:
            return self
        self.config.load()
        loaded = self.loader.load_into(self.events, self.config.listener_bindings())
        self.logger.debug("loaded %s listener(s) from %s", loaded, self.config.path)
        self._bootstrapped = True
        return self
