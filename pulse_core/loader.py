"""Import listener callables named in configuration."""

from __future__ import annotations

import importlib
import logging
from typing import Iterable

from .config import ListenerBinding
from .dispatcher import EventManager
from .errors import ListenerLoadError
from .registry import Listener

logger = logging.getLogger(__name__)


class ListenerLoader:
    """Resolve ``module:attr`` references and attach them to a manager."""

    def resolve(self, target: str) -> Listener:
        module_path, attribute = self._split_target(target)
        try:
            module = importlib.import_module(module_path)
        except ImportError as exc:
            raise ListenerLoadError(
                f"unable to import module {module_path} for listener {target}"
            ) from exc

        listener = module
        for part in attribute.split("."):
            try:
                listener = getattr(listener, part)
            except AttributeError as exc:
                raise ListenerLoadError(
                    f"module {module_path} does not expose {attribute}"
                ) from exc

        if not callable(listener):
            raise ListenerLoadError(f"listener {target} is not callable")
        return listener

    def load_into(
        self, manager: EventManager, bindings: Iterable[ListenerBinding]
    ) -> int:
        """Attach every binding in order and return how many were attached."""

        count = 0
        for binding in bindings:
            listener = self.resolve(binding.target)
            manager.attach(binding.event, listener, binding.priority)
            logger.debug(
                "loaded listener %s for %s (priority %s)",
                binding.target,
                binding.event,
                binding.priority,
            )
            count += 1
        return count

    def _split_target(self, target: str) -> tuple[str, str]:
        if ":" in target:
            module_path, attribute = target.split(":", 1)
        elif "." in target:
            module_path, attribute = target.rsplit(".", 1)
        else:
            raise ListenerLoadError(f"listener target {target!r} is not a module path")

        if not module_path or not attribute:
            raise ListenerLoadError(f"listener target {target!r} is incomplete")
        return module_path, attribute
