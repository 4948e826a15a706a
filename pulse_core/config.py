"""Listener configuration stored in TOML documents."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import tomllib

from platformdirs import user_config_dir

from .errors import ListenerConfigError

DEFAULT_APP_NAME = "pulse"
CONFIG_FILE_NAME = "config.toml"
CONFIG_ENV_VAR = "PULSE_CONFIG"


def default_config_path() -> Path:
    """Return ``$PULSE_CONFIG`` or the platform-specific config file."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    base_dir = Path(user_config_dir(DEFAULT_APP_NAME, appauthor=False))
    return base_dir / CONFIG_FILE_NAME


@dataclass(frozen=True)
class ListenerBinding:
    """One ``[[listeners]]`` table: which callable to attach to which event."""

    event: str
    target: str
    priority: int = 0

    @classmethod
    def from_table(cls, index: int, table: Any) -> "ListenerBinding":
        if not isinstance(table, dict):
            raise ListenerConfigError(f"listeners[{index}] must be a table")

        fields: dict[str, str] = {}
        for key in ("event", "target"):
            raw_value = table.get(key)
            if raw_value is None:
                raise ListenerConfigError(f"missing '{key}' in listeners[{index}]")
            if not isinstance(raw_value, str) or not raw_value.strip():
                raise ListenerConfigError(
                    f"'{key}' in listeners[{index}] must be a non-empty string"
                )
            fields[key] = raw_value.strip()

        priority = table.get("priority", 0)
        if not isinstance(priority, int) or isinstance(priority, bool):
            raise ListenerConfigError(
                f"'priority' in listeners[{index}] must be an integer"
            )
        return cls(event=fields["event"], target=fields["target"], priority=priority)


@dataclass
class ConfigStore:
    path: Path = field(default_factory=default_config_path)
    _store: dict[str, Any] = field(default_factory=dict, init=False)

    def get(self, key: str, default: Any | None = None) -> Any | None:
        return self._store.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def load(self) -> "ConfigStore":
        """Read ``path`` into the store; a missing file leaves it empty."""

        if not self.path.exists():
            return self
        try:
            with self.path.open("rb") as handle:
                document = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ListenerConfigError(f"unable to read config at {self.path}") from exc
        self._store.update(document)
        return self

    def listener_bindings(self) -> tuple[ListenerBinding, ...]:
        tables = self._store.get("listeners", [])
        if not isinstance(tables, list):
            raise ListenerConfigError("'listeners' must be an array of tables")
        return tuple(
            ListenerBinding.from_table(index, table) for index, table in enumerate(tables)
        )
