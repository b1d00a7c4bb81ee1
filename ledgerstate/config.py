# ledgerstate/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Process-wide library settings.

Settings only provide defaults; anything configured here can also be passed
explicitly, e.g. ``Machine(subject, definition, storage=...)``.
"""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from typing import Any, Callable

from ledgerstate.core.errors import ConfigurationError
from ledgerstate.interfaces.protocols import StorageAdapter
from ledgerstate.persistence.memory import MemoryAdapter


@dataclass(frozen=True)
class Settings:
    """
    :param storage_adapter: Zero-argument factory called once per Machine
        that is created without an explicit storage adapter.
    """

    storage_adapter: Callable[[], StorageAdapter] = MemoryAdapter


_settings = Settings()
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    with _settings_lock:
        return _settings


def configure(**overrides: Any) -> Settings:
    """
    Replace individual settings.

    :raises ConfigurationError: On an unknown setting or a non-callable
        storage_adapter factory.
    """
    global _settings
    known = {f.name for f in dataclasses.fields(Settings)}
    for key, value in overrides.items():
        if key not in known:
            raise ConfigurationError(f"Unknown setting '{key}'", setting=key, details={"known": sorted(known)})
        if key == "storage_adapter" and not callable(value):
            raise ConfigurationError("storage_adapter must be a callable factory", setting=key)
    with _settings_lock:
        _settings = dataclasses.replace(_settings, **overrides)
        return _settings


def reset_settings() -> Settings:
    global _settings
    with _settings_lock:
        _settings = Settings()
        return _settings
