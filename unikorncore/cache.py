"""A single-value cache whose contents expire after a fixed period."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Generic, TypeVar

V = TypeVar("V")
D = TypeVar("D")


class TimeoutCache(Generic[V]):
    """Holds one value that stays valid for ``refresh`` seconds after it is set."""

    def __init__(self, refresh: float | timedelta) -> None:
        if isinstance(refresh, timedelta):
            refresh = refresh.total_seconds()
        self._refresh = float(refresh)
        self._value: V | None = None
        self._valid = False
        self._invalid_at = 0.0

    def get(self, default: D | None = None) -> V | D | None:
        """Return the cached value, or ``default`` if unset or timed out."""
        if not self._valid or time.monotonic() > self._invalid_at:
            return default
        return self._value

    def set(self, value: V) -> None:
        """Remember ``value`` and restart the expiry period."""
        self._invalid_at = time.monotonic() + self._refresh
        self._value = value
        self._valid = True