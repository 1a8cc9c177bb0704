"""Retry a callable until it succeeds or a timeout expires."""

from __future__ import annotations

import time
from typing import Callable, TypeVar

T = TypeVar("T")


class RetryError(Exception):
    """Raised when the retry loop times out; carries the last callback error."""

    def __init__(self, context: BaseException, callback: BaseException) -> None:
        super().__init__(str(callback))
        self.context = context
        self.callback = callback


class Retrier:
    """Calls a callback repeatedly, every ``period`` seconds, until it succeeds."""

    def __init__(self, period: float = 1.0) -> None:
        self.period = period

    def do(self, callback: Callable[[], T], timeout: float | None = None) -> T:
        """Run ``callback`` until it does not raise, or until ``timeout`` passes.

        The callback is tried once immediately.  On timeout a
        :class:`RetryError` is raised wrapping the last failure.
        """
        start = time.monotonic()
        deadline = None if timeout is None else start + timeout

        try:
            return callback()
        except Exception as exc:  # noqa: BLE001
            last = exc

        next_tick = start + self.period
        while True:
            now = time.monotonic()
            if deadline is not None and deadline <= next_tick:
                time.sleep(max(0.0, deadline - now))
                raise RetryError(TimeoutError("retry timeout expired"), last) from last
            time.sleep(max(0.0, next_tick - now))
            next_tick += self.period
            try:
                return callback()
            except Exception as exc:  # noqa: BLE001
                last = exc


def forever() -> Retrier:
    """Return a retrier with a one second period and no implicit timeout."""
    return Retrier(period=1.0)