"""Propagation of the background deletion flag to nested provisioners."""

from __future__ import annotations

import contextlib
import contextvars
from typing import Iterator

_background_deletion: contextvars.ContextVar[bool] = contextvars.ContextVar(
    "background_deletion", default=False
)


@contextlib.contextmanager
def background_deletion(enabled: bool = True) -> Iterator[None]:
    """Set the background deletion flag for everything run inside the block.

    The previous setting is restored when the block exits.
    """
    token = _background_deletion.set(bool(enabled))
    try:
        yield
    finally:
        _background_deletion.reset(token)


def background_deletion_enabled() -> bool:
    """Return whether background deletion is in effect; false when never set."""
    return _background_deletion.get()