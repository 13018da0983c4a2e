"""Listener registry used by feeds and providers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .errors import DuplicateListenerError


class Listeners:
    """Ordered set of callbacks notified synchronously.

    Every callback registered at the time of ``notify()`` is invoked before
    ``notify()`` returns. Registering the same callable twice is an error.
    """

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def subscribe(self, callback: Callable[..., Any]) -> None:
        """Register ``callback``. Raises DuplicateListenerError if already registered."""
        if callback in self._callbacks:
            raise DuplicateListenerError(f"Listener {callback!r} is already assigned")
        self._callbacks.append(callback)

    def notify(self, *args: Any) -> None:
        """Call every registered callback with ``args``, in registration order.

        Callbacks are not isolated from each other: an exception propagates to
        the caller and the remaining callbacks are skipped. Callbacks are
        expected to handle their own errors.
        """
        # Iterate a copy so a callback may subscribe others
        for callback in list(self._callbacks):
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __contains__(self, callback: object) -> bool:
        return callback in self._callbacks
