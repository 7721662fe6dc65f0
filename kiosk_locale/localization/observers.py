"""Callback registry with insertion-order dispatch."""

from collections.abc import Callable, Iterator
from typing import Any

from kiosk_locale.core.logging_utils import setup_logger

logger = setup_logger(__name__)


class ObserverList:
    """Ordered list of callbacks.

    - Duplicate registrations are kept; each add needs its own remove
    - Removing an unknown callback is a no-op
    - notify() iterates over a snapshot, so callbacks may add or remove
      observers (including themselves) while being notified
    - A failing callback is logged and does not stop the others
    """

    def __init__(self, name: str = "observers"):
        self._name = name
        self._callbacks: list[Callable[..., Any]] = []

    def add(self, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Register a callback; returns it so it can be used as a decorator."""
        self._callbacks.append(callback)
        return callback

    def remove(self, callback: Callable[..., Any]) -> bool:
        """Unregister the earliest registration of a callback.

        Returns:
            True if a registration was removed
        """
        try:
            self._callbacks.remove(callback)
        except ValueError:
            return False
        return True

    def notify(self, *args: Any) -> int:
        """Invoke every callback with the given arguments.

        Returns:
            Number of callbacks that raised
        """
        failures = 0
        for callback in list(self._callbacks):
            try:
                callback(*args)
            except Exception:
                failures += 1
                logger.exception(f"Error in {self._name} callback {callback!r}")
        return failures

    def clear(self):
        self._callbacks.clear()

    def __contains__(self, callback: object) -> bool:
        return callback in self._callbacks

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(list(self._callbacks))

    def __len__(self) -> int:
        return len(self._callbacks)
