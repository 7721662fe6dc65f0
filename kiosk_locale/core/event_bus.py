#!/usr/bin/env python3
"""
Event Bus - queue-backed event dispatcher between loader threads and the main loop.

Source loading completes on pool threads; subscribers run only when the main
loop calls process_events().
"""

import queue
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from kiosk_locale.core.events import EventType
from kiosk_locale.core.logging_utils import setup_logger

__all__ = ["EventBus", "EventType", "Event"]

logger = setup_logger("event_bus")


@dataclass
class Event:
    """Event with type, payload, and metadata."""

    type: EventType
    payload: dict[str, Any]
    timestamp: float
    source: str = "unknown"

    def __post_init__(self):
        if self.timestamp == 0:
            self.timestamp = time.time()


class EventBus:
    """Event bus using a bounded queue for thread-safe communication.

    Features:
    - Bounded queue with drop counting on overload
    - Subscribers dispatched on the thread that processes events
    """

    def __init__(self, max_queue_size: int = 1000):
        """Initialize event bus.

        Args:
            max_queue_size: Maximum events in queue before dropping
        """
        self._queue = queue.Queue(maxsize=max_queue_size)
        self._subscribers: dict[EventType, list[Callable]] = {}
        self._lock = threading.Lock()
        self._running = True

        # Metrics
        self._events_emitted = 0
        self._events_processed = 0
        self._events_dropped = 0
        self._last_drop_warning = 0.0

    def emit(
        self,
        event_type: EventType,
        payload: dict[str, Any] | None = None,
        source: str = "unknown",
    ):
        """Emit an event (non-blocking).

        Args:
            event_type: Type of event
            payload: Event data
            source: Source identifier (e.g., 'locale_loader', 'language_state')
        """
        # Emits after shutdown are ignored
        if not self._running:
            return

        event = Event(type=event_type, payload=payload or {}, timestamp=time.time(), source=source)

        # Never block the emitting (pool) thread
        try:
            self._queue.put_nowait(event)
            with self._lock:
                self._events_emitted += 1
        except queue.Full:
            with self._lock:
                self._events_dropped += 1
            self._log_drop_warning(event_type)

    def subscribe(
        self, event_type: EventType, handler: Callable[[Event], None]
    ) -> tuple[EventType, Callable]:
        """Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function(event)

        Returns:
            Subscription token (event_type, handler) for unsubscription
        """
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(handler)
        return (event_type, handler)

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]):
        """Unsubscribe from an event type.

        Args:
            event_type: Type of event
            handler: Handler to remove
        """
        with self._lock:
            handlers = self._subscribers.get(event_type)
            if handlers and handler in handlers:
                handlers.remove(handler)

    def unsubscribe_token(self, token: tuple[EventType, Callable]):
        """Unsubscribe using a subscription token.

        Args:
            token: Subscription token returned from subscribe()
        """
        event_type, handler = token
        self.unsubscribe(event_type, handler)

    def process_events(self, max_events: int = 100) -> int:
        """Process pending events (call from main loop).

        Args:
            max_events: Maximum events to process per call

        Returns:
            Number of events processed
        """
        processed = 0

        while processed < max_events:
            # Non-blocking get
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                break
            self._dispatch(event)
            processed += 1

        self._events_processed += processed
        return processed

    def _dispatch(self, event: Event):
        """Dispatch event to subscribers.

        Args:
            event: Event to dispatch
        """
        # Snapshot so handlers may subscribe or unsubscribe while dispatching
        with self._lock:
            handlers = list(self._subscribers.get(event.type, []))

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event.type}")

    def _log_drop_warning(self, event_type: EventType):
        """Log warning about dropped event with rate limiting.

        Args:
            event_type: Type of event that was dropped
        """
        current_time = time.time()

        # Rate limit warnings to once per second
        if current_time - self._last_drop_warning >= 1.0:
            logger.warning(
                f"Event queue full, dropped {event_type}. "
                f"Total drops: {self._events_dropped}, Queue size: {self._queue.qsize()}"
            )
            self._last_drop_warning = current_time

    def get_metrics(self) -> dict[str, int]:
        """Get event bus metrics.

        Returns:
            Dictionary of metrics
        """
        return {
            "events_emitted": self._events_emitted,
            "events_processed": self._events_processed,
            "events_dropped": self._events_dropped,
            "queue_size": self._queue.qsize(),
        }

    def shutdown(self):
        """Shutdown event bus."""
        self._running = False

        # Drop anything not yet processed
        while not self._queue.empty():
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
