"""Asynchronous loading of locale sources.

A manifest lists one source name per line. Every source is fetched on a
bounded pool; each completion ingests its text into the store and counts down
a ReadyGate. The ready transition fires exactly once, after the last source
has completed, whether it succeeded or not. A stalled fetch leaves the loader
not ready; there is no timeout or cancellation.
"""

import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from pathlib import Path

import requests

from kiosk_locale.core.event_bus import EventBus
from kiosk_locale.core.event_payloads import (
    LocaleSourcePayload,
    LocalesReadyPayload,
    ShutdownPayload,
)
from kiosk_locale.core.events import EventType
from kiosk_locale.core.logging_utils import log_event, setup_logger
from kiosk_locale.core.retry import retry
from kiosk_locale.core.thread_pool import MAX_FETCH_THREADS, create_fetch_executor, submit_task
from kiosk_locale.localization.errors import AlreadyInitializedError
from kiosk_locale.localization.languages import Language
from kiosk_locale.localization.observers import ObserverList
from kiosk_locale.localization.store import LocalizationStore

__all__ = [
    "FileSourceFetcher",
    "HttpSourceFetcher",
    "LocaleLoader",
    "ReadyGate",
    "SourceFetcher",
    "parse_manifest",
]

logger = setup_logger(__name__)

SourceFetcher = Callable[[str], str]


def parse_manifest(text: str | None) -> list[str]:
    """Return the source names listed in a manifest, skipping blank lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


class FileSourceFetcher:
    """Reads sources from a directory as UTF-8 text."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def __call__(self, name: str) -> str:
        return (self.base_dir / name).read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return f"FileSourceFetcher({str(self.base_dir)!r})"


class HttpSourceFetcher:
    """Downloads sources relative to a base URL."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        """Initialize HTTP fetcher.

        Args:
            base_url: URL the source names are appended to
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def __call__(self, name: str) -> str:
        return self._get(f"{self.base_url}/{name}")

    @retry(tries=3, delay=0.5, exceptions=(requests.ConnectionError, requests.Timeout))
    def _get(self, url: str) -> str:
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content.decode("utf-8")

    def __repr__(self) -> str:
        return f"HttpSourceFetcher({self.base_url!r})"


class ReadyGate:
    """Counts outstanding completions and opens exactly once.

    complete() may be called concurrently from several threads; only the
    call that brings the count to zero returns True.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pending = 0
        self._opened = False

    def arm(self, count: int) -> bool:
        """Set the number of expected completions.

        Returns:
            True if the gate opened immediately (count <= 0)
        """
        with self._lock:
            self._pending = count
            if count <= 0 and not self._opened:
                self._opened = True
                return True
        return False

    def complete(self, action: Callable[[], None] | None = None) -> bool:
        """Record one completion, running action under the gate lock first.

        Returns:
            True for the single completion that opened the gate
        """
        with self._lock:
            try:
                if action is not None:
                    action()
            finally:
                self._pending -= 1
                opened = self._pending <= 0 and not self._opened
                if opened:
                    self._opened = True
        return opened

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._opened

    @property
    def pending(self) -> int:
        with self._lock:
            return self._pending


class LocaleLoader:
    """Fetches every listed source and ingests it into a store."""

    def __init__(
        self,
        store: LocalizationStore,
        fetcher: SourceFetcher,
        manifest: str = "manifest",
        language_resolver: Callable[[str], Language] | None = None,
        max_workers: int = MAX_FETCH_THREADS,
        event_bus: EventBus | None = None,
    ):
        """Initialize loader.

        Args:
            store: Store that receives every fetched source
            fetcher: name -> raw text; called on pool threads
            manifest: Name of the manifest source
            language_resolver: Header abbreviation resolver for ingestion
            max_workers: Concurrent fetches
            event_bus: Optional bus for per-source and ready events
        """
        self._store = store
        self._fetcher = fetcher
        self._manifest = manifest
        self._resolver = language_resolver
        self._max_workers = max_workers
        self._event_bus = event_bus

        self._gate = ReadyGate()
        self._ready = threading.Event()
        self._ready_lock = threading.Lock()
        self._ready_observers = ObserverList("locales ready")
        self._executor: ThreadPoolExecutor | None = None
        self._initialized = False
        self._ready_fired = False

        self.sources: list[str] = []
        self.loaded: list[str] = []
        self.errors: list[tuple[str, Exception]] = []

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    def initialize(self, sources: Iterable[str] | None = None):
        """Start loading.

        Args:
            sources: Source names to load; when None they are read from the
                manifest, itself fetched asynchronously

        Raises:
            AlreadyInitializedError: If called more than once
        """
        if self._initialized:
            raise AlreadyInitializedError("Locale loader already initialized")
        self._initialized = True

        self._executor = create_fetch_executor(self._max_workers)

        if sources is not None:
            self._start(list(sources))
            return

        future = submit_task(self._executor, self._fetcher, self._manifest, name="manifest")
        future.add_done_callback(self._on_manifest)

    def wait_ready(self, timeout: float | None = None) -> bool:
        """Block until ready; returns False on timeout."""
        return self._ready.wait(timeout)

    def subscribe_ready(self, callback: Callable[["LocaleLoader"], None]):
        """Register callback(loader) for the ready transition.

        Callbacks run on the thread that completes the last source. If the
        loader is already ready the callback runs immediately.
        """
        with self._ready_lock:
            if not self._ready_fired:
                return self._ready_observers.add(callback)
        callback(self)
        return callback

    def unsubscribe_ready(self, callback: Callable[["LocaleLoader"], None]) -> bool:
        with self._ready_lock:
            return self._ready_observers.remove(callback)

    def shutdown(self, wait: bool = True):
        """Shut down the fetch pool and publish SHUTDOWN once."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None
            payload: ShutdownPayload = {"pending": self._gate.pending}
            self._emit(EventType.SHUTDOWN, payload)

    def _on_manifest(self, future: Future):
        try:
            names = parse_manifest(future.result())
        except Exception as e:
            logger.error(f"Failed to load manifest '{self._manifest}': {e}")
            names = []
        self._start(names)

    def _start(self, names: list[str]):
        self.sources = names
        if self._gate.arm(len(names)):
            logger.info("No locale sources found")
            self._fire_ready()
            return

        logger.info(f"Loading {len(names)} locale sources")
        for name in names:
            future = submit_task(self._executor, self._fetcher, name, name=f"fetch {name}")
            future.add_done_callback(partial(self._on_source, name))

    def _on_source(self, name: str, future: Future):
        if self._gate.complete(partial(self._ingest, name, future)):
            self._fire_ready()

    def _ingest(self, name: str, future: Future):
        # Runs under the gate lock; store writes from pool threads are serialized
        try:
            result = self._store.ingest(future.result(), self._resolver)
        except Exception as e:
            logger.error(f"Failed to load locales from '{name}': {e}")
            self.errors.append((name, e))
            failed: LocaleSourcePayload = {"source": name, "error": str(e)}
            self._emit(EventType.LOCALE_SOURCE_FAILED, failed)
            return

        self.loaded.append(name)
        loaded: LocaleSourcePayload = {
            "source": name,
            "languages": [lang.name for lang in result.languages],
        }
        self._emit(EventType.LOCALE_SOURCE_LOADED, loaded)

    def _fire_ready(self):
        # Late subscribers either land in this snapshot or see the flag set
        with self._ready_lock:
            if self._ready_fired:
                return
            self._ready_fired = True
            observers = self._ready_observers
            self._ready_observers = ObserverList("locales ready")

        payload: LocalesReadyPayload = {
            "sources": len(self.sources),
            "failed": len(self.errors),
            "languages": [lang.name for lang in self._store.languages],
        }
        log_event(logger, "locales_ready", payload)
        self._emit(EventType.LOCALES_READY, payload)
        observers.notify(self)
        self._ready.set()

    def _emit(self, event_type: EventType, payload: dict):
        if self._event_bus is not None:
            self._event_bus.emit(event_type, payload, source="locale_loader")
