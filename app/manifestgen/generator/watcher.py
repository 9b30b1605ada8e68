"""Watch mode: rebuild the manifest whenever the source tree changes.

A watchdog observer delivers filesystem events from its own thread.
Relevant events are turned into rebuild requests on a single-slot
SettleQueue: a request only marks a rebuild as pending, and one worker
thread runs it once the tree has been quiet for the settle window.
Rebuilds therefore never overlap, and a burst of events collapses into
a single rebuild.
"""

import logging
import os
import signal
import threading
import time
from collections.abc import Callable
from pathlib import Path
from types import FrameType

from rich.markup import escape
from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from manifestgen.core.paths import MANIFEST_NAME
from manifestgen.generator.builder import ManifestBuilder
from manifestgen.generator.errors import ConfigurationError, ManifestError
from manifestgen.generator.filters import is_test_file
from manifestgen.models.options import ScanOptions
from manifestgen.utils.formatting import (
    console,
    print_error,
    print_info,
    print_separator,
    print_warning,
)

logger = logging.getLogger(__name__)

# Quiet period required after the last event before rebuilding (seconds)
SETTLE_SECONDS = 0.2

# How often the worker re-checks a pending request (seconds)
POLL_SECONDS = 0.1

_EVENT_LABELS: dict[str, tuple[str, str]] = {
    EVENT_TYPE_CREATED: ("File created", "added"),
    EVENT_TYPE_MODIFIED: ("File changed", "changed"),
    EVENT_TYPE_DELETED: ("File removed", "removed"),
    EVENT_TYPE_MOVED: ("File moved", "changed"),
}


class SettleQueue:
    """Single-slot rebuild queue with a settle window.

    ``request()`` never runs the callback itself. It marks a rebuild as
    pending and restarts the settle window; the worker thread polls the
    queue and runs the callback once no request arrived for
    ``settle_seconds``. Requests made while the callback runs produce
    exactly one follow-up run.

    Args:
        callback: Function run for each settled request.
        settle_seconds: Quiet period required before running.
        poll_seconds: Interval between checks of a pending request.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        *,
        settle_seconds: float = SETTLE_SECONDS,
        poll_seconds: float = POLL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._callback = callback
        self._settle_seconds = settle_seconds
        self._poll_seconds = poll_seconds
        self._clock = clock

        self._lock = threading.Lock()
        self._wakeup = threading.Event()
        self._stopped = threading.Event()
        self._pending = False
        self._last_request = 0.0
        self._thread: threading.Thread | None = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending

    def request(self) -> None:
        """Mark a rebuild as pending and restart the settle window."""
        with self._lock:
            self._pending = True
            self._last_request = self._clock()
        self._wakeup.set()

    def take_due(self) -> bool:
        """Consume the pending request if its settle window has elapsed.

        Returns:
            True if a request was pending and is now due (and cleared).
        """
        with self._lock:
            if not self._pending:
                return False
            if self._clock() - self._last_request < self._settle_seconds:
                return False
            self._pending = False
            return True

    def cancel(self) -> None:
        """Drop a pending request, if any."""
        with self._lock:
            self._pending = False

    def start(self) -> None:
        """Start the worker thread."""
        if self._thread is not None:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="manifestgen-rebuild", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Cancel any pending request and wait for the worker to finish.

        A callback already running is allowed to complete.
        """
        self.cancel()
        self._stopped.set()
        self._wakeup.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stopped.is_set():
            self._wakeup.wait()
            self._wakeup.clear()
            while not self._stopped.is_set() and self.pending:
                if self.take_due():
                    self._run_callback()
                else:
                    self._stopped.wait(self._poll_seconds)

    def _run_callback(self) -> None:
        try:
            self._callback()
        except Exception:
            # Keep the worker alive; the next event retries the rebuild
            logger.exception("Rebuild callback failed")


def expand_ignored_paths(options: ScanOptions) -> frozenset[Path]:
    """Expand exclude patterns into concrete paths under the base directory.

    Patterns are expanded once, as globs relative to the base directory.
    Patterns the glob engine rejects are skipped with a warning.

    Returns:
        Resolved paths whose events (and descendants' events) are ignored.
    """
    ignored: set[Path] = set()
    for pattern in options.exclude_patterns:
        try:
            ignored.update(path.resolve() for path in options.base_dir.glob(pattern))
        except (ValueError, NotImplementedError) as e:
            logger.warning("Cannot expand exclude pattern %r for watching: %s", pattern, e)
    return frozenset(ignored)


class ManifestEventHandler(FileSystemEventHandler):
    """Forwards relevant filesystem events to a change callback.

    Args:
        options: Active scan options.
        ignored_paths: Pre-expanded excluded paths.
        on_change: Called with (event_type, path) for each relevant event.
    """

    def __init__(
        self,
        options: ScanOptions,
        ignored_paths: frozenset[Path],
        on_change: Callable[[str, str], None],
    ) -> None:
        super().__init__()
        self._options = options
        self._ignored_paths = ignored_paths
        self._on_change = on_change

    def is_ignored(self, path: str) -> bool:
        """Check whether events on ``path`` must not trigger a rebuild."""
        if MANIFEST_NAME in Path(path).name:
            return True

        if self._options.exclude_tests and is_test_file(path, self._options.all_extensions):
            return True

        if self._ignored_paths:
            resolved = Path(path).resolve()
            if resolved in self._ignored_paths:
                return True
            if any(parent in self._ignored_paths for parent in resolved.parents):
                return True

        return False

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _EVENT_LABELS:
            return
        # Writing a file inside a directory also modifies the directory
        if event.is_directory and event.event_type == EVENT_TYPE_MODIFIED:
            return

        src_path = os.fsdecode(event.src_path)
        paths = [src_path]
        if event.event_type == EVENT_TYPE_MOVED and event.dest_path:
            paths.append(os.fsdecode(event.dest_path))

        if all(self.is_ignored(path) for path in paths):
            logger.debug("Ignoring %s event on %s", event.event_type, src_path)
            return

        try:
            self._on_change(event.event_type, src_path)
        except Exception:
            logger.exception("Failed to handle %s event on %s", event.event_type, src_path)


class ManifestWatcher:
    """Keeps the manifest up to date while the source tree changes.

    The watcher is Idle until ``start()`` and Watching until ``stop()``.
    ``start()`` opens the filesystem subscription, then builds the
    manifest once, synchronously. Changes seen during that build are
    queued and trigger one rebuild afterwards. Rebuilds triggered by
    events run with verbose output off.

    Example:
        >>> watcher = ManifestWatcher(options)
        >>> install_shutdown_handlers(watcher)
        >>> watcher.start()
        >>> try:
        ...     watcher.wait()
        ... finally:
        ...     watcher.stop()

    Args:
        options: Active scan options.
        observer_factory: Creates the watchdog observer.
        settle_seconds: Quiet period before a rebuild.
        poll_seconds: Interval between checks of a pending rebuild.
    """

    def __init__(
        self,
        options: ScanOptions,
        *,
        observer_factory: Callable[[], BaseObserver] = Observer,
        settle_seconds: float = SETTLE_SECONDS,
        poll_seconds: float = POLL_SECONDS,
    ) -> None:
        self._options = options
        self._rebuild_options = options.model_copy(update={"verbose": False})
        self._observer_factory = observer_factory
        self._observer: BaseObserver | None = None
        self._queue = SettleQueue(
            self._rebuild,
            settle_seconds=settle_seconds,
            poll_seconds=poll_seconds,
        )
        self._lock = threading.Lock()
        self._shutdown = threading.Event()
        self._observer_failure_reported = False

    @property
    def is_watching(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        """Start watching the base directory and build the manifest once.

        Raises:
            ConfigurationError: If the options are unusable (e.g. a bad pattern).
            ManifestError: If the filesystem subscription cannot be opened.
            RuntimeError: If the watcher is already watching.
        """
        with self._lock:
            if self._observer is not None:
                raise RuntimeError("Watcher is already running")
            # A shutdown requested from here on, even mid-build, must reach wait()
            self._shutdown.clear()

            handler = ManifestEventHandler(
                self._options,
                expand_ignored_paths(self._options),
                self._on_change,
            )
            observer = self._observer_factory()
            try:
                observer.schedule(handler, str(self._options.base_dir), recursive=True)
                observer.start()
            except OSError as e:
                raise ManifestError(f"Cannot watch {self._options.base_dir}: {e}") from e

            # Events seen during the initial build stay pending until the worker starts
            try:
                self._initial_build()
            except ConfigurationError:
                observer.stop()
                observer.join()
                raise

            self._queue.start()
            self._observer = observer

        print_info(f"Watching {self._options.base_dir} for changes")
        if self._options.verbose:
            print_info("Press Ctrl+C to stop watching")
        print_separator()

    def wait(self, poll_seconds: float = 0.5) -> None:
        """Block until a shutdown is requested."""
        while not self._shutdown.wait(poll_seconds):
            self._check_observer()

    def request_shutdown(self) -> None:
        """Ask ``wait()`` to return. Safe to call from a signal handler."""
        self._shutdown.set()

    def stop(self) -> None:
        """Stop watching and release the filesystem subscription.

        The subscription is released exactly once, however many times
        stop() is called. A rebuild already in progress is allowed to
        finish; a pending one is dropped.
        """
        with self._lock:
            observer, self._observer = self._observer, None
        self._shutdown.set()
        if observer is None:
            return

        self._queue.cancel()
        observer.stop()
        observer.join()
        self._queue.stop()
        logger.debug("Released filesystem subscription on %s", self._options.base_dir)

    def _initial_build(self) -> None:
        try:
            ManifestBuilder(self._options).build()
        except ConfigurationError:
            raise
        except ManifestError as e:
            print_error(f"Initial build failed: {e}")

    def _on_change(self, event_type: str, path: str) -> None:
        if self._options.verbose:
            label, style = _EVENT_LABELS[event_type]
            try:
                shown = Path(path).relative_to(self._options.base_dir).as_posix()
            except ValueError:
                shown = path
            console.print(f"[{style}]{label}:[/] {escape(shown)}", highlight=False)
        self._queue.request()

    def _rebuild(self) -> None:
        try:
            ManifestBuilder(self._rebuild_options).build()
        except ManifestError as e:
            print_error(f"Rebuild failed: {e}")

    def _check_observer(self) -> None:
        observer = self._observer
        if observer is None or observer.is_alive() or self._observer_failure_reported:
            return
        self._observer_failure_reported = True
        logger.error("Filesystem observer for %s stopped", self._options.base_dir)
        print_warning("Filesystem watcher stopped unexpectedly; changes are no longer tracked.")


def install_shutdown_handlers(watcher: ManifestWatcher) -> None:
    """Route SIGINT and SIGTERM to ``watcher.request_shutdown()``.

    Must be called from the main thread.
    """

    def _handle(signum: int, _frame: FrameType | None) -> None:
        logger.debug("Received signal %d, shutting down", signum)
        watcher.request_shutdown()

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _handle)
