"""Folder watcher for auto-refresh of the active folder listing."""

import logging
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class FolderEventHandler(FileSystemEventHandler):
    """Handler for changes inside one folder, with debouncing."""

    def __init__(
        self,
        folder: Path,
        on_change: Callable[[Path], None],
        debounce_seconds: float = 0.5,
    ):
        super().__init__()
        self.folder = folder
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._pending = 0
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def _is_direct_child(self, path: str) -> bool:
        """Check if the path lives directly in the watched folder."""
        return Path(path).parent == self.folder

    def _schedule_update(self, path: str) -> None:
        """Schedule a debounced refresh for the watched folder."""
        logger.debug("Folder change detected: %s", path)
        with self._lock:
            self._pending += 1

            # Cancel existing timer
            if self._timer:
                self._timer.cancel()

            # Schedule new timer
            self._timer = threading.Timer(
                self.debounce_seconds,
                self._process_pending,
            )
            self._timer.daemon = True
            self._timer.start()

    def _process_pending(self) -> None:
        """Notify once for the burst of pending changes."""
        with self._lock:
            count = self._pending
            self._pending = 0
            self._timer = None

        if not count:
            return

        logger.info("Refreshing %s after %d change(s)", self.folder, count)
        self.on_change(self.folder)

    def cancel(self) -> None:
        with self._lock:
            if self._timer:
                self._timer.cancel()
                self._timer = None
            self._pending = 0

    def on_created(self, event: FileSystemEvent) -> None:
        if self._is_direct_child(event.src_path):
            self._schedule_update(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if self._is_direct_child(event.src_path):
            self._schedule_update(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        # Directory mtime updates duplicate the create/delete events
        if not event.is_directory and self._is_direct_child(event.src_path):
            self._schedule_update(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        dest_path = getattr(event, "dest_path", "")
        if self._is_direct_child(event.src_path) or (
            dest_path and self._is_direct_child(dest_path)
        ):
            self._schedule_update(event.src_path)


class FolderWatcher:
    """Watches the folder currently being browsed."""

    def __init__(
        self,
        on_change: Callable[[Path], None],
        debounce_seconds: float = 0.5,
    ):
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self.folder: Path | None = None
        self._observer: Observer | None = None
        self._handler: FolderEventHandler | None = None

    def watch(self, folder: Path | str) -> None:
        """Start watching ``folder``, replacing any previously watched one."""
        folder = Path(folder).resolve()
        if self._observer is not None and folder == self.folder:
            return  # Already watching it

        self.stop()
        if not folder.is_dir():
            logger.warning("Not watching %s: not a directory", folder)
            return

        self._handler = FolderEventHandler(folder, self.on_change, self.debounce_seconds)
        self._observer = Observer()
        self._observer.schedule(self._handler, str(folder), recursive=False)
        self._observer.daemon = True
        self._observer.start()
        self.folder = folder
        logger.info("Folder watcher started: %s", folder)

    def stop(self) -> None:
        """Stop watching."""
        if self._handler is not None:
            self._handler.cancel()
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=1.0)
        self._observer = None
        self._handler = None
        self.folder = None

    def __enter__(self) -> "FolderWatcher":
        return self

    def __exit__(self, *args) -> None:
        self.stop()
