"""
File-backed key/value storage shared between dashboard processes.

Each process opens its own LocalStorage on the same JSON file (one object
mapping keys to string values). A LocalStorage remembers the last state it
wrote or observed, so `sync()` reports only changes made by *other*
processes. StorageWatcher polls `sync()` on a background thread and hands
the resulting StorageEvents to its handlers.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageEvent:
    """A key changed in storage by another process."""
    key: str
    old_value: Optional[str]
    new_value: Optional[str]


class LocalStorage:
    """
    Persistent string key/value store.

    Usage:
        storage = LocalStorage(Path("~/.kisaan_mitra/local_storage.json").expanduser())
        storage.set_item("key", "value")
        storage.get_item("key")
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._known: Dict[str, str] = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Storage file %s unreadable: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold an object; ignoring", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write-then-rename so readers never see a half-written file
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get_item(self, key: str) -> Optional[str]:
        """Return the current value for `key`, or None if absent."""
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._read()
            items[key] = value
            self._write(items)
            self._known[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            items = self._read()
            if key not in items:
                return
            del items[key]
            self._write(items)
            self._known.pop(key, None)

    def sync(self) -> List[StorageEvent]:
        """
        Re-read the file and report keys changed since this instance last
        wrote or synced them.

        Returns:
            One StorageEvent per changed key, sorted by key.
        """
        with self._lock:
            current = self._read()
            events = []
            for key in sorted(set(current) | set(self._known)):
                old = self._known.get(key)
                new = current.get(key)
                if old != new:
                    events.append(StorageEvent(key=key, old_value=old, new_value=new))
            self._known = current
        return events


StorageHandler = Callable[[StorageEvent], None]


class StorageWatcher:
    """
    Poll a LocalStorage for changes made by other processes.

    `poll()` runs a single check and is what the background thread calls;
    tests call it directly.
    """

    def __init__(self, storage: LocalStorage, interval: float = 1.0):
        self.storage = storage
        self.interval = interval
        self._handlers: List[StorageHandler] = []
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def add_handler(self, handler: StorageHandler) -> None:
        self._handlers.append(handler)

    def remove_handler(self, handler: StorageHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def poll(self) -> int:
        """Dispatch pending events to every handler. Returns the event count."""
        events = self.storage.sync()
        for event in events:
            logger.debug("Storage key '%s' changed externally", event.key)
            for handler in list(self._handlers):
                handler(event)
        return len(events)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        # Changes made before start() are not reported
        self.storage.sync()
        self._thread = threading.Thread(
            target=self._loop, name="storage-watcher", daemon=True,
        )
        self._thread.start()
        logger.info("Watching %s every %.1fs", self.storage.path, self.interval)

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2 + 1)
            self._thread = None

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.poll()
            except Exception as e:
                logger.error("Storage watcher poll failed: %s", e)
