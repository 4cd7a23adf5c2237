"""
Re-run the fetch whenever the preference key changes.

Two sources are observed:
    - StorageEvents for the preference key written by another process
    - the PreferenceStore save signal for writes made in this process

Events for any other key are ignored. Old and new values are not compared;
every matching event triggers exactly one `run()`.
"""

import logging
from typing import Callable, Optional

from src.dashboard.orchestrator import FetchOrchestrator
from src.dashboard.preferences import PreferenceStore, UserPreferences
from src.dashboard.storage import StorageEvent, StorageWatcher

logger = logging.getLogger(__name__)


class PreferenceChangeListener:
    """Subscribe the orchestrator to preference changes."""

    def __init__(
        self,
        orchestrator: FetchOrchestrator,
        store: PreferenceStore,
        watcher: StorageWatcher,
    ):
        self.orchestrator = orchestrator
        self.store = store
        self.watcher = watcher
        self._unsubscribe_store: Optional[Callable[[], None]] = None

    @property
    def key(self) -> str:
        return self.store.key

    @property
    def attached(self) -> bool:
        return self._unsubscribe_store is not None

    def handle_storage_event(self, event: StorageEvent) -> None:
        if event.key != self.key:
            return
        logger.info("User preferences changed in another process, refetching data...")
        self.orchestrator.run()

    def handle_local_save(self, prefs: UserPreferences) -> None:
        logger.info("User preferences saved, refetching data...")
        self.orchestrator.run()

    def attach(self, start_watcher: bool = True) -> None:
        """
        Start listening.

        Args:
            start_watcher: Also start the watcher's polling thread. Pass
                False to drive `watcher.poll()` manually.
        """
        if self.attached:
            return
        self.watcher.add_handler(self.handle_storage_event)
        self._unsubscribe_store = self.store.subscribe(self.handle_local_save)
        if start_watcher:
            self.watcher.start()

    def detach(self) -> None:
        if not self.attached:
            return
        self.watcher.remove_handler(self.handle_storage_event)
        self._unsubscribe_store()
        self._unsubscribe_store = None
        self.watcher.stop()
