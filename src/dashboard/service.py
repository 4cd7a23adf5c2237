"""
DashboardService: the one object consumers hold.

Owns the storage, preference store, fetch orchestrator and change listener,
and projects views from the orchestrator's current snapshot on demand.

Usage:
    service = DashboardService.from_config(DashboardConfig.from_env())
    service.start()               # initial fetch + change listener
    soil = service.soil_view()
    service.stop()
"""

import logging
from typing import Any, Callable, Optional

from src.dashboard.chatbot import ChatbotClient, ChatbotRequest
from src.dashboard.client import DashboardApiClient
from src.dashboard.config import DashboardConfig
from src.dashboard.listener import PreferenceChangeListener
from src.dashboard.orchestrator import FetchOrchestrator, FetchState
from src.dashboard.preferences import PreferenceStore, UserPreferences
from src.dashboard.projectors import (
    PROJECTORS, project_analytics, project_crops, project_overview,
    project_soil, project_weather,
)
from src.dashboard.storage import LocalStorage, StorageWatcher
from src.dashboard.views import AnalyticsView, CropView, OverviewView, SoilView, WeatherView

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(
        self,
        store: PreferenceStore,
        orchestrator: FetchOrchestrator,
        listener: PreferenceChangeListener,
        chatbot: Optional[ChatbotClient] = None,
    ):
        self.store = store
        self.orchestrator = orchestrator
        self.listener = listener
        self.chatbot = chatbot or ChatbotClient()

    @classmethod
    def from_config(cls, config: DashboardConfig) -> "DashboardService":
        storage = LocalStorage(config.storage_path)
        store = PreferenceStore(storage)
        client = DashboardApiClient(config.api_base_url, timeout=config.request_timeout)
        orchestrator = FetchOrchestrator(store, client)
        watcher = StorageWatcher(storage, interval=config.poll_interval)
        listener = PreferenceChangeListener(orchestrator, store, watcher)
        chatbot = ChatbotClient(config.api_base_url, timeout=config.request_timeout)
        return cls(store, orchestrator, listener, chatbot)

    # ---- Lifecycle ----

    def start(self, watch: bool = True) -> FetchState:
        """Run the initial fetch, then attach the change listener."""
        logger.info("Starting dashboard service")
        state = self.orchestrator.run()
        self.listener.attach(start_watcher=watch)
        return state

    def stop(self) -> None:
        self.listener.detach()

    def refetch(self) -> FetchState:
        return self.orchestrator.refetch()

    def snapshot(self) -> FetchState:
        return self.orchestrator.snapshot()

    def subscribe(self, callback: Callable[[FetchState], None]) -> Callable[[], None]:
        return self.orchestrator.subscribe(callback)

    # ---- Preferences ----

    def preferences(self) -> UserPreferences:
        return self.store.load()

    def update_preferences(self, prefs: UserPreferences) -> None:
        """Persist preferences. An attached listener refetches on save."""
        self.store.save(prefs)

    # ---- Views ----

    def _payload(self) -> Any:
        return self.orchestrator.snapshot().payload

    def view(self, name: str) -> Any:
        """Project the named view ('overview', 'weather', 'soil', 'crops', 'analytics')."""
        try:
            projector = PROJECTORS[name]
        except KeyError:
            raise ValueError(
                f"Unknown view '{name}'. Choose from: {', '.join(PROJECTORS)}"
            ) from None
        return projector(self._payload())

    def overview_view(self) -> OverviewView:
        return project_overview(self._payload())

    def weather_view(self) -> WeatherView:
        return project_weather(self._payload())

    def soil_view(self) -> SoilView:
        return project_soil(self._payload())

    def crop_view(self) -> CropView:
        return project_crops(self._payload())

    def analytics_view(self) -> AnalyticsView:
        return project_analytics(self._payload())

    # ---- Chatbot ----

    def ask(self, message: str) -> str:
        """Send a chatbot message using the stored location and language."""
        request = ChatbotRequest.from_preferences(message, self.store.load())
        return self.chatbot.send_message(request)
