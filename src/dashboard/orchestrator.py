"""
Fetch orchestrator: owns the raw payload cache and its loading/success/error
lifecycle.

A failed fetch replaces the payload with an empty dict rather than None, so
every projector still yields a fully defaulted view; only `error_message`
reports the failure.

Overlapping `run()` calls are allowed. Each call takes a generation token
and only the call holding the latest token may publish its result; older
responses are discarded when they arrive.
"""

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from prometheus_client import Counter

from src.dashboard.client import DashboardApiClient
from src.dashboard.errors import FetchError
from src.dashboard.preferences import PreferenceStore

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to load data. Using fallback data."

FETCH_COUNT = Counter(
    "dashboard_fetch_total", "All-data fetches by outcome", ["status"],
)


class FetchStatus(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class FetchState:
    """Immutable snapshot of the orchestrator."""
    payload: Optional[Dict[str, Any]] = None
    status: FetchStatus = FetchStatus.LOADING
    error_message: Optional[str] = None
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status == FetchStatus.LOADING


StateCallback = Callable[[FetchState], None]


class FetchOrchestrator:
    """
    Run the all-data fetch and publish snapshots to subscribers.

    Usage:
        orchestrator = FetchOrchestrator(store, DashboardApiClient())
        orchestrator.subscribe(lambda state: print(state.status))
        orchestrator.run()
        payload = orchestrator.snapshot().payload
    """

    def __init__(self, store: PreferenceStore, client: DashboardApiClient):
        self.store = store
        self.client = client
        self._lock = threading.Lock()
        self._state = FetchState()
        self._generation = 0
        self._subscribers: List[StateCallback] = []

    def snapshot(self) -> FetchState:
        with self._lock:
            return self._state

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """Register a callback for every published state. Returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, state: FetchState) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(state)
            except Exception:
                logger.exception("State subscriber %r failed", callback)

    @staticmethod
    def _failed(token: int) -> FetchState:
        return FetchState(
            payload={},
            status=FetchStatus.ERROR,
            error_message=FETCH_ERROR_MESSAGE,
            generation=token,
        )

    def run(self) -> FetchState:
        """
        Fetch the payload using the current preferences.

        Returns:
            The state after this call. If a newer run started while this one
            was in flight, the newer run's current state is returned and
            this call's response is dropped.
        """
        with self._lock:
            self._generation += 1
            token = self._generation
            self._state = replace(
                self._state,
                status=FetchStatus.LOADING,
                error_message=None,
                generation=token,
            )
            loading = self._state
        self._publish(loading)

        try:
            prefs = self.store.load()
            payload = self.client.fetch_all_data(prefs)
        except FetchError as e:
            logger.error("Error fetching data: %s", e)
            result = self._failed(token)
        except Exception:
            logger.exception("Unexpected error during fetch #%d", token)
            result = self._failed(token)
        else:
            logger.info("Fetched API data (%d top-level keys)", len(payload))
            result = FetchState(
                payload=payload,
                status=FetchStatus.SUCCESS,
                error_message=None,
                generation=token,
            )

        with self._lock:
            if token != self._generation:
                logger.warning(
                    "Discarding response for fetch #%d; fetch #%d is newer",
                    token, self._generation,
                )
                FETCH_COUNT.labels(status="superseded").inc()
                return self._state
            self._state = result
        FETCH_COUNT.labels(status=result.status.value).inc()
        self._publish(result)
        return result

    def refetch(self) -> FetchState:
        """Manual refetch requested by a consumer."""
        logger.info("Manual refetch requested")
        return self.run()
