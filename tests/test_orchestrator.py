"""
Tests for the all-data client and the fetch orchestrator.
All HTTP calls are mocked — no network access required.
"""

import sys
import pytest
import requests
from unittest.mock import MagicMock, patch
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from conftest import make_response
from src.dashboard.client import DashboardApiClient
from src.dashboard.errors import FetchHTTPError, FetchNetworkError
from src.dashboard.orchestrator import (
    FETCH_ERROR_MESSAGE, FetchOrchestrator, FetchStatus,
)
from src.dashboard.preferences import PreferenceStore, UserPreferences
from src.dashboard.projectors import PROJECTORS, project_soil, project_weather
from src.dashboard.storage import LocalStorage


@pytest.fixture
def store(storage_path):
    return PreferenceStore(LocalStorage(storage_path))


@pytest.fixture
def orchestrator(store):
    return FetchOrchestrator(store, DashboardApiClient("http://localhost:8080"))


# ---------- Client tests ----------

class TestDashboardApiClient:
    def test_request_parameters(self):
        client = DashboardApiClient("http://localhost:8080/", timeout=12)
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response({"district": "Pune"})
            data = client.fetch_all_data(UserPreferences(18.52, 73.86, "mr"))

        assert data == {"district": "Pune"}
        mock_get.assert_called_once_with(
            "http://localhost:8080/api/all-data",
            params={"lat": 18.52, "lon": 73.86, "lang": "mr"},
            timeout=12,
        )

    def test_http_error(self):
        client = DashboardApiClient()
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response({"error": "boom"}, status_code=500)
            with pytest.raises(FetchHTTPError) as exc_info:
                client.fetch_all_data(UserPreferences())
        assert exc_info.value.status_code == 500

    def test_connection_error(self):
        client = DashboardApiClient()
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.side_effect = requests.exceptions.ConnectionError("refused")
            with pytest.raises(FetchNetworkError):
                client.fetch_all_data(UserPreferences())

    def test_invalid_json(self):
        client = DashboardApiClient()
        with patch("src.dashboard.client.requests.get") as mock_get:
            resp = make_response(None)
            resp.json.side_effect = ValueError("Expecting value")
            mock_get.return_value = resp
            with pytest.raises(FetchNetworkError):
                client.fetch_all_data(UserPreferences())

    def test_non_object_body_is_empty(self):
        client = DashboardApiClient()
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response([1, 2, 3])
            assert client.fetch_all_data(UserPreferences()) == {}


# ---------- Orchestrator tests ----------

class TestFetchOrchestrator:
    def test_initial_state(self, orchestrator):
        state = orchestrator.snapshot()
        assert state.status == FetchStatus.LOADING
        assert state.payload is None
        assert state.error_message is None

    def test_success(self, orchestrator, full_payload):
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response(full_payload)
            state = orchestrator.run()

        assert state.status == FetchStatus.SUCCESS
        assert state.payload == full_payload
        assert state.error_message is None
        assert orchestrator.snapshot() is state

    def test_uses_stored_preferences(self, orchestrator, store):
        store.save(UserPreferences(26.91, 75.79, "hi"))
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response({})
            orchestrator.run()

        params = mock_get.call_args.kwargs["params"]
        assert params == {"lat": 26.91, "lon": 75.79, "lang": "hi"}

    def test_failure_resets_payload_to_empty(self, orchestrator, full_payload):
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response(full_payload)
            orchestrator.run()
            mock_get.side_effect = requests.exceptions.Timeout("timeout")
            state = orchestrator.run()

        assert state.status == FetchStatus.ERROR
        assert state.error_message == FETCH_ERROR_MESSAGE
        # Not None and not the previous payload
        assert state.payload == {}

    @pytest.mark.parametrize("name", list(PROJECTORS))
    def test_views_render_after_failure(self, orchestrator, name):
        """Fetch failure is contained: projectors still return full views."""
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response({}, status_code=503)
            state = orchestrator.run()

        assert state.error_message is not None
        assert PROJECTORS[name](state.payload) is not None
        assert project_weather(state.payload).current.temperature == 24.5
        assert project_soil(state.payload).ph == 7.2

    def test_success_clears_error(self, orchestrator):
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.side_effect = requests.exceptions.ConnectionError("down")
            orchestrator.run()
            mock_get.side_effect = None
            mock_get.return_value = make_response({"district": "Nashik"})
            state = orchestrator.run()

        assert state.status == FetchStatus.SUCCESS
        assert state.error_message is None

    def test_publishes_loading_then_result(self, orchestrator):
        seen = []
        orchestrator.subscribe(lambda s: seen.append(s.status))
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response({})
            orchestrator.run()

        assert seen == [FetchStatus.LOADING, FetchStatus.SUCCESS]

    def test_unsubscribe(self, orchestrator):
        callback = MagicMock()
        unsubscribe = orchestrator.subscribe(callback)
        unsubscribe()
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response({})
            orchestrator.run()
        callback.assert_not_called()

    def test_refetch_runs_again(self, orchestrator):
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response({})
            orchestrator.run()
            state = orchestrator.refetch()

        assert mock_get.call_count == 2
        assert state.generation == 2

    def test_superseded_response_discarded(self, store):
        """
        A run that starts while another is in flight wins, even though the
        older response arrives last.
        """
        client = MagicMock()
        orchestrator = FetchOrchestrator(store, client)
        published = []
        orchestrator.subscribe(published.append)

        def first_fetch(prefs):
            # Second trigger fires while the first request is still pending
            client.fetch_all_data.side_effect = lambda p: {"district": "newer"}
            orchestrator.run()
            return {"district": "older"}

        client.fetch_all_data.side_effect = first_fetch
        returned = orchestrator.run()

        final = orchestrator.snapshot()
        assert final.payload == {"district": "newer"}
        assert final.generation == 2
        assert returned is final
        # The stale response was never published
        assert all(s.payload != {"district": "older"} for s in published)

    def test_unexpected_store_error_ends_in_error(self, store):
        client = MagicMock()
        orchestrator = FetchOrchestrator(store, client)
        with patch.object(store, "load", side_effect=OverflowError("int too large")):
            state = orchestrator.run()

        assert state.status == FetchStatus.ERROR
        assert state.payload == {}
        assert state.error_message == FETCH_ERROR_MESSAGE
        assert orchestrator.snapshot() is state
        client.fetch_all_data.assert_not_called()

    def test_unexpected_client_error_ends_in_error(self, store):
        client = MagicMock()
        client.fetch_all_data.side_effect = KeyError("lat")
        orchestrator = FetchOrchestrator(store, client)
        state = orchestrator.run()

        assert state.status == FetchStatus.ERROR
        assert not orchestrator.snapshot().is_loading

    def test_failing_subscriber_does_not_block_state(self, orchestrator):
        seen = []
        orchestrator.subscribe(MagicMock(side_effect=RuntimeError("render failed")))
        orchestrator.subscribe(lambda s: seen.append(s.status))
        with patch("src.dashboard.client.requests.get") as mock_get:
            mock_get.return_value = make_response({})
            state = orchestrator.run()

        assert state.status == FetchStatus.SUCCESS
        assert seen == [FetchStatus.LOADING, FetchStatus.SUCCESS]
