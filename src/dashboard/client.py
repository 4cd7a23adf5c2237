"""
HTTP client for the dashboard backend's all-data endpoint.

    GET {base}/api/all-data?lat=<float>&lon=<float>&lang=<code>

The response body is returned as-is; no schema validation is applied.
"""

import logging
from typing import Any, Dict

import requests

from src.dashboard.config import DEFAULT_API_BASE_URL
from src.dashboard.errors import FetchHTTPError, FetchNetworkError
from src.dashboard.preferences import UserPreferences

logger = logging.getLogger(__name__)

ALL_DATA_PATH = "/api/all-data"


class DashboardApiClient:
    """Fetch the raw dashboard payload for a set of preferences."""

    def __init__(self, base_url: str = DEFAULT_API_BASE_URL, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}{ALL_DATA_PATH}"

    def fetch_all_data(self, prefs: UserPreferences) -> Dict[str, Any]:
        """
        Fetch the raw payload for the given location and language.

        Args:
            prefs: Location and language sent as lat/lon/lang query parameters.

        Returns:
            The decoded JSON body. A body that is not a JSON object is
            replaced by an empty dict.

        Raises:
            FetchHTTPError: On a non-2xx response.
            FetchNetworkError: On connection failure, timeout, or a body
                that is not JSON.
        """
        params = {
            "lat": prefs.latitude,
            "lon": prefs.longitude,
            "lang": prefs.language,
        }
        logger.info(
            "Fetching data with user preferences: lat=%s, lon=%s, lang=%s",
            prefs.latitude, prefs.longitude, prefs.language,
        )

        try:
            resp = requests.get(self.url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FetchNetworkError(f"Request to {self.url} failed: {e}") from e

        try:
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise FetchHTTPError(
                f"Backend returned HTTP {resp.status_code}", resp.status_code,
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise FetchNetworkError(f"Response from {self.url} is not JSON: {e}") from e

        if not isinstance(data, dict):
            logger.warning(
                "Expected a JSON object from %s, got %s; treating as empty",
                self.url, type(data).__name__,
            )
            return {}
        return data
