"""
Runtime configuration for the dashboard client.
Every setting can be overridden through an environment variable.
"""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_STATE_DIR = "~/.kisaan_mitra"
STORAGE_FILENAME = "local_storage.json"

# Storage key shared with the setup flow
PREFERENCES_KEY = "kisaan-mitra-preferences"


@dataclass
class DashboardConfig:
    """Settings for one dashboard client instance."""
    api_base_url: str = DEFAULT_API_BASE_URL
    state_dir: str = DEFAULT_STATE_DIR
    request_timeout: float = 30.0
    poll_interval: float = 1.0

    def __post_init__(self):
        self.api_base_url = self.api_base_url.rstrip("/")

    @property
    def storage_path(self) -> Path:
        return Path(self.state_dir).expanduser() / STORAGE_FILENAME

    @classmethod
    def from_env(cls) -> "DashboardConfig":
        """Build a config from DASHBOARD_* environment variables."""
        return cls(
            api_base_url=os.environ.get("DASHBOARD_API_BASE_URL", DEFAULT_API_BASE_URL),
            state_dir=os.environ.get("DASHBOARD_STATE_DIR", DEFAULT_STATE_DIR),
            request_timeout=float(os.environ.get("DASHBOARD_REQUEST_TIMEOUT", "30")),
            poll_interval=float(os.environ.get("DASHBOARD_POLL_INTERVAL", "1.0")),
        )
