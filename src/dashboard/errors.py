"""Exception types raised by the dashboard client."""

from typing import Optional


class DashboardError(Exception):
    """Base class for dashboard client errors."""


class PreferenceParseError(DashboardError, ValueError):
    """Persisted preferences are missing or malformed. Always recovered locally."""


class FetchError(DashboardError):
    """The all-data request did not produce a usable payload."""


class FetchNetworkError(FetchError):
    """Connection failure, timeout, or an undecodable response body."""


class FetchHTTPError(FetchError):
    """The backend answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ChatbotApiError(DashboardError):
    """Chatbot request failed. `status` is None when the server was unreachable."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status
