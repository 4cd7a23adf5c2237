"""
Client for the backend chatbot endpoint.

    POST {base}/api/chatbot
    {"message": ..., "languageCode": ..., "latitude": ..., "longitude": ...}

Separate from the all-data fetch lifecycle: each call is a single
request/response exchange and errors propagate to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from src.dashboard.config import DEFAULT_API_BASE_URL
from src.dashboard.errors import ChatbotApiError
from src.dashboard.preferences import UserPreferences

logger = logging.getLogger(__name__)

CHATBOT_PATH = "/api/chatbot"
FALLBACK_REPLY = "Sorry, I couldn't process your request."


@dataclass(frozen=True)
class ChatbotRequest:
    message: str
    language_code: str
    latitude: float
    longitude: float

    @classmethod
    def from_preferences(cls, message: str, prefs: UserPreferences) -> "ChatbotRequest":
        return cls(
            message=message,
            language_code=prefs.language,
            latitude=prefs.latitude,
            longitude=prefs.longitude,
        )

    def to_json(self) -> dict:
        return {
            "message": self.message,
            "languageCode": self.language_code,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


def _error_message(resp: requests.Response) -> str:
    fallback = f"HTTP error! status: {resp.status_code}"
    try:
        body = resp.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    return body.get("message") or body.get("error") or fallback


class ChatbotClient:
    """Send messages to the chatbot endpoint."""

    def __init__(self, base_url: str = DEFAULT_API_BASE_URL, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def send_message(self, request: ChatbotRequest) -> str:
        """
        Post one message and return the reply text.

        Raises:
            ChatbotApiError: With `status` set for non-2xx responses, or
                `status=None` when the server could not be reached.
        """
        url = f"{self.base_url}{CHATBOT_PATH}"
        try:
            resp = requests.post(url, json=request.to_json(), timeout=self.timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.warning("Chatbot API unreachable at %s: %s", url, e)
            raise ChatbotApiError(
                "Unable to connect to the API server. Please make sure the "
                f"server is running on {self.base_url}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise ChatbotApiError(str(e)) from e

        if not resp.ok:
            message = _error_message(resp)
            logger.warning("Chatbot API returned %s: %s", resp.status_code, message)
            raise ChatbotApiError(message, status=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise ChatbotApiError(f"Invalid JSON from chatbot API: {e}", status=resp.status_code) from e

        reply: Optional[str] = None
        if isinstance(data, dict):
            reply = data.get("reply") or data.get("response") or data.get("message")
        return reply or FALLBACK_REPLY
