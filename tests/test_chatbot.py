"""
Tests for the chatbot client.
All HTTP calls are mocked — no network access required.
"""

import sys
import pytest
import requests
from unittest.mock import patch
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from conftest import make_response
from src.dashboard.chatbot import FALLBACK_REPLY, ChatbotClient, ChatbotRequest
from src.dashboard.errors import ChatbotApiError
from src.dashboard.preferences import UserPreferences


@pytest.fixture
def request_body():
    return ChatbotRequest(
        message="what is a good crop to grow in this season",
        language_code="en",
        latitude=28.6139,
        longitude=77.2090,
    )


class TestChatbotClient:
    def test_request_body(self, request_body):
        client = ChatbotClient("http://localhost:8080")
        with patch("src.dashboard.chatbot.requests.post") as mock_post:
            mock_post.return_value = make_response({"reply": "Try mustard this Rabi season."})
            reply = client.send_message(request_body)

        assert reply == "Try mustard this Rabi season."
        mock_post.assert_called_once_with(
            "http://localhost:8080/api/chatbot",
            json={
                "message": "what is a good crop to grow in this season",
                "languageCode": "en",
                "latitude": 28.6139,
                "longitude": 77.2090,
            },
            timeout=30.0,
        )

    @pytest.mark.parametrize("body,expected", [
        ({"reply": "a", "message": "b"}, "a"),
        ({"response": "c"}, "c"),
        ({"message": "b", "success": True}, "b"),
        ({}, FALLBACK_REPLY),
        ({"reply": ""}, FALLBACK_REPLY),
    ])
    def test_reply_extraction(self, request_body, body, expected):
        with patch("src.dashboard.chatbot.requests.post") as mock_post:
            mock_post.return_value = make_response(body)
            assert ChatbotClient().send_message(request_body) == expected

    def test_error_body_message(self, request_body):
        with patch("src.dashboard.chatbot.requests.post") as mock_post:
            mock_post.return_value = make_response({"message": "Invalid language"}, status_code=400)
            with pytest.raises(ChatbotApiError) as exc_info:
                ChatbotClient().send_message(request_body)

        assert exc_info.value.status == 400
        assert exc_info.value.message == "Invalid language"

    def test_error_body_error_field(self, request_body):
        with patch("src.dashboard.chatbot.requests.post") as mock_post:
            mock_post.return_value = make_response({"error": "LLM quota exceeded"}, status_code=500)
            with pytest.raises(ChatbotApiError, match="LLM quota exceeded"):
                ChatbotClient().send_message(request_body)

    def test_error_without_json_body(self, request_body):
        with patch("src.dashboard.chatbot.requests.post") as mock_post:
            resp = make_response(None, status_code=502)
            resp.json.side_effect = ValueError("no json")
            mock_post.return_value = resp
            with pytest.raises(ChatbotApiError) as exc_info:
                ChatbotClient().send_message(request_body)

        assert exc_info.value.message == "HTTP error! status: 502"
        assert exc_info.value.status == 502

    def test_unreachable_server_has_no_status(self, request_body):
        with patch("src.dashboard.chatbot.requests.post") as mock_post:
            mock_post.side_effect = requests.exceptions.ConnectionError("refused")
            with pytest.raises(ChatbotApiError) as exc_info:
                ChatbotClient("http://localhost:8080").send_message(request_body)

        assert exc_info.value.status is None
        assert "http://localhost:8080" in exc_info.value.message

    def test_request_from_preferences(self):
        req = ChatbotRequest.from_preferences("hello", UserPreferences(12.0, 77.0, "kn"))
        assert req.to_json() == {
            "message": "hello", "languageCode": "kn", "latitude": 12.0, "longitude": 77.0,
        }
