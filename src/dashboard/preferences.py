"""
User preference persistence: location and language used for every fetch.

Preferences live under a single storage key as JSON text:
    {"latitude": 28.7, "longitude": 77.1, "language": "en"}

`load()` never raises. Missing or malformed records resolve to the Delhi
defaults, field by field.
"""

import json
import logging
import math
from dataclasses import asdict, dataclass
from typing import Callable, List

from src.dashboard.config import PREFERENCES_KEY
from src.dashboard.errors import PreferenceParseError
from src.dashboard.storage import LocalStorage

logger = logging.getLogger(__name__)

# Delhi
DEFAULT_LATITUDE = 28.7
DEFAULT_LONGITUDE = 77.1
DEFAULT_LANGUAGE = "en"

# Languages offered by the setup flow
SUPPORTED_LANGUAGES = {
    "en": "English",
    "hi": "हिंदी (Hindi)",
    "bn": "বাংলা (Bengali)",
    "te": "తెలుగు (Telugu)",
    "ta": "தமிழ் (Tamil)",
    "mr": "मराठी (Marathi)",
    "gu": "ગુજરાતી (Gujarati)",
    "kn": "ಕನ್ನಡ (Kannada)",
    "or": "ଓଡ଼ିଆ (Odia)",
    "pa": "ਪੰਜਾਬੀ (Punjabi)",
}


@dataclass(frozen=True)
class UserPreferences:
    """Location and language for dashboard requests."""
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    language: str = DEFAULT_LANGUAGE


def _coerce_coordinate(value, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    try:
        value = float(value)
    except OverflowError:
        return default
    if not math.isfinite(value):
        return default
    return value


def parse_preferences(text: str) -> UserPreferences:
    """
    Parse stored JSON text into UserPreferences.

    Individual fields that are absent or of the wrong type take their
    default.

    Raises:
        PreferenceParseError: If the text is not a JSON object.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise PreferenceParseError(f"Invalid preferences JSON: {e}") from e
    if not isinstance(data, dict):
        raise PreferenceParseError(
            f"Preferences must be a JSON object, got {type(data).__name__}"
        )

    language = data.get("language")
    if not isinstance(language, str) or not language:
        language = DEFAULT_LANGUAGE

    return UserPreferences(
        latitude=_coerce_coordinate(data.get("latitude"), DEFAULT_LATITUDE),
        longitude=_coerce_coordinate(data.get("longitude"), DEFAULT_LONGITUDE),
        language=language,
    )


PreferencesCallback = Callable[[UserPreferences], None]


class PreferenceStore:
    """
    Read and write UserPreferences in LocalStorage.

    Every successful `save()` notifies subscribers, so writers in this
    process can trigger a refetch without waiting for a cross-process
    storage event.
    """

    def __init__(self, storage: LocalStorage, key: str = PREFERENCES_KEY):
        self.storage = storage
        self.key = key
        self._subscribers: List[PreferencesCallback] = []

    def load(self) -> UserPreferences:
        """Return stored preferences, or defaults when absent or malformed."""
        raw = self.storage.get_item(self.key)
        if raw is None:
            return UserPreferences()
        try:
            return parse_preferences(raw)
        except PreferenceParseError as e:
            logger.warning("Error parsing user preferences: %s; using defaults", e)
            return UserPreferences()

    def save(self, prefs: UserPreferences) -> None:
        """Persist preferences. Write failures are logged, not raised."""
        try:
            self.storage.set_item(self.key, json.dumps(asdict(prefs), ensure_ascii=False))
        except OSError as e:
            logger.error("Could not save user preferences to %s: %s", self.storage.path, e)
            return
        logger.info(
            "Saved user preferences: lat=%.4f, lon=%.4f, lang=%s",
            prefs.latitude, prefs.longitude, prefs.language,
        )
        for callback in list(self._subscribers):
            callback(prefs)

    def subscribe(self, callback: PreferencesCallback) -> Callable[[], None]:
        """Register a callback fired after every save. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
