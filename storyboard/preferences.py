# storyboard/preferences.py

import json
import logging
import os

from storyboard.settings import PREFERENCES_PATH

logger = logging.getLogger("storyboard_client")

DISPLAY_NAME_KEY = "workshopName"


class DisplayNamePreference:
    """The display name remembered across sessions, kept in a small JSON file."""

    def __init__(self, path: str = PREFERENCES_PATH):
        self.path = path

    def _read(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring unreadable preferences at {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> str:
        value = self._read().get(DISPLAY_NAME_KEY, "")
        return value if isinstance(value, str) else ""

    def save(self, name: str) -> None:
        data = self._read()
        data[DISPLAY_NAME_KEY] = name
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save display name to {self.path}: {e}")
