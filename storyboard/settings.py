# storyboard/settings.py

import os

from dotenv import load_dotenv

load_dotenv()

# --- Server ---
DATA_PATH = os.getenv("STORYBOARD_DATA_PATH", os.path.join("data", "notes.json"))
HOST = os.getenv("STORYBOARD_HOST", "0.0.0.0")
PORT = int(os.getenv("STORYBOARD_PORT", "8000"))

# --- Client ---
API_URL = os.getenv("STORYBOARD_API_URL", "http://localhost:8000")
REQUEST_TIMEOUT = float(os.getenv("STORYBOARD_REQUEST_TIMEOUT", "10"))
POLL_INTERVAL = float(os.getenv("STORYBOARD_POLL_INTERVAL", "5.0"))
DRAG_THRESHOLD = int(os.getenv("STORYBOARD_DRAG_THRESHOLD", "5"))
DELETE_CONFIRM_SECONDS = float(os.getenv("STORYBOARD_DELETE_CONFIRM_SECONDS", "2.5"))
PREFERENCES_PATH = os.getenv(
    "STORYBOARD_PREFERENCES_PATH",
    os.path.join(os.path.expanduser("~"), ".storyboard", "preferences.json"),
)

LOG_LEVEL = os.getenv("STORYBOARD_LOG_LEVEL", "INFO")
