"""
Configuration settings for Protouch.
All constants and configuration values centralized here.
"""

from pathlib import Path
import os

from dotenv import load_dotenv

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")  # Real environment variables take precedence
HOME_DIR = Path(os.getenv("PROTOUCH_HOME", str(PROJECT_ROOT)))
DATA_DIR = HOME_DIR / "data"
LOGS_DIR = HOME_DIR / "logs"
DB_PATH = Path(os.getenv("PROTOUCH_DB_PATH", str(DATA_DIR / "protouch.db")))

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Store keys (one persisted document per key)
STORE_REMINDERS = "protouch.reminders"
STORE_SAVED_TIPS = "protouch.saved.tips"
STORE_SETTINGS = "protouch.settings"
ALL_STORE_KEYS = (STORE_REMINDERS, STORE_SAVED_TIPS, STORE_SETTINGS)

# Reminder Configuration
REMINDER_INTERVALS = (10, 30, 60)  # Days
DEFAULT_REMINDER_INTERVAL = 10
MS_PER_DAY = 86_400_000

# Password Configuration
# Ambiguous glyphs (l, I, O, 0, 1) are left out of every class
PASSWORD_LOWER = "abcdefghijkmnopqrstuvwxyz"
PASSWORD_UPPER = "ABCDEFGHJKLMNPQRSTUVWXYZ"
PASSWORD_DIGITS = "23456789"
PASSWORD_DEFAULT_LENGTH = 16
PASSWORD_MIN_LENGTH = 3
PASSWORD_MASK_CHAR = "•"
PASSWORD_MASK_MIN = 8
PASSWORD_MASK_MAX = 24
PASSWORD_MASK_PLACEHOLDER = "*** • *** • *** • ***"

# Preference defaults
DEFAULT_SETTINGS = {
    "notifications": True,
    "vibration": True,
    "hideByDefault": True,
}

# System Configuration
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"

