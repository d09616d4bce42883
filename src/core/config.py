"""
Admin console configuration - all settings come from the environment.
"""

import os

# Debug flag (API docs routes, verbose launcher output)
DEBUG = os.getenv("DEBUG", "true").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Front end selection
ADMIN_UI_TYPE = os.getenv("ADMIN_UI_TYPE", "tui")  # tui|web

# Business display settings
CURRENCY = os.getenv("CURRENCY", "KSh")
EGGS_PER_TRAY = int(os.getenv("EGGS_PER_TRAY", "30"))
DATE_DISPLAY_FORMAT = os.getenv("DATE_DISPLAY_FORMAT", "%d/%m/%Y")

# Version string
VERSION = "1.0.0"

VALID_UI_TYPES = ["tui", "web"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def get_ui_type():
    """Get configured front end (tui|web)."""
    return ADMIN_UI_TYPE


def validate_admin_config():
    """Validate admin configuration and return any issues."""
    issues = []

    if ADMIN_UI_TYPE not in VALID_UI_TYPES:
        issues.append(f"Invalid ADMIN_UI_TYPE: {ADMIN_UI_TYPE}. Must be one of {VALID_UI_TYPES}")

    if LOG_LEVEL not in VALID_LOG_LEVELS:
        issues.append(f"Invalid LOG_LEVEL: {LOG_LEVEL}")

    if EGGS_PER_TRAY < 1:
        issues.append("EGGS_PER_TRAY must be >= 1")

    if not CURRENCY.strip():
        issues.append("CURRENCY must not be empty")

    return issues
