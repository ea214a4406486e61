"""JSON-based settings persistence for the range calendar."""

import json
import logging
import os

from calendar_logic import SUNDAY, parse_weekday, weekday_name

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.environ.get(
    "RANGE_CALENDAR_SETTINGS",
    os.path.join(os.path.expanduser("~"), ".range-calendar-settings.json"),
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_COLORS = {
    "primary": "#F3F4F6",
    "secondary": "#BFDBFE",
    "overlap": "#BBF7D0",
    "hover": "#FECACA",
}

_DEFAULTS = {
    "week_start": weekday_name(SUNDAY),
    "log_level": "INFO",
    "colors": DEFAULT_COLORS,
}


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing or invalid keys."""
    settings = dict(_DEFAULTS)
    settings["colors"] = dict(DEFAULT_COLORS)
    try:
        with open(path or _SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file: expected an object")
        return settings

    if isinstance(stored.get("week_start"), str):
        try:
            settings["week_start"] = weekday_name(parse_weekday(stored["week_start"]))
        except ValueError:
            logger.warning("Ignoring week_start %r", stored["week_start"])
    level = stored.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        settings["log_level"] = level.upper()
    if isinstance(stored.get("colors"), dict):
        for key, value in stored["colors"].items():
            if key in DEFAULT_COLORS and isinstance(value, str):
                settings["colors"][key] = value
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def week_start_of(settings: dict) -> int:
    """Return the configured week start as a ``calendar`` weekday constant."""
    try:
        return parse_weekday(settings.get("week_start", ""))
    except ValueError:
        return SUNDAY
