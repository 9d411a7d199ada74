import json
import os

from comparators import lookup_name

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "gridsort")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
ARROWS_DEFAULT = {"ascending": "▴", "descending": "▾"}
COLUMN_OVERRIDES_DEFAULT = {}
LOG_LEVEL_DEFAULT = "WARNING"
LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    try:
        os.makedirs(CONFIG_DIR, exist_ok=True)
    except OSError:
        pass


def load_config():
    cfg = {
        "ARROWS": dict(ARROWS_DEFAULT),
        "COLUMN_OVERRIDES": dict(COLUMN_OVERRIDES_DEFAULT),
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    arrows = data.get("arrows")
    if isinstance(arrows, dict):
        for direction in ("ascending", "descending"):
            glyph = arrows.get(direction)
            if isinstance(glyph, str):
                cfg["ARROWS"][direction] = glyph

    overrides = data.get("column_overrides")
    if isinstance(overrides, dict):
        for column, name in overrides.items():
            if not isinstance(column, str) or not isinstance(name, str):
                continue
            resolved = lookup_name(name)
            if resolved is None:
                continue
            cfg["COLUMN_OVERRIDES"][column] = resolved.value

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
