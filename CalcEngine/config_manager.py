# config_manager.py
import json
import logging
from pathlib import Path

from . import error as E

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"

DEFAULT_SETTINGS = {
    "angle_mode": "rad",
    "decimal_places": 7,
    "debug": False,
    "copy_result": False,
}


def load_setting_value(key_value):
    """Return one setting, or all of them for key_value == "all".

    Missing keys fall back to DEFAULT_SETTINGS; an unreadable file yields the
    defaults only.
    """
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            loaded = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.debug("Using default settings (%s)", e)
        loaded = {}

    if isinstance(loaded, dict):
        settings_dict.update(loaded)
    else:
        logger.warning("Ignoring %s: expected a JSON object", config_json)


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value))


def decimal_places(settings_dict):
    """Validated 'decimal_places' value of a settings dict."""
    value = settings_dict.get("decimal_places", DEFAULT_SETTINGS["decimal_places"])
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 15:
        raise E.ConfigError(E.ERROR_MESSAGES["5502"] + str(value), code="5502")
    return value


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError as e:
        raise E.ConfigError(E.ERROR_MESSAGES["5503"] + str(e), code="5503")
