"""Configuration management for Feature Rotate

Settings live in a JSON file (``~/.feature_rotate/config.json`` by default).
A missing file yields the defaults; unknown keys are kept as-is.
"""

import copy
import json
import logging
import os

from feature_rotate.constants import (
    CONFIG_DIR_NAME, CONFIG_FILE_NAME, DEFAULT_HIT_TOLERANCE, DEFAULT_RESOLUTION,
)
from feature_rotate.utils.logger import loggerRaise

_logger = logging.getLogger('Config')

DEFAULT_CONFIG = {
    'hit_tolerance': DEFAULT_HIT_TOLERANCE,  # Pixels
    'log_level': 'WARNING',
    'show_pivot': True,
    'resolution': DEFAULT_RESOLUTION,  # Map units per pixel
}

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def get_config_path():
    """Default config file location in the user's home directory"""
    return os.path.join(os.path.expanduser('~'), CONFIG_DIR_NAME, CONFIG_FILE_NAME)


def _validate(config):
    """Raise ValueError/TypeError for settings of the wrong type or range"""
    hit_tolerance = config['hit_tolerance']
    if isinstance(hit_tolerance, bool) or not isinstance(hit_tolerance, (int, float)):
        raise TypeError(f"hit_tolerance must be a number, got {hit_tolerance!r}")
    if hit_tolerance < 0:
        raise ValueError(f"hit_tolerance must be >= 0, got {hit_tolerance}")

    resolution = config['resolution']
    if isinstance(resolution, bool) or not isinstance(resolution, (int, float)):
        raise TypeError(f"resolution must be a number, got {resolution!r}")
    if resolution <= 0:
        raise ValueError(f"resolution must be positive, got {resolution}")

    if not isinstance(config['show_pivot'], bool):
        raise TypeError(f"show_pivot must be true or false, got {config['show_pivot']!r}")

    log_level = config['log_level']
    if not isinstance(log_level, str) or log_level.upper() not in _LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}")


def load_config(path=None):
    """Load settings merged over DEFAULT_CONFIG

    Args:
        path: Config file path (defaults to get_config_path())

    Returns:
        dict: Complete settings
    """
    path = path or get_config_path()
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not os.path.exists(path):
        _logger.debug(f"No config file at {path}, using defaults")
        return config

    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise TypeError(f"Config root must be a JSON object, got {type(loaded).__name__}")
        config.update(loaded)
        _validate(config)
    except Exception as e:
        loggerRaise(e, f"Error loading config from {path}", "Configuration Error")

    _logger.debug(f"Loaded config from {path}")
    return config


def save_config(config, path=None):
    """Write settings to ``path``, creating the directory if needed"""
    path = path or get_config_path()
    try:
        _validate({**DEFAULT_CONFIG, **config})
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=2)
    except Exception as e:
        loggerRaise(e, f"Error saving config to {path}", "Configuration Error")
    _logger.debug(f"Saved config to {path}")
