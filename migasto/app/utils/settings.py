"""
This module contains utility functions for handling the app settings and the persisted authentication token.
Both are stored in yaml files under the user directory and are read on every call, so edits made in the settings
page take effect on the next request.

settings.yaml:
    backend_url: https://my-backend.example.com/api
    request_timeout: 30
    log_level: INFO

credentials.yaml:
    token: my_token
"""
import math
import os
import yaml

from migasto import SETTINGS_PATH, CREDENTIALS_PATH, DEFAULT_BACKEND_URL, DEFAULT_REQUEST_TIMEOUT
from migasto.logging_setup import get_logger


logger = get_logger(__name__)

DEFAULT_SETTINGS = {
    'backend_url': DEFAULT_BACKEND_URL,
    'request_timeout': DEFAULT_REQUEST_TIMEOUT,
    'log_level': 'INFO',
}


def _load_yaml(path: str) -> dict:
    try:
        with open(path, 'r') as file:
            data = yaml.safe_load(file)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        logger.warning('ignoring unreadable file %s: %s', path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning('ignoring %s, expected a mapping but got %s', path, type(data).__name__)
        return {}
    return data


def _is_valid_setting(key: str, value) -> bool:
    if key == 'request_timeout':
        return (isinstance(value, (int, float)) and not isinstance(value, bool)
                and math.isfinite(value) and value > 0)
    return isinstance(value, str) and bool(value.strip())


def _save_yaml(path: str, data: dict) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w') as file:
        yaml.dump(data, file)


def load_settings() -> dict:
    """
    Load the app settings, falling back to the defaults for every missing or invalid key. the request timeout
    must be a positive number, the other settings non empty strings.

    Returns
    -------
    dict
        the settings dictionary, always containing all the keys of ``DEFAULT_SETTINGS``
    """
    settings = DEFAULT_SETTINGS.copy()
    for key, value in _load_yaml(SETTINGS_PATH).items():
        if key not in DEFAULT_SETTINGS or value is None:
            continue
        if not _is_valid_setting(key, value):
            logger.warning('invalid value for setting %s: %r, using the default', key, value)
            continue
        settings[key] = value
    return settings


def save_settings(settings: dict) -> None:
    """Save the app settings, keys that are not part of ``DEFAULT_SETTINGS`` are dropped."""
    _save_yaml(SETTINGS_PATH, {k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})


def load_token() -> str | None:
    """
    Load the persisted authentication token.

    Returns
    -------
    str | None
        the token, or None if no token is stored
    """
    token = _load_yaml(CREDENTIALS_PATH).get('token')
    return str(token) if token else None


def save_token(token: str | None) -> None:
    """Persist the authentication token, an empty token removes the stored one."""
    credentials = _load_yaml(CREDENTIALS_PATH)
    if token:
        credentials['token'] = token.strip()
    else:
        credentials.pop('token', None)
    _save_yaml(CREDENTIALS_PATH, credentials)
