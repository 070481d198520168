"""Meetup configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .schemas import MeetupConfig
from .utils import load_json

CONFIG_ENV_VAR = 'SPECIMEN_CONFIG'
REMOTE_URL_ENV_VAR = 'SPECIMEN_REMOTE_URL'
REMOTE_KEY_ENV_VAR = 'SPECIMEN_REMOTE_KEY'


def get_config_path() -> Path:
    """Config file location: $SPECIMEN_CONFIG or data/meetup_config.json."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).parent.parent / 'data' / 'meetup_config.json'


@lru_cache(maxsize=1)
def get_config() -> MeetupConfig:
    """
    Load meetup configuration.

    A missing config file gives the defaults. Remote store credentials can be
    supplied through SPECIMEN_REMOTE_URL / SPECIMEN_REMOTE_KEY, which take
    precedence over the file. Configuration is cached after first load.

    Raises:
        ValueError: If the config file has invalid structure
    """
    path = get_config_path()
    config = load_json(path, schema=MeetupConfig) if path.exists() else MeetupConfig()

    overrides = {}
    if os.environ.get(REMOTE_URL_ENV_VAR):
        overrides['remote_url'] = os.environ[REMOTE_URL_ENV_VAR]
    if os.environ.get(REMOTE_KEY_ENV_VAR):
        overrides['remote_key'] = os.environ[REMOTE_KEY_ENV_VAR]
    if overrides:
        config = config.model_copy(update=overrides)

    return config


def get_state_path() -> Path:
    """Get path of the saved meetup state."""
    return Path(get_config().state_path)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this after changing the config file or environment at runtime.
    """
    get_config.cache_clear()
