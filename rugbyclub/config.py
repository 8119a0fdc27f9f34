"""Club configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import ClubConfig
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'data' / 'club_config.json'


@lru_cache(maxsize=1)
def get_config() -> ClubConfig:
    """
    Load club configuration from rugbyclub/data/club_config.json.

    Configuration is cached after first load.

    Returns:
        ClubConfig object with validated settings

    Raises:
        FileNotFoundError: If club_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from rugbyclub.config import get_config
        config = get_config()
        print(f"Current season: {config.current_season}")
    """
    return load_json(DEFAULT_CONFIG_PATH, schema=ClubConfig)


def get_club_name() -> str:
    """Get the club display name from config."""
    return get_config().club_name


def get_current_season() -> int:
    """Get the current season from config."""
    return get_config().current_season


def get_reports_dir() -> Path:
    """Get the default output directory for generated reports."""
    return Path(get_config().reports_dir)


def get_log_dir() -> Path:
    """Get the directory log files are written to."""
    return Path(get_config().log_dir)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
