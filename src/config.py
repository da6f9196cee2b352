# ABOUTME: Resolves the OpenWeatherMap API key from the host config file or the environment.
# ABOUTME: The config file is TOML; the environment is populated from .env via python-dotenv.

import logging
import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

from src.errors import ConfigError

logger = logging.getLogger(__name__)

API_KEY_NAME = "open_weather_api_key"
API_KEY_ENV = "OPEN_WEATHER_API_KEY"
CONFIG_PATH_ENV = "WEATHER_PLUGIN_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/nu/config.toml")

load_dotenv()


def config_path() -> Path:
    """Location of the host config file, overridable via WEATHER_PLUGIN_CONFIG."""
    return Path(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)).expanduser()


def read_config(path: Path | None = None) -> dict:
    """Load the host config file. A missing file is an empty config."""
    path = path or config_path()
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No config file at %s", path)
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}", label="config") from e


def resolve_api_key(config: dict | None = None) -> str:
    """Return the API key, preferring the config file over the environment.

    Raises ConfigError when neither source has a non-empty key.
    """
    if config is None:
        config = read_config()

    value = config.get(API_KEY_NAME)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"'{API_KEY_NAME}' must be a string")
    if value and value.strip():
        return value.strip()

    value = os.environ.get(API_KEY_ENV, "").strip()
    if value:
        return value

    raise ConfigError(f"Missing '{API_KEY_NAME}' key")
