"""
Common configuration settings used throughout streamutil.

This module centralizes the logging format and loads user-specific defaults
from an external YAML file, so that the pid-file location, the stream URL and
the default conversion mode can be changed without touching the source code.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

# --- User-Defined Configuration ---
# Loaded from 'config.user.yaml' at the project root when present.

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_PATH = PROJECT_ROOT / "config.user.yaml"

# Name of the conversion mode used when none is given on the command line.
# One of "translit", "ignore" or "replace".
DEFAULT_TRANSCODE_MODE = "translit"


def load_user_config(config_path: Path = USER_CONFIG_PATH) -> Dict[str, Any]:
    """
    Reads the user configuration file and returns its contents as a dictionary.

    A missing file is not an error: the application then runs on built-in
    defaults. A file that cannot be read or parsed is logged and ignored.

    Args:
        config_path: Location of the YAML file to read.

    Returns:
        The parsed mapping, or an empty dictionary.
    """
    if not config_path.is_file():
        logger.debug(f"User config '{config_path}' not found. Using built-in defaults.")
        return {}

    try:
        with config_path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load or parse '{config_path}': {e}")
        return {}

    if not isinstance(user_config, dict):
        logger.warning(f"Ignoring '{config_path}': top level is not a mapping.")
        return {}
    return user_config


def _section(user_config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = user_config.get(name) or {}
    return section if isinstance(section, dict) else {}


def configured_pid_file(user_config: Dict[str, Any]) -> Optional[Path]:
    """Returns `pidfile.path` from the user config, if set."""
    path_str = _section(user_config, "pidfile").get("path")
    return Path(path_str) if path_str else None


def configured_stream_url(user_config: Dict[str, Any]) -> Optional[str]:
    """Returns `stream.url` from the user config, if set."""
    return _section(user_config, "stream").get("url") or None


def configured_transcode_mode(user_config: Dict[str, Any]) -> str:
    """Returns `transcode.mode` from the user config, or the built-in default."""
    return _section(user_config, "transcode").get("mode") or DEFAULT_TRANSCODE_MODE


# --- Logging Configuration ---

# The format string for the Loguru logger. It defines the structure and appearance
# of log messages, including timestamp, level, module name, and the message itself.
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{process} - <level>{message}</level>"
)
