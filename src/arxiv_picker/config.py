"""Configuration loading. The picker reads config.json but never writes it."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from arxiv_picker.models import (
    ARXIV_API_TIMEOUT,
    CONFIG_APP_NAME,
    DEFAULT_PDF_DOWNLOAD_DIR,
    DEFAULT_RELAY_URL,
    MAX_RESULTS,
    PDF_DOWNLOAD_TIMEOUT,
    UserConfig,
)
from arxiv_picker.query import clamp_max_results

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/arxiv-picker/config.json
    - macOS: ~/Library/Application Support/arxiv-picker/config.json
    - Windows: %APPDATA%/arxiv-picker/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def get_download_dir(config: UserConfig) -> Path:
    """Resolve the PDF download directory (``~/arxiv-pdfs`` by default)."""
    if config.download_dir:
        return Path(config.download_dir).expanduser()
    return Path.home() / DEFAULT_PDF_DOWNLOAD_DIR


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    # bool is an int subclass; never accept it where a count is expected
    if expected_type is int and isinstance(value, bool):
        return default
    if not isinstance(value, expected_type):
        return default
    return value


def _positive_int(data: dict, key: str, default: int) -> int:
    value = _safe_get(data, key, default, int)
    return value if value > 0 else default


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Build a UserConfig from parsed JSON, falling back per field."""
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")

    relay_url = _safe_get(data, "relay_url", DEFAULT_RELAY_URL, str).strip()
    return UserConfig(
        download_dir=_safe_get(data, "download_dir", "", str),
        use_relay=_safe_get(data, "use_relay", False, bool),
        relay_url=relay_url or DEFAULT_RELAY_URL,
        max_results=clamp_max_results(_safe_get(data, "max_results", MAX_RESULTS, int)),
        request_timeout=_positive_int(data, "request_timeout", ARXIV_API_TIMEOUT),
        download_timeout=_positive_int(data, "download_timeout", PDF_DOWNLOAD_TIMEOUT),
        theme_name=_safe_get(data, "theme_name", "monokai", str),
        version=_safe_get(data, "version", 1, int),
    )


def load_config() -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        return _dict_to_config(data)
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return UserConfig()
    except (KeyError, TypeError) as e:
        logger.warning("Config file has invalid structure, using defaults: %s", e)
        return UserConfig()
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "get_config_path",
    "get_download_dir",
    "load_config",
]
