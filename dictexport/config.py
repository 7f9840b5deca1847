import copy
import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from dictexport.exceptions import ConfigError
from dictexport.logger import clear_log_mode_cache, get_logger

logger = get_logger(__name__)

# Export pacing/progress defaults
DEFAULT_PACING_DELAY = 0.15  # Seconds to wait after each translated record
DEFAULT_PROGRESS_EVERY = 25  # Report progress every N translated records
DEFAULT_PREVIEW_LIMIT = 10  # Rows shown in the export summary preview

DEFAULT_TRANSLATE_URL = "https://translate.argosopentech.com/translate"

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = Path(os.environ.get("DICTEXPORT_CONFIG", CONFIG_DIR / "config.json"))

# Default configuration template
DEFAULT_CONFIG = {
    "source_dictionary": "dictionary.txt",
    "output_dir": ".",
    "source_language": "es",
    "translation": {
        "api_url": DEFAULT_TRANSLATE_URL,
        "timeout": 30,
        "pacing_delay": DEFAULT_PACING_DELAY,
        "progress_every": DEFAULT_PROGRESS_EVERY,
    },
    "targets": [
        {"code": "es", "output": "spanishdictionary.js", "mode": "identity-by-word"},
        {"code": "en", "output": "englishdictionary.js", "mode": "identity-by-english-equivalent"},
        {"code": "fr", "output": "frenchdictionary.js", "mode": "translate"},
        {"code": "hi", "output": "hindidictionary.js", "mode": "translate"},
        {"code": "vi", "output": "vietnamesedictionary.js", "mode": "translate"},
        {"code": "zh", "output": "mandarindictionary.js", "mode": "translate"},
    ],
    "log_mode": "info"
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base; nested dicts merge, everything else replaces."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def create_default_config():
    """Create the default config.json file."""
    save_config(DEFAULT_CONFIG)
    logger.info(f"Created default config file: {CONFIG_FILE}")


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the configuration from the JSON config file.

    Values in the file are merged over DEFAULT_CONFIG. A missing or corrupt
    file falls back to the defaults.
    """
    config_path = Path(path) if path else CONFIG_FILE
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config file {config_path}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)
    except OSError as e:
        logger.error(f"Failed to read config file {config_path}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(stored, dict):
        logger.error(f"Config file {config_path} does not contain a JSON object")
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug(f"Configuration loaded from {config_path}")
    return _deep_merge(DEFAULT_CONFIG, stored)


def save_config(config: Dict[str, Any], path: Optional[Path] = None):
    """Save the configuration to the JSON config file."""
    config_path = Path(path) if path else CONFIG_FILE
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
        logger.info(f"Configuration saved to {config_path}")
        clear_log_mode_cache()
    except Exception as e:
        logger.error(f"Failed to save config to {config_path}: {e}")
        raise


def get_translation_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return validated translation settings (api_url, timeout, pacing_delay, progress_every).

    Raises:
        ConfigError: If pacing or progress cadence is out of range.
    """
    settings = _deep_merge(DEFAULT_CONFIG["translation"], config.get("translation") or {})

    try:
        pacing_delay = float(settings["pacing_delay"])
        progress_every = int(settings["progress_every"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid translation settings: {e}")

    if pacing_delay < 0:
        raise ConfigError(
            "pacing_delay must not be negative",
            details={"pacing_delay": pacing_delay},
        )
    if progress_every < 1:
        raise ConfigError(
            "progress_every must be at least 1",
            details={"progress_every": progress_every},
        )

    settings["pacing_delay"] = pacing_delay
    settings["progress_every"] = progress_every
    return settings
