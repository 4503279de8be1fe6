"""Configuration handling for WishGallery.

Uses lazy initialization to avoid crashes in read-only environments.
"""

import codecs
import configparser
import os
import traceback
from dataclasses import dataclass
from typing import Optional

from wish_gallery.utils.logging_config import ensure_handlers_initialized, log_function, logger

REDUCE_MOTION_MODES = ("system", "on", "off")


@dataclass
class GalleryConfig:
    """Configuration settings for WishGallery."""
    max_images: int = 5
    max_size_mb: int = 2
    auto_advance_ms: int = 5000
    transition_ms: int = 500
    motion_delay_ms: int = 100
    motion_duration_ms: int = 8000
    reduce_motion: str = "system"
    last_open_dir: str = ""

# ----------------------------- Configuration Handling -----------------------------

CONFIG_FILE = os.path.expanduser("~/.wish_gallery/config.ini")

_INT_SETTINGS = (
    "max_images",
    "max_size_mb",
    "auto_advance_ms",
    "transition_ms",
    "motion_delay_ms",
    "motion_duration_ms",
)

# Module-level state for lazy initialization
_directories_initialized = False
_directories_error: Optional[str] = None


def _ensure_directories() -> bool:
    """Lazily create the config directory on first use.

    Returns:
        True if the directory is accessible, False otherwise
    """
    global _directories_initialized, _directories_error

    if _directories_initialized:
        return _directories_error is None

    ensure_handlers_initialized()

    try:
        config_dir = os.path.dirname(CONFIG_FILE)
        if config_dir and not os.path.isdir(config_dir):
            os.makedirs(config_dir, exist_ok=True)
        _directories_error = None
    except (OSError, PermissionError) as e:
        _directories_error = str(e)
        logger.warning(f"Could not create config directory: {e}")

    _directories_initialized = True
    return _directories_error is None


@log_function
def load_config() -> GalleryConfig:
    """Load configuration from config file.

    Returns:
        GalleryConfig dataclass with all settings
    """
    _ensure_directories()

    config = configparser.ConfigParser()
    result = GalleryConfig()
    defaults = GalleryConfig()
    if os.path.exists(CONFIG_FILE):
        try:
            with codecs.open(CONFIG_FILE, "r", encoding="utf-8") as f:
                config.read_file(f)

            for name in _INT_SETTINGS:
                try:
                    value = config.getint("Settings", name)
                    if value <= 0:
                        logger.warning(f"Invalid {name} in config ({value}), defaulting to {getattr(defaults, name)}.")
                    else:
                        setattr(result, name, value)
                        logger.info(f"Loaded {name} from config: {value}")
                except (configparser.NoSectionError, configparser.NoOptionError):
                    logger.info(f"{name} not found in config, defaulting to {getattr(defaults, name)}.")
                except ValueError:
                    logger.warning(f"Non-integer {name} in config, defaulting to {getattr(defaults, name)}.")

            try:
                mode = config.get("Settings", "reduce_motion").strip().lower()
                if mode not in REDUCE_MOTION_MODES:
                    logger.warning(f"Invalid reduce_motion in config ({mode}), defaulting to system.")
                else:
                    result.reduce_motion = mode
                    logger.info(f"Loaded reduce_motion from config: {mode}")
            except (configparser.NoSectionError, configparser.NoOptionError):
                logger.info("reduce_motion not found in config, defaulting to system.")

            try:
                result.last_open_dir = config.get("Settings", "last_open_dir")
            except (configparser.NoSectionError, configparser.NoOptionError):
                logger.info("last_open_dir not found in config, defaulting to empty.")
        except Exception as e:
            logger.error(f"Error reading config file: {e}")
            logger.debug(traceback.format_exc())
            return GalleryConfig()
    else:
        logger.warning("Config file not found. Using default settings.")
    return result


@log_function
def save_config(cfg: GalleryConfig) -> None:
    """Save configuration to config file.

    Args:
        cfg: GalleryConfig dataclass with all settings
    """
    if not _ensure_directories():
        logger.error(f"Cannot save config: {_directories_error}")
        return

    config = configparser.ConfigParser()
    config.add_section("Settings")
    for name in _INT_SETTINGS:
        config.set("Settings", name, str(getattr(cfg, name)))
    config.set("Settings", "reduce_motion", cfg.reduce_motion)
    config.set("Settings", "last_open_dir", cfg.last_open_dir)
    try:
        with codecs.open(CONFIG_FILE, "w", encoding="utf-8") as configfile:
            config.write(configfile)
        logger.info(f"Configuration saved: {cfg}")
    except Exception as e:
        logger.error(f"Error saving configuration: {e}")
        logger.debug(traceback.format_exc())
