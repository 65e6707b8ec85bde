"""Configuration management for stabilometry."""

import logging
import os
import tomllib

from pathlib import Path
from typing import Any

import tomli_w

from stabilometry.constants import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_FILE,
    EllipseConstants,
)

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """
    Get the path to the configuration file.

    Returns:
        Path to ~/.stabilometry/config.toml
    """
    return DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE


def load_config() -> dict[str, Any]:
    """
    Load configuration from TOML file.

    Returns:
        Configuration dictionary. Returns empty dict if file doesn't exist
        or is corrupted.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Treating config as empty. Fix or delete the file to resolve.")
        return {}


def save_config(config: dict[str, Any]) -> None:
    """
    Save configuration to TOML file using atomic write.

    Creates the parent directory if it doesn't exist.
    Uses temp file + rename for atomic operation.

    Args:
        config: Configuration dictionary to save

    Raises:
        PermissionError: If directory cannot be created or file cannot be written
    """
    config_path = get_config_path()

    config_dir = config_path.parent
    try:
        os.makedirs(config_dir, exist_ok=True)
    except PermissionError as e:
        raise PermissionError(
            f"Cannot create config directory {config_dir}: {e}"
        ) from e

    temp_path = config_path.with_suffix(".toml.tmp")

    try:
        with open(temp_path, "wb") as f:
            tomli_w.dump(config, f)

        os.replace(temp_path, config_path)

    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


def get_ellipse_point_count() -> int:
    """
    Get the number of boundary points used when sampling confidence ellipses.

    Returns:
        Configured point count, or the built-in default when unset or invalid
    """
    value = load_config().get("analysis", {}).get("ellipse_points")

    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value

    if value is not None:
        logger.warning(
            f"Ignoring invalid analysis.ellipse_points={value!r}, "
            f"using {EllipseConstants.DEFAULT_POINT_COUNT}"
        )
    return EllipseConstants.DEFAULT_POINT_COUNT


def set_ellipse_point_count(count: int) -> None:
    """
    Persist the default ellipse boundary point count.

    Args:
        count: Number of points, must be positive

    Raises:
        ValueError: If count is not positive
    """
    if count <= 0:
        raise ValueError(f"Ellipse point count must be positive, got {count}")

    config = load_config()
    config.setdefault("analysis", {})["ellipse_points"] = count
    save_config(config)
