"""
Configuration loader — reads .prettier-setup.yml into SetupSettings.

The file is optional.  When present it is parsed with PyYAML and
validated against the Pydantic schema; anything wrong with it is a
ConfigError, never a silent fallback to defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from prettier_setup.core.models.settings import SetupSettings

logger = logging.getLogger(__name__)

# Default config filename, looked up in the target project root
SETUP_CONFIG_FILE = ".prettier-setup.yml"


class ConfigError(Exception):
    """Raised when setup configuration is invalid or unreadable."""


def default_config_path(project_root: Path) -> Path:
    """Get the default config file path for a project."""
    return project_root / SETUP_CONFIG_FILE


def load_settings(project_root: Path, path: Path | None = None) -> SetupSettings:
    """Load and validate setup settings.

    Args:
        project_root: Target project directory.
        path: Explicit config file.  If None, uses
            ``<project_root>/.prettier-setup.yml`` when it exists.

    Returns:
        Validated SetupSettings (defaults if there is no config file).

    Raises:
        ConfigError: If an explicit file is missing, or any file is
            unreadable or invalid.
    """
    if path is None:
        path = default_config_path(project_root)
        if not path.is_file():
            logger.debug("No %s in %s — using defaults", SETUP_CONFIG_FILE, project_root)
            return SetupSettings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading setup config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SetupSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = SetupSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid setup configuration in {path}: {e}") from e

    logger.info("Loaded setup config from %s", path)
    return settings
