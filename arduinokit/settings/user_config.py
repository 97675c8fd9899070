"""
User settings store for ArduinoKit.

Holds the overrides a user configures explicitly, most importantly
``arduino.path``. Settings live in a YAML file:

    Windows:      %USERPROFILE%\\.arduinokit\\settings.yaml
    Linux/macOS:  ~/.arduinokit/settings.yaml

The ARDUINOKIT_SETTINGS environment variable points to an alternate file.
Both flat dotted keys and nested mappings are accepted:

    arduino.path: /opt/arduino-1.8.19

    arduino:
      path: /opt/arduino-1.8.19
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..core.exceptions import SettingsFileError
from ..core.interfaces import SettingsProvider

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "ARDUINOKIT_SETTINGS"
ARDUINO_PATH_KEY = "arduino.path"


def get_settings_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the platform-specific ArduinoKit settings directory.

    Returns:
        Path: %USERPROFILE%\\.arduinokit on Windows, ~/.arduinokit elsewhere
    """
    environ = os.environ if environ is None else environ

    if os.name == "nt":
        user_profile = environ.get("USERPROFILE")
        if user_profile:
            return Path(user_profile) / ".arduinokit"
    return Path.home() / ".arduinokit"


def get_default_settings_file(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Get the settings file path, honouring ARDUINOKIT_SETTINGS."""
    environ = os.environ if environ is None else environ

    override = environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_settings_dir(environ) / "settings.yaml"


def load_settings_file(settings_file: Path) -> Dict[str, Any]:
    """
    Load and parse the YAML settings file.

    Args:
        settings_file: Path to the settings file

    Returns:
        Settings dictionary (empty if the file doesn't exist)

    Raises:
        SettingsFileError: If the file cannot be read or is not a YAML mapping
    """
    if not settings_file.exists():
        logger.debug(f"Settings file not found (optional): {settings_file}")
        return {}

    logger.debug(f"Loading settings from {settings_file}")

    try:
        with open(settings_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsFileError(f"Invalid YAML in {settings_file}: {e}")
    except OSError as e:
        raise SettingsFileError(f"Cannot read settings file {settings_file}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsFileError(
            f"Settings file {settings_file} must contain a mapping, got {type(data).__name__}"
        )
    return data


def lookup_setting(settings: Dict[str, Any], key_path: str) -> Optional[Any]:
    """
    Look up a dotted key, accepting either a flat key or nested mappings.

    Example:
        >>> lookup_setting({"arduino": {"path": "/opt/arduino"}}, "arduino.path")
        '/opt/arduino'
    """
    if key_path in settings:
        return settings[key_path]

    value: Any = settings
    for key in key_path.split("."):
        if not isinstance(value, dict) or key not in value:
            return None
        value = value[key]
    return value


class YamlSettings(SettingsProvider):
    """
    Settings provider backed by the YAML settings file.

    The file is read once, on first access.
    """

    def __init__(self, settings_file: Optional[Path] = None):
        self.settings_file = settings_file or get_default_settings_file()
        self._data: Optional[Dict[str, Any]] = None

    @property
    def data(self) -> Dict[str, Any]:
        if self._data is None:
            self._data = load_settings_file(self.settings_file)
        return self._data

    def get_arduino_path(self) -> Optional[str]:
        value = lookup_setting(self.data, ARDUINO_PATH_KEY)
        if value is None:
            return None
        return str(value)


class StaticSettings(SettingsProvider):
    """Settings provider holding a fixed override, e.g. from the command line."""

    def __init__(self, arduino_path: Optional[str] = None):
        self.arduino_path = arduino_path

    def get_arduino_path(self) -> Optional[str]:
        return self.arduino_path


__all__ = [
    "SETTINGS_ENV_VAR",
    "ARDUINO_PATH_KEY",
    "get_settings_dir",
    "get_default_settings_file",
    "load_settings_file",
    "lookup_setting",
    "YamlSettings",
    "StaticSettings",
]
