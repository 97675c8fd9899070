"""
Arduino IDE settings resolution.

This package locates the Arduino IDE installation, derives its paths,
reads the IDE preferences and builds the runtime tool registry.
"""

from .arduino_settings import ArduinoSettings, InitializationResult
from .data_paths import DataPathResolver, DataPaths
from .installation import (
    InstallationPathResolver,
    InstallationProber,
    InstallationResult,
    validate_arduino_path,
)
from .preferences import PreferencesStore, parse_config_file
from .tool_registry import ToolProperties, ToolRegistryBuilder, tool_key
from .user_config import StaticSettings, YamlSettings

__all__ = [
    "ArduinoSettings",
    "InitializationResult",
    "DataPathResolver",
    "DataPaths",
    "InstallationPathResolver",
    "InstallationProber",
    "InstallationResult",
    "validate_arduino_path",
    "PreferencesStore",
    "parse_config_file",
    "ToolProperties",
    "ToolRegistryBuilder",
    "tool_key",
    "StaticSettings",
    "YamlSettings",
]
