"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from typing import Optional

from arduinokit.core.exceptions import InstallationError
from arduinokit.core.interfaces import FailureReporter, SettingsProvider
from arduinokit.settings.arduino_settings import ArduinoSettings, InitializationResult
from arduinokit.settings.user_config import (
    StaticSettings,
    YamlSettings,
    get_default_settings_file,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Output
# ============================================================================


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to ASCII-safe characters if Unicode symbols can't be encoded.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = message.replace("✓", "[OK]").replace("✗", "[FAIL]")
        print(safe_message.encode("ascii", "replace").decode("ascii"), file=file)


# ============================================================================
# Settings Initialization
# ============================================================================


class CliFailureReporter(FailureReporter):
    """Report installation failures on stderr and point at the settings file."""

    def __init__(self, settings_file=None, stream=None):
        self.settings_file = settings_file or get_default_settings_file()
        self.stream = stream

    def report(self, error: InstallationError) -> None:
        safe_print(f"Error: {error}", file=self.stream or sys.stderr)

    def request_settings(self) -> None:
        safe_print(
            f"Set arduino.path in {self.settings_file} or pass --arduino-path.",
            file=self.stream or sys.stderr,
        )


def create_settings_provider(args) -> SettingsProvider:
    """
    Build the settings provider for parsed CLI arguments.

    --arduino-path takes precedence over the YAML settings file.
    """
    arduino_path: Optional[str] = getattr(args, "arduino_path", None)
    if arduino_path:
        return StaticSettings(arduino_path)
    return YamlSettings(getattr(args, "settings", None))


def initialize_settings(args, reporter: Optional[FailureReporter] = None) -> InitializationResult:
    """
    Initialize ArduinoSettings from parsed CLI arguments.

    Args:
        args: Parsed arguments with arduino_path/settings fields
        reporter: Failure reporter (defaults to CliFailureReporter)

    Raises:
        SettingsFileError: If the YAML settings file is malformed
    """
    provider = create_settings_provider(args)
    if reporter is None:
        reporter = CliFailureReporter(getattr(args, "settings", None))
    return ArduinoSettings.initialize(settings=provider, reporter=reporter)
