"""
Centralized exception hierarchy for ArduinoKit.

Only installation failures are surfaced to users. Missing preferences,
failed registry lookups and packages without tools are expected states and
are handled where they occur instead of being raised.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class ArduinoKitError(Exception):
    """Base exception for all ArduinoKit errors."""

    pass


class UnsupportedPlatformError(ArduinoKitError):
    """Raised when the running OS has no Arduino IDE layout."""

    def __init__(self, os_name: str):
        self.os_name = os_name
        super().__init__(f"Unsupported operating system: {os_name}")


# ============================================================================
# Installation Exceptions
# ============================================================================


class InstallationError(ArduinoKitError):
    """Base exception for Arduino installation resolution failures."""

    pass


class ArduinoPathNotFoundError(InstallationError):
    """Raised when no installation path can be obtained from any source."""

    def __init__(self):
        super().__init__(
            'Cannot find the arduino installation path. Please specify the "arduino.path" '
            "in the user settings. Requires a restart after change."
        )


class InvalidArduinoPathError(InstallationError):
    """Raised when a path was obtained but holds no Arduino executable."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f'Cannot find arduino executable program under directory "{path}". '
            'Please set the correct "arduino.path" in the user settings. '
            "Requires a restart after change."
        )


# ============================================================================
# Configuration Exceptions
# ============================================================================


class SettingsFileError(ArduinoKitError):
    """Raised when the user settings file cannot be parsed."""

    pass
